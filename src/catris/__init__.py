"""catris: a falling-block puzzle game with a headless engine and a pygame front end."""

__version__ = "0.1.0"
