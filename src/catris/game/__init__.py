"""Game module for catris.

Exports the core game engine and supporting classes:
- GameGrid: Grid representation, collision checks and row compaction
- Piece: Tetromino piece with clockwise rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Line-clear scoring table and helpers
- EventBus: Fire-and-forget delivery of engine events
- FallingBlockGame: Main game loop and state management
"""

from .grid import GameGrid, Position, compact_rows, is_valid_move
from .pieces import BASE_SHAPES, Piece, TetrominoType, random_piece, rotate
from .rules import LineClear, ScoringRules, clear_lines
from .events import EventBus, GameEvent, GameOver, LinesCleared, PieceLocked, ScoreChanged, StateChanged
from .timer import ManualScheduler, Scheduler, TimerHandle
from .core import Command, FallingBlockGame, GameConfig, GameState, Phase

__all__ = [
    "GameGrid",
    "Position",
    "compact_rows",
    "is_valid_move",
    "BASE_SHAPES",
    "Piece",
    "TetrominoType",
    "random_piece",
    "rotate",
    "LineClear",
    "ScoringRules",
    "clear_lines",
    "EventBus",
    "GameEvent",
    "GameOver",
    "LinesCleared",
    "PieceLocked",
    "ScoreChanged",
    "StateChanged",
    "ManualScheduler",
    "Scheduler",
    "TimerHandle",
    "Command",
    "FallingBlockGame",
    "GameConfig",
    "GameState",
    "Phase",
]
