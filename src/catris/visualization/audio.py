from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

from catris.game import EventBus, GameOver, LinesCleared, PieceLocked

logger = logging.getLogger(__name__)

SOUND_FILES: Dict[str, str] = {
    "drop": "meow-short.mp3",
    "clear": "wow-cat.mp3",
    "game_over": "sad-cat.mp3",
}


class AudioNotifier:
    """Plays a short sound on lock, line clear and game over.

    Missing files or an unavailable mixer leave the notifier silent. A small
    channel pool lets overlapping sounds play together.
    """

    def __init__(self, sound_dir: Optional[Path] = None, volume: float = 0.3, pool_size: int = 5) -> None:
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        if sound_dir is None:
            return
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.set_num_channels(pool_size)
        except pygame.error as exc:
            logger.warning("audio disabled, mixer unavailable: %s", exc)
            return
        for name, filename in SOUND_FILES.items():
            path = Path(sound_dir) / filename
            if not path.is_file():
                logger.warning("sound %s not found at %s", name, path)
                continue
            try:
                sound = pygame.mixer.Sound(str(path))
            except pygame.error as exc:
                logger.warning("could not load %s: %s", path, exc)
                continue
            sound.set_volume(volume)
            self._sounds[name] = sound

    @property
    def enabled(self) -> bool:
        return bool(self._sounds)

    def attach(self, events: EventBus) -> None:
        events.subscribe(lambda e: self.play("drop"), PieceLocked)
        events.subscribe(lambda e: self.play("clear"), LinesCleared)
        events.subscribe(lambda e: self.play("game_over"), GameOver)

    def play(self, name: str) -> None:
        sound = self._sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("could not play %s: %s", name, exc)
