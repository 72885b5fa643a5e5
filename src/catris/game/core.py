from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

import numpy as np

from .events import EventBus, GameOver, LinesCleared, PieceLocked, ScoreChanged, StateChanged
from .grid import GameGrid, Position
from .pieces import Piece, random_piece, rotate
from .rules import ScoringRules, clear_lines
from .timer import ManualScheduler, Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class Phase(Enum):
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    LINE_CLEARING = "line-clearing"
    GAME_OVER = "game-over"


class Command(str, Enum):
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    SOFT_DROP = "soft-drop"
    HARD_DROP = "hard-drop"
    ROTATE = "rotate"
    TOGGLE_PAUSE = "toggle-pause"
    RESET = "reset"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    tick_ms: int = 1000
    spawn_y: int = -2
    # A lock that leaves blocks in this many top rows ends the game
    top_out_rows: int = 2
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if not 0 <= self.top_out_rows <= self.height:
            raise ValueError(f"top_out_rows must be within [0, {self.height}], got {self.top_out_rows}")


@dataclass
class GameState:
    grid: GameGrid
    score: int = 0
    lines_cleared_total: int = 0
    current_piece: Optional[Piece] = None
    position: Position = field(default_factory=lambda: Position(0, 0))
    next_piece: Optional[Piece] = None
    paused: bool = False
    phase: Phase = Phase.SPAWNING

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


class FallingBlockGame:
    """Tick-driven falling-block game.

    The engine owns its `GameState` and a single gravity timer obtained from
    `scheduler`. Every gravity tick and every input command runs to completion
    before returning. Observers learn about changes through `events`.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        scheduler: Optional[Scheduler] = None,
        events: Optional[EventBus] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.scheduler = scheduler or ManualScheduler()
        self.events = events or EventBus()
        self.rng = random.Random(self.config.random_seed)
        self.state = GameState(grid=GameGrid(self.config.width, self.config.height))
        self._timer: Optional[TimerHandle] = None
        self._handlers: Dict[Command, Callable[[], object]] = {
            Command.MOVE_LEFT: lambda: self.move(-1),
            Command.MOVE_RIGHT: lambda: self.move(1),
            Command.SOFT_DROP: self.soft_drop,
            Command.HARD_DROP: self._hard_drop_and_lock,
            Command.ROTATE: self.rotate,
        }

    def start(self) -> None:
        self.reset()

    def stop(self) -> None:
        self._cancel_timer()

    def reset(self) -> None:
        # The old timer must be gone before a new one is installed
        self._cancel_timer()
        self.state.grid.reset()
        self.state.score = 0
        self.state.lines_cleared_total = 0
        self.state.current_piece = None
        self.state.next_piece = None
        self.state.paused = False
        self.state.phase = Phase.SPAWNING
        self.events.publish(ScoreChanged(0))
        if self._spawn():
            self._timer = self.scheduler.schedule_interval(self.config.tick_ms, self.tick)
        self.events.publish(StateChanged("reset"))

    @property
    def timer(self) -> Optional[TimerHandle]:
        return self._timer

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def tick(self) -> bool:
        """Advance gravity by one row. Returns True if the piece moved."""
        if self.state.paused or self.state.game_over or self.state.current_piece is None:
            return False
        moved = self._step_down()
        self.events.publish(StateChanged("tick"))
        return moved

    def _step_down(self) -> bool:
        st = self.state
        target = st.position.moved(dy=1)
        if st.grid.is_valid_move(st.current_piece, target):
            st.position = target
            return True
        self._lock()
        return False

    def handle_command(self, command: object) -> bool:
        """Apply one input command. Returns True if the state changed."""
        try:
            command = Command(command)
        except (ValueError, TypeError):
            logger.debug("ignoring unknown command %r", command)
            return False

        if command is Command.RESET:
            self.reset()
            return True
        if command is Command.TOGGLE_PAUSE:
            return self.toggle_pause()
        if self.state.paused or self.state.game_over:
            return False
        return bool(self._handlers[command]())

    def toggle_pause(self) -> bool:
        if self.state.game_over:
            return False
        self.state.paused = not self.state.paused
        self.events.publish(StateChanged("pause" if self.state.paused else "resume"))
        return True

    def _active(self) -> bool:
        st = self.state
        return st.current_piece is not None and not st.paused and not st.game_over

    def move(self, dx: int) -> bool:
        if not self._active():
            return False
        st = self.state
        target = st.position.moved(dx=dx)
        if not st.grid.is_valid_move(st.current_piece, target):
            return False
        st.position = target
        self.events.publish(StateChanged("move"))
        return True

    def rotate(self) -> bool:
        if not self._active():
            return False
        st = self.state
        rotated = rotate(st.current_piece)
        if not st.grid.is_valid_move(rotated, st.position):
            return False
        st.current_piece = rotated
        self.events.publish(StateChanged("rotate"))
        return True

    def soft_drop(self) -> bool:
        """Move down one row; a piece that cannot move locks in place."""
        if not self._active():
            return False
        self._step_down()
        self.events.publish(StateChanged("soft-drop"))
        return True

    def hard_drop(self) -> int:
        """Drop to the floor and lock. Returns the number of rows fallen."""
        if not self._active():
            return 0
        rows = 0
        while self._step_down():
            rows += 1
        self.events.publish(StateChanged("hard-drop"))
        return rows

    def _hard_drop_and_lock(self) -> bool:
        # An active piece always locks, even when it was already resting
        self.hard_drop()
        return True

    def ghost_position(self) -> Optional[Position]:
        st = self.state
        if st.current_piece is None:
            return None
        pos = st.position
        while st.grid.is_valid_move(st.current_piece, pos.moved(dy=1)):
            pos = pos.moved(dy=1)
        return pos

    def _lock(self) -> None:
        st = self.state
        piece, position = st.current_piece, st.position
        st.phase = Phase.LOCKING
        st.grid.merge(piece, position)
        st.current_piece = None
        logger.debug("locked %s at %s", piece.kind.name, position)
        self.events.publish(PieceLocked(piece.kind, position))

        topped_out = st.grid.rows_occupied(self.config.top_out_rows)

        st.phase = Phase.LINE_CLEARING
        result = clear_lines(st.grid.cells, self.rules)
        if result.lines_cleared:
            st.grid.replace(result.board)
            st.score += result.score_delta
            st.lines_cleared_total += result.lines_cleared
            logger.debug("cleared rows %s for %d points", result.rows, result.score_delta)
            self.events.publish(LinesCleared(result.lines_cleared, tuple(result.rows)))
            self.events.publish(ScoreChanged(st.score))

        if topped_out:
            self._end_game("top-out")
            return
        self._spawn()

    def _spawn(self) -> bool:
        st = self.state
        st.phase = Phase.SPAWNING
        if st.next_piece is None:
            st.next_piece = random_piece(self.rng)
        piece = st.next_piece
        st.next_piece = random_piece(self.rng)
        st.current_piece = piece
        st.position = Position(self.config.width // 2 - piece.size // 2, self.config.spawn_y)
        if not st.grid.is_valid_move(piece, st.position):
            self._end_game("spawn blocked")
            return False
        st.phase = Phase.FALLING
        logger.debug("spawned %s, next %s", piece.kind.name, st.next_piece.kind.name)
        return True

    def _end_game(self, reason: str) -> None:
        self.state.phase = Phase.GAME_OVER
        self._cancel_timer()
        logger.debug("game over (%s) with score %d", reason, self.state.score)
        self.events.publish(GameOver(self.state.score, reason))

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid; negative marks the falling piece
        state = self.state.grid.clone_state()
        piece = self.state.current_piece
        if piece is not None and not self.state.game_over:
            for x, y in piece.cells_at(self.state.position.x, self.state.position.y):
                if self.state.grid.is_inside(x, y):
                    state[y, x] = -int(piece.kind)
        return state
