"""
Game session for Minesweeper.

Coordinates one engine, one timer and the flag counter through the
Ready -> Running -> Won/Lost state machine. A new game is a new session;
sessions are never reset in place.
"""
import logging
import random
from enum import Enum, auto
from typing import Optional

from .board import Board, BoardConfig
from .cell import Cell
from .engine import Engine, StepResult
from .timer import SessionTimer


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of a session."""

    READY = auto()
    RUNNING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_stopped(self) -> bool:
        return self in (GameState.WON, GameState.LOST)

    @property
    def is_won(self) -> bool:
        return self == GameState.WON


# ============================================================================
# Session
# ============================================================================

class GameSession:
    """
    A single game from first click to win or loss.

    Features:
        - Starts the timer on the first cell command
        - Stops on explosion or once every empty cell is revealed
        - Counts placed flags from the engine's flag deltas
        - Optional first-click safety via BoardConfig.safe_first_click
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        board: Optional[Board] = None,
        timer: Optional[SessionTimer] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            config: Board configuration (default: 10x10 with 10 mines).
                Ignored in favor of board.config when a board is given.
            board: Pre-built board, mainly for scripted games.
            timer: Timer to drive seconds_elapsed.
            rng: Random source for mine placement.
        """
        if board is not None:
            config = board.config
        self.config = config or BoardConfig()
        self._rng = rng
        self.engine = Engine(board or Board.build(self.config, rng=rng))
        self.timer = timer or SessionTimer()
        self.placed_flags = 0
        self.seconds_elapsed = 0
        self.game_state = GameState.READY

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def width(self) -> int:
        return self.engine.width

    @property
    def height(self) -> int:
        return self.engine.height

    @property
    def mine_count(self) -> int:
        return self.engine.mine_count

    @property
    def flags_remaining(self) -> int:
        """Mines minus placed flags. Negative when over-flagged."""
        return self.mine_count - self.placed_flags

    @property
    def is_over_flagged(self) -> bool:
        return self.placed_flags > self.mine_count

    @property
    def is_stopped(self) -> bool:
        return self.game_state.is_stopped

    def cell(self, x: int, y: int) -> Cell:
        return self.engine.cell(x, y)

    def is_cleared(self) -> bool:
        return self.engine.is_cleared()

    # ========================================================================
    # Commands
    # ========================================================================

    def step(self, x: int, y: int) -> StepResult:
        """Reveal a cell, starting the game if needed."""
        if self.is_stopped:
            return StepResult.CONTINUE
        self._require_position(x, y)
        if self.config.safe_first_click and self.engine.revealed_count() == 0:
            self._ensure_safe_first_step(x, y)
        self._check_ready_to_running()
        result = self.engine.step(x, y)
        self._after_command(result)
        return result

    def toggle_flag(self, x: int, y: int) -> int:
        """
        Toggle a flag, starting the game if needed.

        Returns:
            The flag delta that was applied to placed_flags.
        """
        if self.is_stopped:
            return 0
        self._require_position(x, y)
        self._check_ready_to_running()
        delta = self.engine.toggle_flag(x, y)
        self.placed_flags += delta
        self._after_command(StepResult.CONTINUE)
        return delta

    def try_resolve_step(self, x: int, y: int) -> StepResult:
        """Chord on a revealed number, starting the game if needed."""
        if self.is_stopped:
            return StepResult.CONTINUE
        self._require_position(x, y)
        self._check_ready_to_running()
        result = self.engine.try_resolve_step(x, y)
        self._after_command(result)
        return result

    def update(self) -> int:
        """
        Count elapsed seconds; call once per frame.

        Every buffered tick is drained so no second is lost to frame jitter.

        Returns:
            Number of ticks counted this call.
        """
        if self.game_state != GameState.RUNNING:
            return 0
        ticks = self.timer.drain()
        self.seconds_elapsed += ticks
        return ticks

    def close(self) -> None:
        """Stop the timer; call when discarding the session."""
        self.timer.stop()

    # ========================================================================
    # State Machine (Low-level)
    # ========================================================================

    def _require_position(self, x: int, y: int) -> None:
        # Raises IndexError before any state changes.
        self.engine.cell(x, y)

    def _check_ready_to_running(self) -> None:
        if self.game_state == GameState.READY:
            self.game_state = GameState.RUNNING
            self.timer.start()
            logger.debug("Game started")

    def _after_command(self, result: StepResult) -> None:
        if result == StepResult.BOOM:
            self._game_over(False)
        elif self.engine.is_cleared():
            self._game_over(True)

    def _game_over(self, is_won: bool) -> None:
        self.game_state = GameState.WON if is_won else GameState.LOST
        self.timer.stop()
        logger.info(
            "Game %s after %d seconds", "won" if is_won else "lost",
            self.seconds_elapsed,
        )

    def _ensure_safe_first_step(self, x: int, y: int) -> None:
        """Swap in a board without a mine at (x, y), keeping flags."""
        cell = self.engine.cell(x, y)
        # Stepping a flagged cell is a no-op and must not move mines.
        if not (cell.is_hidden and cell.is_mine):
            return
        flagged = [
            pos for pos, cell in self.engine.board.cells() if cell.is_flagged
        ]
        board = Board.build(self.config, rng=self._rng, exclude=(x, y))
        for fx, fy in flagged:
            board.cell(fx, fy).toggle_flag()
        self.engine = Engine(board)
        logger.debug("Relocated mines away from first step at (%d, %d)", x, y)


def new_game(
    width: int,
    height: int,
    mine_count: int,
    safe_first_click: bool = False,
    rng: Optional[random.Random] = None,
) -> GameSession:
    """
    Start a fresh game.

    Raises:
        ValueError: If mine_count is not below width * height.
    """
    config = BoardConfig(width, height, mine_count, safe_first_click)
    return GameSession(config, rng=rng)
