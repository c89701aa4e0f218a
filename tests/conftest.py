"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import List

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweep import Board, BoardConfig, Cell, Empty, Engine, GameSession, Mine


# ============================================================================
# Test Doubles
# ============================================================================

class ManualTimer:
    """Timer whose ticks are fed by the test instead of a thread."""

    def __init__(self) -> None:
        self.is_running = False
        self.starts = 0
        self.stops = 0
        self._pending: List[bool] = []

    def start(self) -> None:
        self.is_running = True
        self.starts += 1
        self._pending = []

    def stop(self) -> None:
        self.is_running = False
        self.stops += 1
        self._pending = []

    def tick(self, count: int = 1) -> None:
        if self.is_running:
            self._pending.extend([True] * count)

    def poll(self):
        if self._pending:
            return self._pending.pop(0)
        return None

    def drain(self) -> int:
        count = len(self._pending)
        self._pending = []
        return count


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 10x10 board with 10 mines."""
    return Board.build(BoardConfig())


@pytest.fixture
def center_mine_board() -> Board:
    """3x3 board with a single mine in the middle."""
    return Board.from_mines(3, 3, [(1, 1)])


@pytest.fixture
def corner_mine_board() -> Board:
    """5x5 board with a single mine in the top-left corner."""
    return Board.from_mines(5, 5, [(0, 0)])


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board.from_mines(5, 5, [])


@pytest.fixture
def chord_board() -> Board:
    """
    4x4 board for chording.

        M . . .
        . . . .
        . . M .
        . . . .

    (1, 1) has count 2.
    """
    return Board.from_mines(4, 4, [(0, 0), (2, 2)])


# ============================================================================
# Engine and Session Fixtures
# ============================================================================

@pytest.fixture
def chord_engine(chord_board: Board) -> Engine:
    return Engine(chord_board)


@pytest.fixture
def manual_timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture
def chord_session(chord_board: Board, manual_timer: ManualTimer) -> GameSession:
    """Session over the chord board with a hand-driven timer."""
    return GameSession(board=chord_board, timer=manual_timer)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden empty cell."""
    return Cell(Empty(0))


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(Mine())


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(Empty(3))
    cell.reveal()
    return cell
