"""
Cell module for Minesweeper.

A cell pairs an immutable kind (mine, or empty with an adjacency count)
with a mutable state (hidden/flagged/revealed/exploded). The two are kept
orthogonal; the legal combinations are enforced by the transitions below.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()
    EXPLODED = auto()


MAX_ADJACENT = 8


# ============================================================================
# Cell Kinds
# ============================================================================

@dataclass(frozen=True)
class Mine:
    """Kind of a cell holding a mine."""


@dataclass(frozen=True)
class Empty:
    """
    Kind of a mine-free cell.

    Attributes:
        count: Number of mines among the (up to 8) neighbors.
    """

    count: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.count <= MAX_ADJACENT:
            raise ValueError(
                f"Adjacent mine count must be in [0, {MAX_ADJACENT}], "
                f"got {self.count}"
            )


CellKind = Union[Mine, Empty]


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the Minesweeper grid.

    Attributes:
        kind: Mine or Empty(count); fixed once the board is built.
        state: Current visual state.
    """

    kind: CellKind
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        A mine becomes EXPLODED, an empty cell becomes REVEALED.

        Returns:
            True if the state changed, False if the cell was not hidden.
        """
        if self.state != CellState.HIDDEN:
            return False
        if self.is_mine:
            self.state = CellState.EXPLODED
        else:
            self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> int:
        """
        Toggle flag on this cell.

        Returns:
            +1 when a flag was placed, -1 when one was removed, 0 when the
            cell is revealed or exploded.
        """
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
            return 1
        if self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN
            return -1
        return 0

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return isinstance(self.kind, Mine)

    @property
    def adjacent_mines(self) -> int:
        """Adjacent mine count, 0 for a mine."""
        if isinstance(self.kind, Empty):
            return self.kind.count
        return 0

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_exploded(self) -> bool:
        """Check if cell is an exploded mine."""
        return self.state == CellState.EXPLODED

    def to_observation(self) -> int:
        """
        Convert cell to a numeric value for rendering and agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Exploded mine
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.state == CellState.EXPLODED:
            return 9
        return self.adjacent_mines
