"""
Game engine for Minesweeper.

Layers the player operations (step, flag, chord) over a Board and
enforces the cell state machine. The engine never tracks flags or game
state itself; those belong to the session.
"""
from enum import Enum, auto
from typing import List, Tuple

import numpy as np

from .board import Board, Position
from .cell import Cell


class StepResult(Enum):
    """Outcome of a reveal command."""

    CONTINUE = auto()
    BOOM = auto()


# ============================================================================
# Engine
# ============================================================================

class Engine:
    """
    Operation surface over a single board.

    Out-of-bounds positions raise IndexError. Commands on a cell in the
    wrong state are no-ops, since clicks can race against rendering.
    """

    def __init__(self, board: Board) -> None:
        """Wrap a freshly built board."""
        self.board = board

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.board.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.board.height

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return self.board.mine_count

    def cell(self, x: int, y: int) -> Cell:
        """Get cell at position; raises IndexError off the board."""
        return self.board.cell(x, y)

    # ========================================================================
    # Commands
    # ========================================================================

    def step(self, x: int, y: int) -> StepResult:
        """
        Reveal a hidden cell.

        A mine explodes. An empty cell with no adjacent mines floods
        outward through its zero-count neighbors.

        Args:
            x: Column.
            y: Row.

        Returns:
            BOOM if a mine was hit, CONTINUE otherwise (including no-ops).
        """
        cell = self.board.cell(x, y)
        if not cell.reveal():
            return StepResult.CONTINUE
        if cell.is_exploded:
            return StepResult.BOOM
        if cell.adjacent_mines == 0:
            self._flood_fill(x, y)
        return StepResult.CONTINUE

    def _flood_fill(self, x: int, y: int) -> None:
        """Reveal the region around a zero cell, stopping at numbers."""
        # A cell is pushed only after its HIDDEN -> REVEALED transition,
        # so each position is expanded at most once.
        stack: List[Position] = [(x, y)]
        while stack:
            current_x, current_y = stack.pop()
            for nx, ny in self.board.neighbors(current_x, current_y):
                neighbor = self.board.cell(nx, ny)
                # Zero cells have no mine neighbors; flagged ones are skipped.
                if not neighbor.reveal():
                    continue
                if neighbor.adjacent_mines == 0:
                    stack.append((nx, ny))

    def toggle_flag(self, x: int, y: int) -> int:
        """
        Toggle flag on a hidden or flagged cell.

        Returns:
            Flag delta for the caller's counter: +1, -1, or 0 for a no-op.
        """
        return self.board.cell(x, y).toggle_flag()

    def try_resolve_step(self, x: int, y: int) -> StepResult:
        """
        Chord on a revealed numbered cell.

        When exactly as many neighbors are flagged as the cell's number,
        every other hidden neighbor is stepped on. Any other flag count is
        a no-op.

        Returns:
            BOOM as soon as a stepped neighbor is a mine, else CONTINUE.
        """
        cell = self.board.cell(x, y)
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return StepResult.CONTINUE
        if self.flagged_neighbors(x, y) != cell.adjacent_mines:
            return StepResult.CONTINUE

        for nx, ny in self.board.neighbors(x, y):
            if not self.board.cell(nx, ny).is_hidden:
                continue
            if self.step(nx, ny) == StepResult.BOOM:
                return StepResult.BOOM
        return StepResult.CONTINUE

    # ========================================================================
    # Queries
    # ========================================================================

    def is_cleared(self) -> bool:
        """Check if every non-mine cell is revealed. Flags do not matter."""
        return all(
            cell.is_revealed
            for _, cell in self.board.cells()
            if not cell.is_mine
        )

    def flagged_neighbors(self, x: int, y: int) -> int:
        """Count flagged cells adjacent to position."""
        return sum(
            1
            for nx, ny in self.board.neighbors(x, y)
            if self.board.cell(nx, ny).is_flagged
        )

    def revealed_count(self) -> int:
        """Count revealed empty cells."""
        return sum(1 for _, cell in self.board.cells() if cell.is_revealed)

    def get_observation(self) -> np.ndarray:
        """Get board state as a numpy array."""
        return self.board.get_observation()

    def get_valid_actions(self) -> List[Tuple[int, int]]:
        """
        Get positions that can still be stepped on.

        Returns:
            List of (x, y) positions of hidden cells.
        """
        return [pos for pos, cell in self.board.cells() if cell.is_hidden]
