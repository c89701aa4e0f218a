"""
Board module for Minesweeper.

Implements the fixed-size grid of cells, random mine placement and
adjacency counting. Mine placement is final once a board is built.
"""
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, Empty, Mine


Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        safe_first_click: Relocate the board if the first step hits a mine.
    """

    width: int = 10
    height: int = 10
    num_mines: int = 10
    safe_first_click: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.width * self.height - 1
        if self.num_mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper grid.

    Owns every cell. Cells are addressed as (x, y), x being the column and
    y the row. Use `Board.build` for a random layout or `Board.from_mines`
    for a fixed one.
    """

    def __init__(self, config: BoardConfig, mines: Set[Position]) -> None:
        """
        Create the grid and compute adjacency counts.

        Args:
            config: Validated board configuration.
            mines: Distinct in-bounds mine positions.
        """
        self.config = config
        self._grid: List[List[Cell]] = []
        self._init_grid(mines)

    @classmethod
    def build(
        cls,
        config: BoardConfig,
        rng: Optional[random.Random] = None,
        exclude: Optional[Position] = None,
    ) -> "Board":
        """
        Build a board with randomly placed mines.

        Args:
            config: Board configuration.
            rng: Random source, defaults to the `random` module.
            exclude: Position that must stay mine-free.

        Returns:
            New board with every cell hidden.
        """
        positions = _all_positions(config.width, config.height)
        if exclude is not None:
            positions = [pos for pos in positions if pos != exclude]
        if config.num_mines > len(positions):
            raise ValueError(
                f"Cannot place {config.num_mines} mines in "
                f"{len(positions)} free cells"
            )
        sampler = rng if rng is not None else random
        mines = set(sampler.sample(positions, config.num_mines))
        return cls(config, mines)

    @classmethod
    def from_mines(
        cls, width: int, height: int, mines: Iterable[Position]
    ) -> "Board":
        """
        Build a board with mines at the given positions.

        Raises:
            ValueError: On duplicate or out-of-range positions, or if the
                mines would fill the board.
        """
        mine_list = list(mines)
        mine_set = set(mine_list)
        if len(mine_set) != len(mine_list):
            raise ValueError("Duplicate mine positions")
        config = BoardConfig(width, height, len(mine_set))
        for x, y in mine_set:
            if not (0 <= x < width and 0 <= y < height):
                raise ValueError(f"Mine position ({x}, {y}) is off the board")
        return cls(config, mine_set)

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self, mines: Set[Position]) -> None:
        """Create cells, counting mine neighbors for each empty one."""
        self._grid = []
        for y in range(self.config.height):
            row = []
            for x in range(self.config.width):
                if (x, y) in mines:
                    row.append(Cell(Mine()))
                else:
                    count = sum(
                        1 for pos in self.neighbors(x, y) if pos in mines
                    )
                    row.append(Cell(Empty(count)))
            self._grid.append(row)

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def neighbors(self, x: int, y: int) -> List[Position]:
        """
        Get valid neighboring positions (Moore neighborhood).

        Args:
            x: Column of center cell.
            y: Row of center cell.

        Returns:
            List of (x, y) tuples clipped at the board edges.
        """
        result = []
        for delta_y in (-1, 0, 1):
            for delta_x in (-1, 0, 1):
                if delta_x == 0 and delta_y == 0:
                    continue
                new_x = x + delta_x
                new_y = y + delta_y
                if self.in_bounds(new_x, new_y):
                    result.append((new_x, new_y))
        return result

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= x < self.config.width and 0 <= y < self.config.height

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.config.width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.config.height

    @property
    def mine_count(self) -> int:
        """Number of mines on the board."""
        return self.config.num_mines

    def cell(self, x: int, y: int) -> Cell:
        """
        Get cell at position.

        Raises:
            IndexError: If the position is outside the board.
        """
        if not self.in_bounds(x, y):
            raise IndexError(
                f"Position ({x}, {y}) is outside the "
                f"{self.width}x{self.height} board"
            )
        return self._grid[y][x]

    def coordinates(self) -> Iterator[Position]:
        """Iterate over every position, row by row."""
        return iter(_all_positions(self.width, self.height))

    def cells(self) -> Iterator[Tuple[Position, Cell]]:
        """Iterate over (position, cell) pairs, row by row."""
        for y, row in enumerate(self._grid):
            for x, cell in enumerate(row):
                yield (x, y), cell

    def mine_positions(self) -> List[Position]:
        """Get positions of all mines."""
        return [pos for pos, cell in self.cells() if cell.is_mine]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = exploded mine
        """
        obs = np.zeros((self.height, self.width), dtype=np.int8)
        for (x, y), cell in self.cells():
            obs[y, x] = cell.to_observation()
        return obs


def _all_positions(width: int, height: int) -> List[Position]:
    return [(x, y) for y in range(height) for x in range(width)]
