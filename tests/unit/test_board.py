"""
Unit tests for Board class.

Tests board configuration, mine placement, adjacency counts and
observation generation.
"""
import random

import pytest
import numpy as np
from minesweep import Board, BoardConfig, CellState, Empty, Mine


def count_mines(board: Board) -> int:
    return sum(1 for _, cell in board.cells() if cell.is_mine)


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_default_config(self) -> None:
        """Defaults match a 10x10 board with 10 mines."""
        config = BoardConfig()
        assert (config.width, config.height, config.num_mines) == (10, 10, 10)
        assert config.safe_first_click is False

    def test_zero_width_raises_error(self) -> None:
        """Width of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_zero_height_raises_error(self) -> None:
        """Height of 0 should raise ValueError."""
        with pytest.raises(ValueError, match="dimensions must be positive"):
            BoardConfig(9, 0, 10)

    def test_negative_mines_raises_error(self) -> None:
        """Negative mine count should raise ValueError."""
        with pytest.raises(ValueError, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_mines_filling_board_raises_error(self) -> None:
        """mine_count must be below width * height."""
        with pytest.raises(ValueError, match="Too many mines"):
            BoardConfig(3, 3, 9)

    def test_max_mines_is_valid(self) -> None:
        """One free cell is enough."""
        config = BoardConfig(3, 3, 8)
        assert config.num_mines == 8


# ============================================================================
# Construction Tests
# ============================================================================

class TestBoardBuild:
    """Test random board construction."""

    @pytest.mark.parametrize(
        "width,height,mines",
        [(1, 1, 0), (3, 3, 1), (9, 9, 10), (16, 16, 40), (30, 16, 99), (4, 4, 15)],
    )
    def test_build_places_exact_mines_and_counts(
        self, width: int, height: int, mines: int
    ) -> None:
        """Exactly mine_count mines, all hidden, counts match neighbors."""
        board = Board.build(BoardConfig(width, height, mines))

        assert count_mines(board) == mines
        assert board.mine_count == mines
        for (x, y), cell in board.cells():
            assert cell.state == CellState.HIDDEN
            if not cell.is_mine:
                expected = sum(
                    1 for nx, ny in board.neighbors(x, y)
                    if board.cell(nx, ny).is_mine
                )
                assert cell.adjacent_mines == expected

    def test_build_is_reproducible_with_seeded_rng(self) -> None:
        """Same seed gives the same layout."""
        config = BoardConfig(9, 9, 10)
        first = Board.build(config, rng=random.Random(7))
        second = Board.build(config, rng=random.Random(7))
        assert first.mine_positions() == second.mine_positions()

    def test_build_respects_exclusion(self) -> None:
        """Excluded position never gets a mine."""
        config = BoardConfig(3, 3, 8)
        for seed in range(20):
            board = Board.build(config, rng=random.Random(seed), exclude=(1, 1))
            assert board.cell(1, 1).kind == Empty(8)

    def test_single_cell_board(self) -> None:
        """1x1 board with no mines has one Empty(0) cell."""
        board = Board.build(BoardConfig(1, 1, 0))
        assert board.cell(0, 0).kind == Empty(0)


class TestBoardFromMines:
    """Test fixed-layout construction."""

    def test_center_mine_counts(self, center_mine_board: Board) -> None:
        """Every cell around a lone center mine counts 1."""
        assert center_mine_board.cell(1, 1).kind == Mine()
        for (x, y), cell in center_mine_board.cells():
            if (x, y) != (1, 1):
                assert cell.kind == Empty(1)

    def test_counts_use_x_as_column(self) -> None:
        """Positions are (x, y) with x the column."""
        board = Board.from_mines(3, 2, [(2, 0)])
        assert board.cell(2, 0).is_mine is True
        assert board.cell(0, 0).adjacent_mines == 0
        assert board.cell(1, 1).adjacent_mines == 1

    def test_duplicate_mines_raise_error(self) -> None:
        """Two mines can't share a position."""
        with pytest.raises(ValueError, match="Duplicate"):
            Board.from_mines(3, 3, [(0, 0), (0, 0)])

    def test_off_board_mine_raises_error(self) -> None:
        """Mines must be on the board."""
        with pytest.raises(ValueError, match="off the board"):
            Board.from_mines(3, 3, [(3, 0)])

    def test_full_board_raises_error(self) -> None:
        """At least one cell must be empty."""
        with pytest.raises(ValueError, match="Too many mines"):
            Board.from_mines(1, 1, [(0, 0)])


# ============================================================================
# Neighbor and Access Tests
# ============================================================================

class TestNeighbors:
    """Test neighborhood and bounds handling."""

    def test_corner_has_three_neighbors(self, empty_board: Board) -> None:
        assert sorted(empty_board.neighbors(0, 0)) == [(0, 1), (1, 0), (1, 1)]

    def test_edge_has_five_neighbors(self, empty_board: Board) -> None:
        assert len(empty_board.neighbors(2, 0)) == 5

    def test_interior_has_eight_neighbors(self, empty_board: Board) -> None:
        neighbors = empty_board.neighbors(2, 2)
        assert len(neighbors) == 8
        assert (2, 2) not in neighbors

    def test_single_cell_has_no_neighbors(self) -> None:
        board = Board.from_mines(1, 1, [])
        assert board.neighbors(0, 0) == []

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (5, 0), (0, 5)])
    def test_out_of_bounds_cell_raises(
        self, empty_board: Board, x: int, y: int
    ) -> None:
        """Bad positions are caller bugs and fail loudly."""
        with pytest.raises(IndexError, match="outside"):
            empty_board.cell(x, y)

    def test_coordinates_cover_every_cell_once(self, empty_board: Board) -> None:
        coords = list(empty_board.coordinates())
        assert len(coords) == 25
        assert len(set(coords)) == 25


# ============================================================================
# Observation Tests
# ============================================================================

class TestObservation:
    """Test observation array."""

    def test_observation_shape_is_height_by_width(self) -> None:
        board = Board.from_mines(4, 2, [])
        obs = board.get_observation()
        assert obs.shape == (2, 4)
        assert obs.dtype == np.int8

    def test_new_board_observation_all_hidden(
        self, default_board: Board
    ) -> None:
        assert np.all(default_board.get_observation() == -1)

    def test_observation_indexed_by_row_then_column(self) -> None:
        board = Board.from_mines(3, 2, [])
        board.cell(2, 1).toggle_flag()
        obs = board.get_observation()
        assert obs[1, 2] == -2
