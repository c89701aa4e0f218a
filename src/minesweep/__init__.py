"""
Minesweeper game package.

Provides the board, the game engine, the session timer and the session
state machine, plus a text renderer and a Gymnasium environment.
"""
from .cell import Cell, CellKind, CellState, Empty, Mine
from .board import Board, BoardConfig
from .engine import Engine, StepResult
from .timer import SessionTimer
from .session import GameSession, GameState, new_game
from .render import render_status, render_text
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellKind",
    "CellState",
    "Empty",
    "Mine",
    "Board",
    "BoardConfig",
    "Engine",
    "StepResult",
    "SessionTimer",
    "GameSession",
    "GameState",
    "new_game",
    "render_status",
    "render_text",
    "MinesweeperEnv",
]
