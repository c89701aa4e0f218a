"""
Text rendering of a game session.

Read-only: rendering never calls an engine command.
"""
from typing import List

from .cell import Cell, CellState
from .session import GameSession, GameState


HIDDEN_CHAR = "."
FLAG_CHAR = "F"
WRONG_FLAG_CHAR = "X"
MINE_CHAR = "M"
EXPLODED_CHAR = "*"
EMPTY_CHARS = [" ", "1", "2", "3", "4", "5", "6", "7", "8"]

STATUS_TEXT = {
    GameState.READY: "Ready",
    GameState.RUNNING: "",
    GameState.WON: "You WIN!",
    GameState.LOST: "You lost.",
}


def cell_char(cell: Cell, stopped: bool = False) -> str:
    """
    Get the glyph for one cell.

    Once the game is stopped, hidden mines are shown and flags on empty
    cells are marked as wrong.
    """
    if cell.state == CellState.HIDDEN:
        if stopped and cell.is_mine:
            return MINE_CHAR
        return HIDDEN_CHAR
    if cell.state == CellState.FLAGGED:
        if stopped and not cell.is_mine:
            return WRONG_FLAG_CHAR
        return FLAG_CHAR
    if cell.state == CellState.EXPLODED:
        return EXPLODED_CHAR
    return EMPTY_CHARS[cell.adjacent_mines]


def render_text(session: GameSession) -> str:
    """Render the board as one line per row, cells separated by spaces."""
    stopped = session.is_stopped
    lines = []
    for y in range(session.height):
        chars: List[str] = [
            cell_char(session.cell(x, y), stopped)
            for x in range(session.width)
        ]
        lines.append(" ".join(chars))
    return "\n".join(lines)


def render_status(session: GameSession) -> str:
    """Render the toolbar counters and game state text."""
    flags = str(session.placed_flags)
    if session.is_over_flagged:
        flags += "!"
    parts = [
        f"Mines {session.mine_count}",
        f"Flags {flags}",
        f"Time {session.seconds_elapsed}",
    ]
    status = STATUS_TEXT[session.game_state]
    if status:
        parts.append(status)
    return " | ".join(parts)
