"""
Unit tests for text rendering.
"""
from minesweep import Board, GameSession, render_status, render_text


class TestRenderText:
    """Test board glyphs."""

    def test_new_board_is_all_hidden(self, chord_session: GameSession) -> None:
        assert render_text(chord_session) == "\n".join([". . . ."] * 4)

    def test_revealed_numbers_and_blanks(self, manual_timer) -> None:
        session = GameSession(board=Board.from_mines(3, 1, [(2, 0)]), timer=manual_timer)
        session.step(0, 0)
        session.toggle_flag(2, 0)
        assert render_text(session) == "  1 F"

    def test_stopped_board_shows_mines_and_wrong_flags(
        self, chord_session: GameSession
    ) -> None:
        chord_session.toggle_flag(1, 0)
        chord_session.step(0, 0)
        lines = render_text(chord_session).split("\n")
        assert lines[0] == "* X . ."
        assert lines[2] == ". . M ."

    def test_correct_flag_stays_after_win(self, manual_timer) -> None:
        session = GameSession(board=Board.from_mines(2, 1, [(1, 0)]), timer=manual_timer)
        session.toggle_flag(1, 0)
        session.step(0, 0)
        assert session.is_stopped is True
        assert render_text(session) == "1 F"


class TestRenderStatus:
    """Test the counters line."""

    def test_ready_status(self, chord_session: GameSession) -> None:
        assert render_status(chord_session) == "Mines 2 | Flags 0 | Time 0 | Ready"

    def test_running_status_has_no_text(self, chord_session: GameSession) -> None:
        chord_session.step(3, 3)
        assert render_status(chord_session) == "Mines 2 | Flags 0 | Time 0"

    def test_over_flag_marker(self, chord_session: GameSession) -> None:
        for pos in [(0, 0), (1, 0), (2, 0)]:
            chord_session.toggle_flag(*pos)
        assert "Flags 3!" in render_status(chord_session)

    def test_lost_status(self, chord_session: GameSession) -> None:
        chord_session.step(0, 0)
        assert render_status(chord_session).endswith("You lost.")

    def test_won_status(self, manual_timer) -> None:
        session = GameSession(board=Board.from_mines(1, 1, []), timer=manual_timer)
        session.step(0, 0)
        assert render_status(session).endswith("You WIN!")
