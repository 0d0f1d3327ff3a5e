"""Unit tests for frame outcome resolution."""

from app.models.fields import Player
from app.services.outcome_service import (
    is_frame_decided,
    resolve_frame_winner,
    winner_from_scores,
)
from tests.helpers import make_frame, make_match


class TestWinnerFromScores:
    """Tests for the plain score comparison."""

    def test_higher_score_wins(self) -> None:
        assert winner_from_scores(64, 30) == Player.player_a
        assert winner_from_scores(12, 71) == Player.player_b

    def test_level_scores_are_undecided(self) -> None:
        assert winner_from_scores(0, 0) is None
        assert winner_from_scores(45, 45) is None


class TestResolveFrameWinner:
    """Tests for resolve_frame_winner()."""

    def setup_method(self) -> None:
        self.match = make_match()

    def test_scores_decide_without_explicit_winner(self) -> None:
        frame = make_frame(self.match, 1, score_a=70, score_b=22)
        assert resolve_frame_winner(frame) == Player.player_a

    def test_explicit_winner_matching_scores(self) -> None:
        frame = make_frame(self.match, 1, score_a=10, score_b=60, winner=Player.player_b)
        assert resolve_frame_winner(frame) == Player.player_b

    def test_explicit_winner_overrides_scores(self) -> None:
        """A contradicting explicit winner is returned verbatim."""
        frame = make_frame(self.match, 1, score_a=80, score_b=5, winner=Player.player_b)
        assert resolve_frame_winner(frame) == Player.player_b

    def test_explicit_winner_on_level_scores(self) -> None:
        frame = make_frame(self.match, 1, score_a=0, score_b=0, winner=Player.player_a)
        assert resolve_frame_winner(frame) == Player.player_a

    def test_zero_zero_is_undecided(self) -> None:
        frame = make_frame(self.match, 1)
        assert resolve_frame_winner(frame) is None
        assert not is_frame_decided(frame)

    def test_level_non_zero_is_undecided(self) -> None:
        frame = make_frame(self.match, 1, score_a=50, score_b=50)
        assert resolve_frame_winner(frame) is None

    def test_stored_string_value_is_accepted(self) -> None:
        """Rows read back from storage may carry the raw enum value."""
        frame = make_frame(self.match, 1, score_a=1, score_b=60)
        frame.winner = "player_a"  # type: ignore[assignment]
        assert resolve_frame_winner(frame) == Player.player_a

    def test_empty_winner_falls_back_to_scores(self) -> None:
        frame = make_frame(self.match, 1, score_a=1, score_b=60)
        frame.winner = ""  # type: ignore[assignment]
        assert resolve_frame_winner(frame) == Player.player_b
        assert is_frame_decided(frame)
