"""Tests for the ELO ranking system and reward curves."""

import pytest

from scoreboard.elo import (
    REWARD_CURVES,
    REWARD_WEIGHTS,
    EloRank,
    TableZapMode,
    UnscoreableGameError,
    UnsupportedGameSizeError,
    _build_weights,
    reward_curve,
    reward_weight,
    supports_game_size,
)


class TestEloRank:
    """Tests for EloRank."""

    def test_equal_ratings_expect_half(self) -> None:
        """Test that equal ratings give an expected score of 0.5."""
        elo = EloRank()
        assert elo.get_expected(1500, 1500) == 0.5

    def test_higher_rating_expects_more(self) -> None:
        """Test that the stronger player is expected to score more."""
        elo = EloRank()
        assert elo.get_expected(1600, 1500) > 0.5
        assert elo.get_expected(1400, 1500) < 0.5

    def test_standard_scale(self) -> None:
        """Test that 400 points of difference means 10 to 1 odds."""
        elo = EloRank()
        assert elo.get_expected(1900, 1500) == pytest.approx(10 / 11)

    def test_win_between_equals(self) -> None:
        """Test the rating change for a win between equal players."""
        elo = EloRank()
        assert elo.rating_delta(1500, 1500, 1.0) == 16
        assert elo.rating_delta(1500, 1500, 0.0) == -16

    def test_half_score_between_equals_is_zero(self) -> None:
        """Test that scoring exactly as expected doesn't change the rating."""
        elo = EloRank()
        assert elo.rating_delta(1500, 1500, 0.5) == 0

    def test_custom_constants(self) -> None:
        """Test that K and D are configurable."""
        elo = EloRank(k_factor=40, deviation=800)
        assert elo.rating_delta(1500, 1500, 1.0) == 20
        assert elo.get_expected(2300, 1500) == pytest.approx(10 / 11)

    def test_delta_is_pure(self) -> None:
        """Test that the same inputs always give the same delta."""
        elo = EloRank()
        first = elo.rating_delta(1523, 1488, 0.25)
        second = elo.rating_delta(1523, 1488, 0.25)
        assert first == second

    def test_winner_below_average_gains(self) -> None:
        """Test that a winner rated at or below the average never loses."""
        elo = EloRank()
        for rating in (1200, 1400, 1500):
            assert elo.rating_delta(rating, 1500, 1.0) >= 0


class TestRewardCurves:
    """Tests for the reward curve table."""

    def test_two_player_weights_sum_to_one(self) -> None:
        """Test that a two player game hands out exactly one point."""
        assert reward_weight(2, 0) + reward_weight(2, 1) == 1.0

    def test_table_covers_supported_sizes(self) -> None:
        """Test that every supported size has a weight per position."""
        for num_players in range(2, 7):
            assert supports_game_size(num_players)
            for position in range(num_players):
                assert (num_players, position) in REWARD_WEIGHTS

    def test_curves_decrease(self) -> None:
        """Test that weights run from 1.0 down to 0."""
        for num_players in range(2, 7):
            curve = reward_curve(num_players)
            assert curve[0] == 1.0
            assert curve[-1] == 0.0
            assert curve == sorted(curve, reverse=True)

    def test_six_player_curve(self) -> None:
        """Test the softened landing for large pods."""
        assert reward_curve(6) == [1.0, 0.5, 0.25, 0.12, 0.05, 0.0]

    @pytest.mark.parametrize("num_players", [0, 1, 7, 8])
    def test_unsupported_sizes(self, num_players: int) -> None:
        """Test that sizes without a curve are rejected."""
        assert not supports_game_size(num_players)
        with pytest.raises(UnsupportedGameSizeError):
            reward_weight(num_players, 0)

    def test_position_out_of_range(self) -> None:
        """Test that positions past the last place are rejected."""
        with pytest.raises(UnsupportedGameSizeError):
            reward_weight(3, 3)

    def test_unsupported_size_is_unscoreable(self) -> None:
        """Test that size errors can be handled as unscoreable games."""
        assert issubclass(UnsupportedGameSizeError, UnscoreableGameError)


class TestBuildWeights:
    """Tests for reward table validation."""

    def test_missing_size(self) -> None:
        """Test that a missing game size fails at load."""
        curves = {k: v for k, v in REWARD_CURVES.items() if k != 4}
        with pytest.raises(ValueError, match="Missing reward curve for 4"):
            _build_weights(curves)

    def test_wrong_length(self) -> None:
        """Test that a curve of the wrong length fails at load."""
        curves = {**REWARD_CURVES, 3: (1.0, 0.0)}
        with pytest.raises(ValueError, match="3 players has 2 entries"):
            _build_weights(curves)

    def test_not_decreasing(self) -> None:
        """Test that an increasing curve fails at load."""
        curves = {**REWARD_CURVES, 4: (1.0, 0.25, 0.5, 0.0)}
        with pytest.raises(ValueError, match="not decreasing"):
            _build_weights(curves)

    def test_bad_endpoints(self) -> None:
        """Test that curves must start at 1.0 and end at 0."""
        curves = {**REWARD_CURVES, 2: (0.9, 0.1)}
        with pytest.raises(ValueError, match="must run from 1.0 to 0"):
            _build_weights(curves)


class TestTableZapMode:
    """Tests for TableZapMode."""

    def test_from_config_value(self) -> None:
        """Test that modes are read from their config names."""
        assert TableZapMode("ignore") is TableZapMode.IGNORE
        assert TableZapMode("collapseNonWinners") is TableZapMode.COLLAPSE_NON_WINNERS
