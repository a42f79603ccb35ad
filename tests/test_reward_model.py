"""Tests for the reward-rate and cost models."""

import itertools

import pytest

from lounge.constants import LoungeRules
from lounge.costs import invested_points, skill_upgrades, upgrade_cost
from lounge.errors import InvalidInputError, InvariantError
from lounge.reward_model import (
    active_boost,
    boost_multiplier,
    multiplier_grid,
    session_length,
    total_multiplier,
    validate_levels,
)


class TestBoosts:
    @pytest.mark.parametrize(
        "levels, expected",
        [
            ((5, 5, 0), 1.68),
            ((3, 3, 3), 1.59),
            ((7, 0, 0), 1.58),
            ((0, 0, 8), 1.58),
            ((5, 3, 0), 1.56),
            ((0, 3, 5), 1.56),
            ((4, 4, 2), 1.0),
            ((0, 0, 0), 1.0),
        ],
    )
    def test_tier_thresholds(self, levels, expected):
        assert boost_multiplier(levels) == expected

    def test_combo_beats_trio(self):
        assert active_boost((5, 5, 3)).name == "Lounge Combo Routine"

    def test_trio_beats_specialist(self):
        assert active_boost((7, 3, 3)).name == "Rest Trio Set"

    def test_specialist_beats_beginner(self):
        assert active_boost((7, 3, 0)).name == "Rest Specialist"

    def test_no_boost_is_none(self):
        assert active_boost((1, 2, 4)) is None


class TestMultiplier:
    def test_base_is_one(self):
        assert total_multiplier((0, 0, 0)) == 1.0

    def test_long_rest_lowers_rate(self):
        assert total_multiplier((1, 0, 0)) == pytest.approx(0.72)

    def test_product_of_skills(self):
        assert total_multiplier((0, 2, 1)) == pytest.approx(1.165 * 1.08)

    def test_boost_applied(self):
        assert total_multiplier((5, 5, 0)) == pytest.approx(0.26 * 1.47 * 1.68)

    def test_grid_matches_function(self):
        grid = multiplier_grid()
        assert grid.shape == (9, 9, 9)
        for levels in itertools.product(range(9), repeat=3):
            assert grid[levels] == pytest.approx(total_multiplier(levels))

    def test_session_length(self):
        assert session_length(0) == 2
        assert session_length(3) == 6
        assert session_length(8) == 60


class TestValidation:
    @pytest.mark.parametrize("levels", [(9, 0, 0), (-1, 0, 0), (0, 0), (1.5, 0, 0), (True, 0, 0)])
    def test_rejects(self, levels):
        with pytest.raises(InvalidInputError):
            validate_levels(levels)

    def test_returns_tuple(self):
        assert validate_levels([1, 2, 3]) == (1, 2, 3)

    def test_bad_rules_table(self):
        with pytest.raises(InvalidInputError):
            LoungeRules(cumulative_cost=(0, 15, 10, 45, 65, 85, 105, 125, 150))
        with pytest.raises(InvalidInputError):
            LoungeRules(hours_increase=(0, 1, 2))

    def test_input_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_levels((0, 0, 12))


class TestCosts:
    def test_upgrade_cost(self):
        assert upgrade_cost((0, 0, 0), (1, 1, 1)) == 45
        assert upgrade_cost((2, 0, 0), (4, 0, 1)) == 50

    def test_no_change_is_free(self):
        assert upgrade_cost((3, 2, 1), (3, 2, 1)) == 0

    def test_master_costs_150(self):
        assert invested_points((8, 0, 0)) == 150
        assert invested_points((8, 8, 8)) == 450

    def test_downgrade_is_invariant_error(self):
        with pytest.raises(InvariantError):
            upgrade_cost((2, 0, 0), (1, 0, 0))
        with pytest.raises(AssertionError):
            skill_upgrades((0, 3, 0), (0, 2, 0))

    def test_upgrade_order_time_skill_last(self):
        upgrades = skill_upgrades((0, 0, 0), (2, 1, 3))
        assert [u.skill for u in upgrades] == ["dynamic", "snack", "long"]
        assert [u.cost for u in upgrades] == [15, 45, 30]
        assert sum(u.cost for u in upgrades) == upgrade_cost((0, 0, 0), (2, 1, 3))
