"""Tests for the intra-week Long Rest timing search."""

import pytest

from lounge.constants import LoungeRules
from lounge.errors import InvariantError
from lounge.reward_model import session_length, total_multiplier
from lounge.timing import iter_timing_sequences, optimize_timing, simulate_timing


class TestSequences:
    def test_counts(self):
        assert list(iter_timing_sequences(0)) == [()]
        assert len(list(iter_timing_sequences(3))) == 8

    def test_all_distinct(self):
        sequences = list(iter_timing_sequences(4))
        assert len(set(sequences)) == 16

    def test_upgrade_first_comes_first(self):
        assert next(iter(iter_timing_sequences(2))) == (False, False)


class TestTwoStepScenario:
    """Long Rest 0 -> 2 in one week with 2h available (stand-in tables)."""

    # Hand computed: rates 1.0 / 2.0 / 0.5, deltas +2h then +3h.
    EXPECTED = {
        (False, False): 7 * 0.5,
        (False, True): 4 * 2.0 + 3 * 0.5,
        (True, False): 2 * 1.0 + 5 * 0.5,
        (True, True): 2 * 1.0 + 2 * 2.0 + 3 * 0.5,
    }

    def test_each_ordering(self, two_step_rules):
        for sequence, expected in self.EXPECTED.items():
            reward = simulate_timing(0, (2, 0, 0), 2.0, sequence, two_step_rules)
            assert reward == pytest.approx(expected)

    def test_best_is_max_of_four(self, two_step_rules):
        plan = optimize_timing((0, 0, 0), (2, 0, 0), 2.0, two_step_rules)
        assert plan.reward == pytest.approx(max(self.EXPECTED.values()))
        assert plan.exhaust_first == (False, True)
        assert plan.steps == 2

    def test_decreasing_rates_spend_every_time(self, two_step_rules):
        rules = LoungeRules(
            base_hours=2.0,
            hours_increase=two_step_rules.hours_increase,
            skill_multipliers=((1.0, 0.5, 0.2, 0.2, 0.2, 0.2, 0.2, 0.2, 0.2),)
            + two_step_rules.skill_multipliers[1:],
            boosts=(),
        )
        plan = optimize_timing((0, 0, 0), (2, 0, 0), 2.0, rules)
        assert plan.exhaust_first == (True, True)
        assert plan.reward == pytest.approx(2 * 1.0 + 2 * 0.5 + 3 * 0.2)


class TestTrivialTiming:
    def test_no_time_skill_change(self):
        plan = optimize_timing((3, 1, 1), (3, 4, 2), 5.5)
        assert plan.exhaust_first == ()
        assert plan.reward == pytest.approx(5.5 * total_multiplier((3, 4, 2)))

    def test_other_skills_apply_to_whole_week(self):
        # Dynamic Rest 3 is bought this week, so even the hours spent before
        # the Long Rest level-up earn at the Dynamic Rest 3 rate.
        time = session_length(0)
        reward = simulate_timing(0, (1, 3, 0), time, (True,))
        expected = time * total_multiplier((0, 3, 0)) + 1 * total_multiplier((1, 3, 0))
        assert reward == pytest.approx(expected)

    def test_zero_time(self):
        assert optimize_timing((0, 0, 0), (0, 0, 0), 0.0).reward == 0.0


class TestTimingInvariants:
    def test_downgrade_rejected(self):
        with pytest.raises(InvariantError):
            optimize_timing((2, 0, 0), (1, 0, 0), 2.0)

    def test_sequence_length_must_match(self):
        with pytest.raises(InvariantError):
            simulate_timing(0, (2, 0, 0), 2.0, (True,))

    def test_real_tables_best_beats_fixed_orders(self):
        start, end, time = (0, 5, 5), (4, 5, 5), session_length(0)
        plan = optimize_timing(start, end, time)
        for sequence in iter_timing_sequences(4):
            assert plan.reward >= simulate_timing(0, end, time, sequence) - 1e-12
