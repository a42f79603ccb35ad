"""Point costs of skill upgrades."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from lounge.constants import DEFAULT_RULES, SKILL_KEYS, LoungeRules
from lounge.errors import InvariantError


@dataclass(frozen=True)
class SkillUpgrade:
    """One skill raised from `from_level` to `to_level` during a week."""

    skill: str
    from_level: int
    to_level: int
    cost: int


def invested_points(levels: Sequence[int], rules: LoungeRules = DEFAULT_RULES) -> int:
    """Total points already spent to reach `levels` from all zeros."""
    return sum(rules.cumulative_cost[level] for level in levels)


def upgrade_cost(
    from_levels: Sequence[int],
    to_levels: Sequence[int],
    rules: LoungeRules = DEFAULT_RULES,
) -> int:
    """Points needed to go from one level vector to another (no downgrades)."""
    cost = 0
    for key, old, new in zip(SKILL_KEYS, from_levels, to_levels):
        if new < old:
            raise InvariantError(f"downgrade of {key} from {old} to {new}")
        cost += rules.cumulative_cost[new] - rules.cumulative_cost[old]
    return cost


def skill_upgrades(
    from_levels: Sequence[int],
    to_levels: Sequence[int],
    rules: LoungeRules = DEFAULT_RULES,
) -> tuple[SkillUpgrade, ...]:
    """
    Per-skill upgrade records. Skills that apply to the whole week come first,
    the time skill last, matching the order the upgrades should be bought in.
    """
    order = [i for i in range(len(SKILL_KEYS)) if i != rules.time_skill] + [rules.time_skill]
    upgrades = []
    for i in order:
        old, new = from_levels[i], to_levels[i]
        if new < old:
            raise InvariantError(f"downgrade of {SKILL_KEYS[i]} from {old} to {new}")
        if new != old:
            upgrades.append(
                SkillUpgrade(
                    skill=SKILL_KEYS[i],
                    from_level=old,
                    to_level=new,
                    cost=rules.cumulative_cost[new] - rules.cumulative_cost[old],
                )
            )
    return tuple(upgrades)
