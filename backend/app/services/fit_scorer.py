"""Deterministic role-fit scorer.

Computes an importance-weighted fit percentage between a user's skill
confidence levels and a role's skill requirements, plus the ordered gap
and strength lists. No LLM involved, no I/O.

Weights: critical 3, important 2, anything else 1. Each skill contributes
at most 100% so over-qualifying on one skill cannot mask a missed one.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Union

from shared.models import (
    FitBand,
    FitResult,
    RankedRole,
    RoleRanking,
    SkillGap,
    SkillRequirement,
    TargetRole,
    UserSkillLevel,
)

UserLevels = Union[Mapping[str, int], Iterable[UserSkillLevel]]

MAX_LEVEL = 100
TOP_GAPS = 5


def clamp_level(value: float) -> int:
    """Clamp a level into [0, 100] and return it as an int."""
    return int(max(0, min(MAX_LEVEL, value)))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def _as_mapping(user_levels: UserLevels | None) -> Mapping[str, int]:
    if user_levels is None:
        return {}
    if isinstance(user_levels, Mapping):
        return user_levels
    return {level.skill_id: level.confidence for level in user_levels}


def skill_fit(current_level: int, required_level: int) -> float:
    """Return the per-skill fit percentage, capped at 100."""
    if required_level <= 0:
        return 100.0
    return min(100.0, current_level / required_level * 100)


def compute_fit(
    requirements: Sequence[SkillRequirement],
    user_levels: UserLevels | None,
) -> FitResult:
    """Score a user's skill levels against a role's requirements.

    Missing user entries count as confidence 0. An empty requirement list
    yields a fit score of 0 with no gaps and no strengths.
    """
    levels = _as_mapping(user_levels)

    gaps: list[SkillGap] = []
    strengths: list[SkillGap] = []
    total_weight = 0
    weighted_sum = 0.0

    for req in requirements:
        current = clamp_level(levels.get(req.skill_id) or 0)
        required = clamp_level(req.required_level)
        weight = req.importance.weight

        total_weight += weight
        weighted_sum += skill_fit(current, required) * weight

        gap = max(0, required - current)
        entry = SkillGap(
            skill_name=req.skill_name,
            current_level=current,
            required_level=required,
            importance=req.importance,
            gap=gap,
        )
        if gap > 0:
            gaps.append(entry)
        else:
            strengths.append(entry)

    # sorted() is stable, so equal keys keep requirement order
    gaps = sorted(gaps, key=lambda g: (g.importance.rank, -g.gap))

    fit_score = round_half_up(weighted_sum / total_weight) if total_weight > 0 else 0
    return FitResult(fit_score=clamp_level(fit_score), gaps=gaps, strengths=strengths)


def fit_band(fit_score: int) -> FitBand:
    if fit_score >= 80:
        return "high"
    if fit_score >= 50:
        return "medium"
    return "low"


def rank_roles(
    roles: Sequence[TargetRole],
    requirements_by_role: Mapping[str, Sequence[SkillRequirement]],
    user_levels: UserLevels | None,
) -> RoleRanking:
    """Score every role and return them best fit first.

    Roles with equal scores keep their input order.
    """
    levels = _as_mapping(user_levels)
    ranked: list[RankedRole] = []

    for role in roles:
        result = compute_fit(requirements_by_role.get(role.role_id, []), levels)
        ranked.append(RankedRole(
            role_id=role.role_id,
            name=role.name,
            category=role.category,
            fit_score=result.fit_score,
            band=fit_band(result.fit_score),
            gap_count=len(result.gaps),
            strength_count=len(result.strengths),
            top_gaps=[g.skill_name for g in result.gaps[:TOP_GAPS]],
        ))

    ranked.sort(key=lambda r: r.fit_score, reverse=True)
    best_id = ranked[0].role_id if ranked else None
    return RoleRanking(ranked_roles=ranked, best_fit_role_id=best_id)
