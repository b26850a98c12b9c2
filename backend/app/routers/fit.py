"""Role-fit endpoints: per-role analysis, ranking, target roles, roadmaps.

Scoring is fully deterministic (services.fit_scorer). Only the roadmap
endpoint reaches the AI gateway, and it sends the pre-computed gaps.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from shared.models import FitAnalysis, RoadmapRequest, RoleRanking, TargetRole, UserTargetRole
from app.services.ai_gateway import generate_roadmap
from app.services.fit_scorer import compute_fit, fit_band, rank_roles
from app.services.skill_store import SkillStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_role_or_404(store: SkillStore, role_id: str) -> TargetRole:
    role = store.get_role(role_id)
    if role is None:
        raise HTTPException(status_code=404, detail=f"Role {role_id} not found")
    return role


@router.get("/users/{user_id}/roles/ranking", response_model=RoleRanking)
async def get_role_ranking(user_id: str) -> RoleRanking:
    """Rank every catalog role by the user's fit score, best first."""
    store = get_store()
    roles = store.list_roles()
    requirements = {role.role_id: store.requirements_for(role.role_id) for role in roles}
    ranking = rank_roles(roles, requirements, store.user_levels(user_id))
    logger.info(
        "Ranked %d roles for user %s, best fit: %s",
        len(ranking.ranked_roles), user_id, ranking.best_fit_role_id,
    )
    return ranking


@router.get("/users/{user_id}/roles/{role_id}/fit", response_model=FitAnalysis)
async def get_role_fit(user_id: str, role_id: str) -> FitAnalysis:
    """Compute the user's fit score, gaps and strengths for one role."""
    store = get_store()
    role = _get_role_or_404(store, role_id)
    result = compute_fit(store.requirements_for(role_id), store.user_levels(user_id))

    logger.info(
        "Fit for user %s role %s: %d%% (%d gaps, %d strengths)",
        user_id, role_id, result.fit_score, len(result.gaps), len(result.strengths),
        extra={"user_id": user_id, "role_id": role_id, "fit_score": result.fit_score},
    )
    return FitAnalysis(
        user_id=user_id,
        role_id=role_id,
        role_name=role.name,
        fit_score=result.fit_score,
        band=fit_band(result.fit_score),
        gaps=result.gaps,
        strengths=result.strengths,
    )


@router.post("/users/{user_id}/target-roles/{role_id}", response_model=UserTargetRole, status_code=201)
async def add_target_role(user_id: str, role_id: str) -> UserTargetRole:
    """Add a role to the user's targets, caching the current fit score."""
    store = get_store()
    _get_role_or_404(store, role_id)
    result = compute_fit(store.requirements_for(role_id), store.user_levels(user_id))
    return store.add_user_target_role(user_id, role_id, fit_score=result.fit_score)


@router.get("/users/{user_id}/target-roles", response_model=list[UserTargetRole])
async def list_target_roles(user_id: str) -> list[UserTargetRole]:
    return get_store().list_user_target_roles(user_id)


@router.post("/users/{user_id}/roles/{role_id}/roadmap")
async def create_roadmap(user_id: str, role_id: str) -> dict[str, Any]:
    """Generate a learning roadmap for the user's gaps in a role.

    Gaps are sent in fit order (critical first, then largest gap).
    """
    store = get_store()
    role = _get_role_or_404(store, role_id)
    result = compute_fit(store.requirements_for(role_id), store.user_levels(user_id))

    user_skills = []
    for record in store.list_user_skills(user_id):
        skill = store.get_skill(record.skill_id)
        if skill is not None:
            user_skills.append({"name": skill.name, "level": record.confidence_score})

    request = RoadmapRequest(target_role=role.name, skill_gaps=result.gaps, user_skills=user_skills)
    try:
        roadmap = await generate_roadmap(request)
    except Exception as exc:
        logger.error("Roadmap generation failed: %s", str(exc))
        raise HTTPException(status_code=502, detail="AI gateway unavailable")

    return {
        "role_id": role_id,
        "role_name": role.name,
        "fit_score": result.fit_score,
        "roadmap": roadmap,
    }
