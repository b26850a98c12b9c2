"""Profile-source endpoints: GitHub analysis and CV/GitHub skill comparison.

GitHub scoring and skill detection run in the AI gateway; this router
validates the detected skills and imports them on request. The comparison
is deterministic and needs no gateway call.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from shared.models import GitHubAnalysisRequest, GitHubSkill, SkillComparison, SkillComparisonRequest
from app.services.ai_gateway import analyze_github
from app.services.skill_import import compare_skill_sources, import_common_skills, import_github_skills
from app.services.skill_store import get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/users/{user_id}/github")
async def analyze_github_profile(user_id: str, request: GitHubAnalysisRequest) -> dict[str, Any]:
    """Analyse a GitHub profile, optionally importing the detected skills."""
    try:
        analysis = await analyze_github(request.username)
        detected = [GitHubSkill(**s) for s in analysis.get("detected_skills") or []]
    except (ValidationError, TypeError) as exc:
        logger.error("Malformed GitHub analysis for %s: %s", request.username, exc)
        raise HTTPException(status_code=502, detail="AI gateway returned a malformed analysis")
    except Exception as exc:
        logger.error("GitHub analysis failed for %s: %s", request.username, str(exc))
        raise HTTPException(status_code=502, detail="GitHub analysis unavailable")

    logger.info(
        "GitHub analysis for user %s (%s): %d skills detected",
        user_id, request.username, len(detected),
        extra={"user_id": user_id, "skill_count": len(detected)},
    )

    imported = None
    if request.import_skills:
        imported = import_github_skills(get_store(), user_id, detected).model_dump()

    return {
        "username": request.username,
        "analysis": analysis,
        "detected_skills": [s.model_dump() for s in detected],
        "imported": imported,
    }


@router.post("/users/{user_id}/skills/compare", response_model=SkillComparison)
async def compare_skills(user_id: str, request: SkillComparisonRequest) -> SkillComparison:
    """Merge CV and GitHub skills; optionally import the ones both agree on."""
    comparison = compare_skill_sources(request.cv_skills, request.github_skills)
    if request.import_common:
        comparison.imported = import_common_skills(get_store(), user_id, comparison)
    return comparison
