"""User skill profile endpoints: confidence updates and assessments."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from shared.models import AssessmentSubmission, ConfidenceUpdate, UserSkill
from app.services.assessment import record_assessment
from app.services.skill_store import get_store

router = APIRouter()


@router.get("/users/{user_id}/skills", response_model=list[UserSkill])
async def list_user_skills(user_id: str) -> list[UserSkill]:
    return get_store().list_user_skills(user_id)


@router.put("/users/{user_id}/skills/{skill_id}", response_model=UserSkill)
async def set_user_skill(user_id: str, skill_id: str, payload: ConfidenceUpdate) -> UserSkill:
    """Set the user's confidence in a skill. Values are clamped to 0-100."""
    try:
        return get_store().set_user_skill(user_id, skill_id, payload.confidence_score)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Skill {skill_id} not found")


@router.post("/users/{user_id}/skills/{skill_id}/assessment", response_model=UserSkill)
async def submit_assessment(user_id: str, skill_id: str, payload: AssessmentSubmission) -> UserSkill:
    """Record a quiz result and blend it into the user's confidence."""
    if payload.correct_answers > payload.questions_answered:
        raise HTTPException(status_code=400, detail="More correct answers than questions")
    try:
        return record_assessment(
            get_store(), user_id, skill_id,
            payload.correct_answers, payload.questions_answered,
        )
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Skill {skill_id} not found")
