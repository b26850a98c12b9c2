"""Skill assessment scoring and confidence updates."""

from __future__ import annotations

import logging

from shared.models import UserSkill
from app.services.fit_scorer import clamp_level, round_half_up
from app.services.skill_store import SkillStore

logger = logging.getLogger(__name__)

# Share of the new confidence carried over from the previous value
PRIOR_WEIGHT = 0.6
ASSESSMENT_WEIGHT = 0.4


def assessment_score(correct_answers: int, questions_answered: int) -> int:
    """Percentage of correct answers, 0 when nothing was answered."""
    if questions_answered <= 0:
        return 0
    return clamp_level(round_half_up(correct_answers / questions_answered * 100))


def blend_confidence(current: int, assessment: int) -> int:
    return clamp_level(round_half_up(current * PRIOR_WEIGHT + assessment * ASSESSMENT_WEIGHT))


def record_assessment(
    store: SkillStore,
    user_id: str,
    skill_id: str,
    correct_answers: int,
    questions_answered: int,
) -> UserSkill:
    """Store an assessment result and fold it into the user's confidence.

    Raises KeyError if the skill is not in the catalog.
    """
    score = assessment_score(correct_answers, questions_answered)
    previous = store.get_user_skill(user_id, skill_id)
    current = previous.confidence_score if previous else 0
    confidence = blend_confidence(current, score)

    record = store.set_user_skill(user_id, skill_id, confidence, assessment_score=score)
    logger.info(
        "Assessment recorded: user=%s skill=%s score=%d confidence %d -> %d",
        user_id, skill_id, score, current, confidence,
    )
    return record
