"""Chat endpoint: forwards coaching conversations to the AI gateway.

The backend holds no conversation state. The client sends prior turns in
`history`; the backend:
1. Validates the request.
2. Builds the user context from the stored profile when `user_id` is given.
3. Appends the new message and forwards the conversation with its mode.
4. Returns the coach's reply.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException

from shared.models import (
    ChatMessage,
    ChatRequest,
    ChatResponse,
    CoachRequest,
    CoachResponse,
    CoachSkill,
    UserContext,
)
from app.core.config import settings
from app.services.ai_gateway import coach_chat
from app.services.skill_store import SkillStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


def build_user_context(store: SkillStore, user_id: Optional[str], github_username: Optional[str]) -> UserContext:
    """Summarise a user's skills and target roles for the coach prompt."""
    if not user_id:
        return UserContext(github_username=github_username)

    skills = []
    for user_skill in store.list_user_skills(user_id):
        skill = store.get_skill(user_skill.skill_id)
        if skill is None:
            continue
        skills.append(CoachSkill(name=skill.name, category=skill.category, confidence=user_skill.confidence_score))

    target_roles = []
    for target in store.list_user_target_roles(user_id):
        role = store.get_role(target.role_id)
        if role is not None:
            target_roles.append(role.name)

    return UserContext(skills=skills, target_roles=target_roles, github_username=github_username)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest) -> ChatResponse:
    """Handle a user chat message."""
    if len(request.message) > settings.MAX_MESSAGE_LENGTH:
        raise HTTPException(status_code=400, detail="Message too long")
    if not request.message.strip():
        raise HTTPException(status_code=400, detail="Message is empty")

    coach_request = CoachRequest(
        messages=[*request.history, ChatMessage(role="user", content=request.message)],
        user_context=build_user_context(get_store(), request.user_id, request.github_username),
        mode=request.mode,
    )

    try:
        coach_response: CoachResponse = await coach_chat(coach_request)
    except Exception as exc:
        logger.error("Coach call failed: %s", str(exc))
        raise HTTPException(status_code=502, detail="AI coach unavailable")

    return ChatResponse(answer=coach_response.reply, mode=request.mode)
