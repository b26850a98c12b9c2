"""Skill catalog and target role endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from shared.models import RoleCreate, Skill, SkillCreate, SkillRequirement, TargetRole
from app.services.skill_store import get_store

router = APIRouter()


@router.get("/skills", response_model=list[Skill])
async def list_skills() -> list[Skill]:
    """Return the full skill catalog, grouped by category."""
    return get_store().list_skills()


@router.post("/skills", response_model=Skill, status_code=201)
async def create_skill(payload: SkillCreate) -> Skill:
    """Add a skill to the catalog. Existing names are returned unchanged."""
    return get_store().add_skill(payload.name, payload.category, payload.description)


@router.get("/roles", response_model=list[TargetRole])
async def list_roles() -> list[TargetRole]:
    return get_store().list_roles()


@router.post("/roles", response_model=TargetRole, status_code=201)
async def create_role(payload: RoleCreate) -> TargetRole:
    """Create a target role with its skill requirements.

    Importance values are stored as given; unknown values score as
    nice-to-have.
    """
    try:
        return get_store().add_role(
            payload.name,
            category=payload.category,
            description=payload.description,
            requirements=payload.requirements,
        )
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=str(exc.args[0]))


@router.get("/roles/{role_id}/requirements", response_model=list[SkillRequirement])
async def get_role_requirements(role_id: str) -> list[SkillRequirement]:
    store = get_store()
    if store.get_role(role_id) is None:
        raise HTTPException(status_code=404, detail=f"Role {role_id} not found")
    return store.requirements_for(role_id)
