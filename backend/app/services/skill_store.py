"""Persistent skill store backed by a JSON file.

Stands in for the hosted relational database. Tracks:
  - the skill catalog (id, name, category)
  - target roles and their skill requirements
  - per-user skill confidence scores
  - per-user target roles with the last computed fit score

Requirement importance is stored exactly as supplied; decoding into the
Importance enum happens when requirements are read for scoring.

Storage: settings.STORE_PATH (mounted Docker volume).
Writes, including the existence checks they depend on, are serialised
via threading.Lock.
"""

from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from uuid import uuid4

from shared.models import (
    RequirementRecord,
    Skill,
    SkillRequirement,
    TargetRole,
    UserSkill,
    UserTargetRole,
)
from app.core.config import settings
from app.services.fit_scorer import clamp_level

logger = logging.getLogger(__name__)


class SkillStore:
    """Thread-safe JSON-file-backed catalog and user skill store."""

    def __init__(self, storage_path: Path = settings.STORE_PATH) -> None:
        self._path = storage_path
        self._lock = threading.Lock()
        self._skills: dict[str, Skill] = {}
        self._roles: dict[str, TargetRole] = {}
        self._user_skills: dict[str, dict[str, UserSkill]] = {}
        self._user_roles: dict[str, dict[str, UserTargetRole]] = {}
        self._load()

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def add_skill(self, name: str, category: str = "general", description: Optional[str] = None) -> Skill:
        """Add a skill to the catalog, or return the existing one with that name."""
        with self._lock:
            existing = self._find_skill_by_name(name)
            if existing:
                return existing
            skill = Skill(skill_id=str(uuid4()), name=name.strip(), category=category, description=description)
            self._skills[skill.skill_id] = skill
            self._save()
        logger.info("Registered skill: id=%s name=%s", skill.skill_id, skill.name)
        return skill

    # Read operations (no lock needed; dict reads are thread-safe in CPython)

    def get_skill(self, skill_id: str) -> Optional[Skill]:
        return self._skills.get(skill_id)

    def find_skill_by_name(self, name: str) -> Optional[Skill]:
        """Case-insensitive lookup by skill name."""
        return self._find_skill_by_name(name)

    def list_skills(self) -> list[Skill]:
        return sorted(self._skills.values(), key=lambda s: (s.category, s.name.lower()))

    def add_role(
        self,
        name: str,
        category: str = "general",
        description: Optional[str] = None,
        requirements: Optional[list[RequirementRecord]] = None,
    ) -> TargetRole:
        """Add a target role. Requirements must reference catalog skills."""
        requirements = requirements or []
        with self._lock:
            unknown = [r.skill_id for r in requirements if r.skill_id not in self._skills]
            if unknown:
                raise KeyError(f"Unknown skill ids: {', '.join(unknown)}")

            role = TargetRole(
                role_id=str(uuid4()),
                name=name.strip(),
                category=category,
                description=description,
                requirements=requirements,
            )
            self._roles[role.role_id] = role
            self._save()
        logger.info(
            "Registered role: id=%s name=%s requirements=%d",
            role.role_id, role.name, len(requirements),
        )
        return role

    def get_role(self, role_id: str) -> Optional[TargetRole]:
        return self._roles.get(role_id)

    def list_roles(self) -> list[TargetRole]:
        """Return all roles sorted by name."""
        return sorted(self._roles.values(), key=lambda r: r.name.lower())

    def requirements_for(self, role_id: str) -> list[SkillRequirement]:
        """Return a role's requirements joined with catalog skill names.

        Requirements whose skill has vanished from the catalog are dropped.
        """
        role = self._roles.get(role_id)
        if role is None:
            return []
        joined = []
        for req in role.requirements:
            skill = self._skills.get(req.skill_id)
            if skill is None:
                logger.warning("Role %s references missing skill %s", role_id, req.skill_id)
                continue
            joined.append(SkillRequirement(
                skill_id=req.skill_id,
                skill_name=skill.name,
                required_level=req.required_level,
                importance=req.importance,
            ))
        return joined

    # ------------------------------------------------------------------
    # User skills
    # ------------------------------------------------------------------

    def list_user_skills(self, user_id: str) -> list[UserSkill]:
        return list(self._user_skills.get(user_id, {}).values())

    def get_user_skill(self, user_id: str, skill_id: str) -> Optional[UserSkill]:
        return self._user_skills.get(user_id, {}).get(skill_id)

    def set_user_skill(
        self,
        user_id: str,
        skill_id: str,
        confidence_score: int,
        assessment_score: Optional[int] = None,
    ) -> UserSkill:
        """Create or update a user's confidence in a catalog skill."""
        with self._lock:
            if skill_id not in self._skills:
                raise KeyError(f"Unknown skill id: {skill_id}")
            skills = self._user_skills.setdefault(user_id, {})
            previous = skills.get(skill_id)
            if assessment_score is None and previous is not None:
                assessment_score = previous.assessment_score
            record = UserSkill(
                skill_id=skill_id,
                confidence_score=clamp_level(confidence_score),
                assessment_score=assessment_score,
                updated_at=datetime.now(timezone.utc),
            )
            skills[skill_id] = record
            self._save()
        return record

    def user_levels(self, user_id: str) -> dict[str, int]:
        """Snapshot of skill_id → confidence for scoring."""
        return {s.skill_id: s.confidence_score for s in self._user_skills.get(user_id, {}).values()}

    # ------------------------------------------------------------------
    # User target roles
    # ------------------------------------------------------------------

    def add_user_target_role(self, user_id: str, role_id: str, fit_score: Optional[int] = None) -> UserTargetRole:
        with self._lock:
            if role_id not in self._roles:
                raise KeyError(f"Unknown role id: {role_id}")
            roles = self._user_roles.setdefault(user_id, {})
            previous = roles.get(role_id)
            record = UserTargetRole(
                role_id=role_id,
                fit_score=fit_score,
                created_at=previous.created_at if previous else datetime.now(timezone.utc),
            )
            roles[role_id] = record
            self._save()
        return record

    def list_user_target_roles(self, user_id: str) -> list[UserTargetRole]:
        return sorted(self._user_roles.get(user_id, {}).values(), key=lambda r: r.created_at)

    def count_skills(self) -> int:
        return len(self._skills)

    def count_roles(self) -> int:
        return len(self._roles)

    # ------------------------------------------------------------------
    # Persistence helpers
    # ------------------------------------------------------------------

    def _find_skill_by_name(self, name: str) -> Optional[Skill]:
        wanted = name.strip().lower()
        return next((s for s in self._skills.values() if s.name.lower() == wanted), None)

    def _load(self) -> None:
        if not self._path.exists():
            logger.info("No store file found at %s, starting empty", self._path)
            return
        try:
            data = json.loads(self._path.read_text())
            self._skills = {k: Skill(**v) for k, v in data.get("skills", {}).items()}
            self._roles = {k: TargetRole(**v) for k, v in data.get("target_roles", {}).items()}
            self._user_skills = {
                user: {k: UserSkill(**v) for k, v in skills.items()}
                for user, skills in data.get("user_skills", {}).items()
            }
            self._user_roles = {
                user: {k: UserTargetRole(**v) for k, v in roles.items()}
                for user, roles in data.get("user_target_roles", {}).items()
            }
            logger.info(
                "Store loaded: %d skills, %d roles, %d users",
                len(self._skills), len(self._roles), len(self._user_skills),
            )
        except Exception as exc:
            logger.error("Failed to load store from %s: %s", self._path, exc)
            self._skills, self._roles = {}, {}
            self._user_skills, self._user_roles = {}, {}

    def _save(self) -> None:
        """Atomically write the store to disk. Caller must hold self._lock."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")

        def dump(model) -> dict:
            return json.loads(model.model_dump_json())

        data = {
            "skills": {k: dump(v) for k, v in self._skills.items()},
            "target_roles": {k: dump(v) for k, v in self._roles.items()},
            "user_skills": {
                user: {k: dump(v) for k, v in skills.items()}
                for user, skills in self._user_skills.items()
            },
            "user_target_roles": {
                user: {k: dump(v) for k, v in roles.items()}
                for user, roles in self._user_roles.items()
            },
        }
        tmp.write_text(json.dumps(data, indent=2))
        tmp.replace(self._path)  # atomic rename


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_store: Optional[SkillStore] = None


def get_store() -> SkillStore:
    global _store
    if _store is None:
        _store = SkillStore(settings.STORE_PATH)
    return _store


def reset_store(store: Optional[SkillStore] = None) -> None:
    """Replace the singleton (used by tests and on config reload)."""
    global _store
    _store = store
