"""Shared Pydantic models used across the gateway and its services."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Importance(str, Enum):
    """How heavily a role requirement counts toward the fit score."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    NICE_TO_HAVE = "nice-to-have"

    @classmethod
    def decode(cls, raw: Any) -> "Importance":
        """Map a raw importance value onto the enum.

        Only "critical" and "important" are recognised; everything else,
        including None and differently-cased strings, is nice-to-have.
        """
        if isinstance(raw, Importance):
            return raw
        if raw == "critical":
            return cls.CRITICAL
        if raw == "important":
            return cls.IMPORTANT
        return cls.NICE_TO_HAVE

    @property
    def weight(self) -> int:
        return _WEIGHTS[self]

    @property
    def rank(self) -> int:
        return _RANKS[self]


_WEIGHTS = {Importance.CRITICAL: 3, Importance.IMPORTANT: 2, Importance.NICE_TO_HAVE: 1}
_RANKS = {Importance.CRITICAL: 0, Importance.IMPORTANT: 1, Importance.NICE_TO_HAVE: 2}


# ---------------------------------------------------------------------------
# Role-fit values
# ---------------------------------------------------------------------------

class SkillRequirement(BaseModel):
    """One skill a role demands, at a minimum proficiency."""
    model_config = ConfigDict(frozen=True)

    skill_id: str
    skill_name: str
    required_level: int
    importance: Importance = Importance.NICE_TO_HAVE

    @field_validator("importance", mode="before")
    @classmethod
    def _decode_importance(cls, value: Any) -> Importance:
        return Importance.decode(value)


class UserSkillLevel(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill_id: str
    confidence: int = 0


class SkillGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    skill_name: str
    current_level: int
    required_level: int
    importance: Importance
    gap: int = Field(..., ge=0)


class FitResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    fit_score: int = Field(0, ge=0, le=100)
    gaps: list[SkillGap] = Field(default_factory=list)
    strengths: list[SkillGap] = Field(default_factory=list)


FitBand = Literal["high", "medium", "low"]


class FitAnalysis(BaseModel):
    """Fit result for one role, ready for direct rendering."""
    user_id: str
    role_id: str
    role_name: str
    fit_score: int = Field(..., ge=0, le=100)
    band: FitBand
    gaps: list[SkillGap] = Field(default_factory=list)
    strengths: list[SkillGap] = Field(default_factory=list)


class RankedRole(BaseModel):
    role_id: str
    name: str
    category: str = ""
    fit_score: int = Field(..., ge=0, le=100)
    band: FitBand
    gap_count: int = 0
    strength_count: int = 0
    top_gaps: list[str] = Field(default_factory=list)


class RoleRanking(BaseModel):
    ranked_roles: list[RankedRole] = Field(default_factory=list)
    best_fit_role_id: Optional[str] = None


# ---------------------------------------------------------------------------
# Catalog / store records
# ---------------------------------------------------------------------------

class Skill(BaseModel):
    skill_id: str
    name: str
    category: str = "general"
    description: Optional[str] = None


class RequirementRecord(BaseModel):
    """Stored requirement row; importance is kept as the raw string."""
    skill_id: str
    required_level: int = Field(..., ge=0, le=100)
    importance: str = Importance.NICE_TO_HAVE.value


class TargetRole(BaseModel):
    role_id: str
    name: str
    category: str = "general"
    description: Optional[str] = None
    requirements: list[RequirementRecord] = Field(default_factory=list)


class UserSkill(BaseModel):
    skill_id: str
    confidence_score: int = Field(0, ge=0, le=100)
    assessment_score: Optional[int] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserTargetRole(BaseModel):
    role_id: str
    fit_score: Optional[int] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# ---------------------------------------------------------------------------
# API payloads
# ---------------------------------------------------------------------------

class SkillCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = "general"
    description: Optional[str] = None


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = "general"
    description: Optional[str] = None
    requirements: list[RequirementRecord] = Field(default_factory=list)


class ConfidenceUpdate(BaseModel):
    confidence_score: int


class AssessmentSubmission(BaseModel):
    correct_answers: int = Field(..., ge=0)
    questions_answered: int = Field(..., ge=0)


class ExtractedSkill(BaseModel):
    """A skill found in a CV, optionally with a level or explicit confidence."""
    name: str
    category: str = "general"
    level: Optional[str] = None
    confidence: Optional[int] = None


class SkillImportResult(BaseModel):
    imported: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)


CoachMode = Literal["chat", "market-analysis", "learning-path", "cv-optimization"]


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Incoming coach chat request from the user."""
    message: str = Field(..., max_length=2000)
    history: list[ChatMessage] = Field(default_factory=list)
    mode: CoachMode = Field(default="chat", description="Coaching mode forwarded to the AI gateway")
    user_id: Optional[str] = Field(default=None, description="Profile used to build the coach's user context")
    github_username: Optional[str] = None


class ChatResponse(BaseModel):
    answer: str
    mode: CoachMode


class CoachSkill(BaseModel):
    name: str
    category: str = "general"
    confidence: int = 0


class UserContext(BaseModel):
    """Profile summary the coach function folds into its system prompt."""
    skills: list[CoachSkill] = Field(default_factory=list)
    target_roles: list[str] = Field(default_factory=list)
    github_username: Optional[str] = None


class CoachRequest(BaseModel):
    """Request sent from the gateway to the AI coach function."""
    messages: list[ChatMessage]
    user_context: UserContext = Field(default_factory=UserContext)
    mode: CoachMode = "chat"

    def to_payload(self) -> dict[str, Any]:
        context: dict[str, Any] = {
            "skills": [s.model_dump() for s in self.user_context.skills],
            "targetRoles": self.user_context.target_roles,
        }
        if self.user_context.github_username:
            context["githubUsername"] = self.user_context.github_username
        return {
            "messages": [m.model_dump() for m in self.messages],
            "userContext": context,
            "mode": self.mode,
        }


class CoachResponse(BaseModel):
    reply: str


# ---------------------------------------------------------------------------
# GitHub skills and CV/GitHub comparison
# ---------------------------------------------------------------------------

class GitHubSkill(BaseModel):
    """A skill detected in a GitHub profile, with the analyser's confidence."""
    name: str
    category: str = "general"
    confidence: int = 50


class GitHubAnalysisRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=39)
    import_skills: bool = False


class SkillSourceEntry(BaseModel):
    name: str
    category: str = "general"
    in_cv: bool = False
    in_github: bool = False
    cv_level: Optional[str] = None
    github_confidence: Optional[int] = None


class SkillComparisonRequest(BaseModel):
    cv_skills: list[ExtractedSkill] = Field(default_factory=list)
    github_skills: list[GitHubSkill] = Field(default_factory=list)
    import_common: bool = False


class SkillComparison(BaseModel):
    """Merged CV and GitHub skills: both sources first, then CV only, then GitHub only."""
    entries: list[SkillSourceEntry] = Field(default_factory=list)
    common: list[str] = Field(default_factory=list)
    cv_only: list[str] = Field(default_factory=list)
    github_only: list[str] = Field(default_factory=list)
    imported: Optional[SkillImportResult] = None


class RoadmapRequest(BaseModel):
    """Request sent to the AI roadmap generator."""
    target_role: str
    skill_gaps: list[SkillGap] = Field(default_factory=list)
    user_skills: list[dict[str, Any]] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return {
            "targetRole": self.target_role,
            "skillGaps": [
                {
                    "skillName": g.skill_name,
                    "currentLevel": g.current_level,
                    "requiredLevel": g.required_level,
                    "gap": g.gap,
                    "importance": g.importance.value,
                }
                for g in self.skill_gaps
            ],
            "userSkills": self.user_skills,
        }
