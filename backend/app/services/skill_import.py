"""Import skills found in a CV or a GitHub profile into a user's skill profile.

Extracted names are normalised to their catalog spelling, matched against
the catalog case-insensitively and added with a confidence derived from
the extracted level. Skills missing from the catalog, or already held by
the user, are skipped rather than created.

The CV/GitHub comparison merges both sources by name so the skills they
agree on can be imported at a combined confidence.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from shared.models import (
    ExtractedSkill,
    GitHubSkill,
    SkillComparison,
    SkillImportResult,
    SkillSourceEntry,
)
from app.services.fit_scorer import clamp_level, round_half_up

if TYPE_CHECKING:
    from app.services.skill_store import SkillStore

logger = logging.getLogger(__name__)

_ALIASES: dict[str, str] = {
    # Languages
    "py": "Python", "python": "Python",
    "js": "JavaScript", "javascript": "JavaScript",
    "ts": "TypeScript", "typescript": "TypeScript",
    "golang": "Go", "java": "Java", "rust": "Rust", "kotlin": "Kotlin",
    "swift": "Swift", "php": "PHP", "ruby": "Ruby", "scala": "Scala",
    "c++": "C++", "c#": "C#", "sql": "SQL",
    # Frontend
    "react": "React", "reactjs": "React", "react.js": "React",
    "vue": "Vue.js", "vuejs": "Vue.js", "vue.js": "Vue.js",
    "angular": "Angular", "angularjs": "Angular", "angular.js": "Angular",
    "nextjs": "Next.js", "next.js": "Next.js",
    "html": "HTML", "html5": "HTML", "css": "CSS", "css3": "CSS",
    "sass": "Sass", "scss": "Sass",
    "tailwind": "Tailwind CSS", "tailwindcss": "Tailwind CSS",
    "redux": "Redux",
    # Backend
    "nodejs": "Node.js", "node.js": "Node.js",
    "express": "Express.js", "expressjs": "Express.js", "express.js": "Express.js",
    "django": "Django", "flask": "Flask", "fastapi": "FastAPI",
    "spring boot": "Spring Boot", "graphql": "GraphQL", "rest api": "REST API",
    "grpc": "gRPC", "microservices": "Microservices",
    # Data stores
    "postgres": "PostgreSQL", "postgresql": "PostgreSQL", "mysql": "MySQL",
    "mongo": "MongoDB", "mongodb": "MongoDB", "redis": "Redis",
    "elasticsearch": "Elasticsearch", "sqlite": "SQLite",
    # Cloud / DevOps
    "aws": "AWS", "azure": "Azure", "gcp": "Google Cloud", "google cloud": "Google Cloud",
    "docker": "Docker", "k8s": "Kubernetes", "kubernetes": "Kubernetes",
    "terraform": "Terraform", "ci/cd": "CI/CD", "github actions": "GitHub Actions",
    "jenkins": "Jenkins", "linux": "Linux",
    # Tooling
    "git": "Git", "github": "GitHub", "gitlab": "GitLab", "jira": "Jira",
    # Data / ML
    "pandas": "pandas", "numpy": "NumPy", "pytorch": "PyTorch", "tensorflow": "TensorFlow",
    "scikit-learn": "scikit-learn", "machine learning": "Machine Learning",
    "deep learning": "Deep Learning", "data analysis": "Data Analysis",
    "spark": "Apache Spark", "kafka": "Apache Kafka",
    # Practices
    "unit testing": "Unit Testing", "test driven development": "TDD",
    "agile": "Agile", "scrum": "Scrum", "system design": "System Design",
    "leadership": "Leadership", "mentoring": "Mentoring",
}

_LEVEL_CONFIDENCE: dict[str, int] = {
    "expert": 90,
    "advanced": 80,
    "senior": 80,
    "proficient": 70,
    "intermediate": 60,
    "mid": 60,
    "junior": 40,
    "beginner": 30,
    "learning": 20,
}
DEFAULT_CONFIDENCE = 50


def normalize_skill_name(name: str) -> str:
    """Return the catalog spelling for a known alias, else *name* unchanged."""
    return _ALIASES.get(name.strip().lower(), name)


def level_to_confidence(level: Optional[str]) -> int:
    if not level:
        return DEFAULT_CONFIDENCE
    return _LEVEL_CONFIDENCE.get(level.strip().lower(), DEFAULT_CONFIDENCE)




# Coarser scale used when a CV level is combined with a GitHub confidence
_CV_LEVEL_CONFIDENCE: dict[str, int] = {
    "expert": 90,
    "advanced": 75,
    "intermediate": 55,
}
CV_LEVEL_FLOOR = 35


def cv_level_confidence(level: Optional[str]) -> int:
    """Confidence for a CV level in the CV/GitHub comparison (exact match)."""
    return _CV_LEVEL_CONFIDENCE.get(level or "", CV_LEVEL_FLOOR)


def combined_confidence(entry: SkillSourceEntry) -> int:
    """Average of the CV-level confidence and the GitHub confidence."""
    github = entry.github_confidence or DEFAULT_CONFIDENCE
    return round_half_up((cv_level_confidence(entry.cv_level) + github) / 2)


def _add_one(
    store: "SkillStore",
    user_id: str,
    name: str,
    confidence: int,
    held: set[str],
    result: SkillImportResult,
) -> None:
    """Insert one matched skill, counting it as imported, skipped or failed."""
    skill = store.find_skill_by_name(name)
    if skill is None or skill.skill_id in held:
        result.skipped += 1
        return

    try:
        store.set_user_skill(user_id, skill.skill_id, confidence)
    except (KeyError, OSError) as exc:
        logger.error("Failed to import skill %s for user %s: %s", name, user_id, exc)
        result.errors.append(f"{name}: {exc}")
        return

    held.add(skill.skill_id)
    result.imported += 1


def _log_result(source: str, user_id: str, result: SkillImportResult) -> None:
    logger.info(
        "%s skill import for user %s: %d imported, %d skipped, %d errors",
        source, user_id, result.imported, result.skipped, len(result.errors),
        extra={"user_id": user_id, "skill_count": result.imported},
    )


def import_extracted_skills(
    store: "SkillStore",
    user_id: str,
    extracted: Iterable[ExtractedSkill],
) -> SkillImportResult:
    """Add extracted skills to the user's profile.

    A named level wins over an explicit confidence; a zero or missing
    confidence falls back to the default. Each extracted skill is counted
    exactly once as imported or skipped; store failures are recorded in
    ``errors`` and the skill is not counted.
    """
    result = SkillImportResult()
    held = {s.skill_id for s in store.list_user_skills(user_id)}

    for item in extracted:
        if item.level:
            confidence = level_to_confidence(item.level)
        elif item.confidence:
            confidence = clamp_level(item.confidence)
        else:
            confidence = DEFAULT_CONFIDENCE
        _add_one(store, user_id, normalize_skill_name(item.name), confidence, held, result)

    _log_result("CV", user_id, result)
    return result


def import_github_skills(
    store: "SkillStore",
    user_id: str,
    detected: Iterable[GitHubSkill],
) -> SkillImportResult:
    """Add skills detected in a GitHub profile, at the analyser's confidence."""
    result = SkillImportResult()
    held = {s.skill_id for s in store.list_user_skills(user_id)}

    for item in detected:
        _add_one(store, user_id, normalize_skill_name(item.name), clamp_level(item.confidence), held, result)

    _log_result("GitHub", user_id, result)
    return result


def compare_skill_sources(
    cv_skills: Iterable[ExtractedSkill],
    github_skills: Iterable[GitHubSkill],
) -> SkillComparison:
    """Merge CV and GitHub skills by case-insensitive name.

    Entries found in both sources come first, then CV-only, then GitHub-only;
    order within each group follows first appearance.
    """
    merged: dict[str, SkillSourceEntry] = {}

    for skill in cv_skills:
        merged[skill.name.lower()] = SkillSourceEntry(
            name=skill.name,
            category=skill.category,
            in_cv=True,
            cv_level=skill.level,
        )

    for skill in github_skills:
        key = skill.name.lower()
        existing = merged.get(key)
        if existing is not None:
            existing.in_github = True
            existing.github_confidence = skill.confidence
        else:
            merged[key] = SkillSourceEntry(
                name=skill.name,
                category=skill.category,
                in_github=True,
                github_confidence=skill.confidence,
            )

    entries = sorted(
        merged.values(),
        key=lambda e: (2 if e.in_cv else 0) + (1 if e.in_github else 0),
        reverse=True,
    )
    return SkillComparison(
        entries=entries,
        common=[e.name for e in entries if e.in_cv and e.in_github],
        cv_only=[e.name for e in entries if e.in_cv and not e.in_github],
        github_only=[e.name for e in entries if e.in_github and not e.in_cv],
    )


def import_common_skills(
    store: "SkillStore",
    user_id: str,
    comparison: SkillComparison,
) -> SkillImportResult:
    """Add the skills found in both sources at their combined confidence.

    Names are matched against the catalog as written, without alias
    normalisation.
    """
    result = SkillImportResult()
    held = {s.skill_id for s in store.list_user_skills(user_id)}

    for entry in comparison.entries:
        if entry.in_cv and entry.in_github:
            _add_one(store, user_id, entry.name, combined_confidence(entry), held, result)

    _log_result("Common", user_id, result)
    return result
