"""Deterministic keyword-based skill extractor.

No LLM involved. Uses regex word-boundary matching against a curated
skill vocabulary. Returns canonical skill names (see skill_import.normalize_skill_name).
"""

from __future__ import annotations

import re

from app.services.skill_import import normalize_skill_name

# ---------------------------------------------------------------------------
# Curated skill vocabulary
# Multi-word entries are matched as phrases; single-word as whole words.
# ---------------------------------------------------------------------------

_SKILLS: list[str] = [
    # --- Languages ---
    "python", "java", "javascript", "typescript", "golang", "rust",
    "kotlin", "swift", "php", "ruby", "scala", "c++", "c#", "sql",
    # --- Frontend ---
    "react", "reactjs", "react.js", "vue", "vue.js", "vuejs", "angular",
    "next.js", "nextjs", "html", "html5", "css", "css3", "sass", "scss",
    "tailwind", "tailwindcss", "redux",
    # --- Backend ---
    "node.js", "nodejs", "express.js", "expressjs", "django", "flask",
    "fastapi", "spring boot", "graphql", "rest api", "grpc", "microservices",
    # --- Data stores ---
    "postgresql", "postgres", "mysql", "mongodb", "mongo", "redis",
    "elasticsearch", "sqlite",
    # --- Cloud / DevOps ---
    "aws", "azure", "gcp", "google cloud", "docker", "kubernetes", "k8s",
    "terraform", "ci/cd", "github actions", "jenkins", "linux",
    # --- Tooling ---
    "git", "github", "gitlab", "jira",
    # --- Data / ML ---
    "pandas", "numpy", "machine learning", "deep learning", "pytorch",
    "tensorflow", "scikit-learn", "data analysis", "spark", "kafka",
    # --- Practices ---
    "unit testing", "test driven development", "agile", "scrum",
    "system design", "leadership", "mentoring",
]

_PHRASE = re.compile(r"[ \-/.]")

# Word boundaries do not work next to symbols such as "+" or "#",
# so anchor on non-word lookarounds instead.
_MULTI_WORD = [(s, re.compile(r'(?<!\w)' + re.escape(s) + r'(?!\w)', re.IGNORECASE))
               for s in _SKILLS if _PHRASE.search(s)]
_SINGLE_WORD = [(s, re.compile(r'(?<!\w)' + re.escape(s) + r'(?![\w+#])', re.IGNORECASE))
                for s in _SKILLS if not _PHRASE.search(s)]


def extract_skills(text: str) -> set[str]:
    """Return the set of canonical skill names found in *text*."""
    found: set[str] = set()

    # Collapse newlines and excess whitespace so multi-word skills
    # are not broken by PDF extraction artefacts like "machine\n \nlearning".
    text = " ".join(text.split())

    for skill, pattern in _MULTI_WORD:
        if pattern.search(text):
            found.add(normalize_skill_name(skill))

    for skill, pattern in _SINGLE_WORD:
        if pattern.search(text):
            found.add(normalize_skill_name(skill))

    return found
