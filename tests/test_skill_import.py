from shared.models import ExtractedSkill, GitHubSkill
from app.services.skill_extractor import extract_skills
from app.services.skill_import import (
    combined_confidence,
    compare_skill_sources,
    import_common_skills,
    import_extracted_skills,
    import_github_skills,
    level_to_confidence,
    normalize_skill_name,
)


def test_normalize_known_aliases():
    assert normalize_skill_name("js") == "JavaScript"
    assert normalize_skill_name(" ReactJS ") == "React"
    assert normalize_skill_name("k8s") == "Kubernetes"
    assert normalize_skill_name("postgres") == "PostgreSQL"
    assert normalize_skill_name("Express") == "Express.js"


def test_normalize_unknown_name_passes_through():
    assert normalize_skill_name("Elixir") == "Elixir"


def test_level_to_confidence():
    assert level_to_confidence("Expert") == 90
    assert level_to_confidence("senior") == 80
    assert level_to_confidence("mid") == 60
    assert level_to_confidence("learning") == 20
    assert level_to_confidence("guru") == 50
    assert level_to_confidence(None) == 50


def test_import_matches_catalog_and_skips_unknown(seeded_store):
    extracted = [
        ExtractedSkill(name="reactjs", level="advanced"),
        ExtractedSkill(name="k8s", confidence=120),
        ExtractedSkill(name="Elixir", level="expert"),
        ExtractedSkill(name="docker"),
    ]

    result = import_extracted_skills(seeded_store, "u1", extracted)

    assert result.imported == 3
    assert result.skipped == 1
    assert result.errors == []

    levels = {
        seeded_store.get_skill(s.skill_id).name: s.confidence_score
        for s in seeded_store.list_user_skills("u1")
    }
    assert levels == {"React": 80, "Kubernetes": 100, "Docker": 50}


def test_import_skips_skills_already_held(seeded_store):
    react = seeded_store.find_skill_by_name("React")
    seeded_store.set_user_skill("u1", react.skill_id, 30)

    result = import_extracted_skills(
        seeded_store, "u1", [ExtractedSkill(name="React", level="expert"), ExtractedSkill(name="react.js")],
    )

    assert result.imported == 0
    assert result.skipped == 2
    assert seeded_store.get_user_skill("u1", react.skill_id).confidence_score == 30


def test_extract_skills_from_cv_text():
    text = """
    Senior engineer. Built SPAs with ReactJS and TypeScript,
    services in Node.js backed by Postgres. Deployed on k8s via
    GitHub Actions. Interested in machine
    learning. Languages: C++, C#, Java.
    """

    skills = extract_skills(text)

    assert {"React", "TypeScript", "Node.js", "PostgreSQL", "Kubernetes",
            "GitHub Actions", "Machine Learning", "C++", "C#", "Java"} <= skills
    assert "JavaScript" not in skills
    assert "SQL" not in skills


def test_extract_skills_empty_text():
    assert extract_skills("") == set()


def _levels(store, user_id):
    return {
        store.get_skill(s.skill_id).name: s.confidence_score
        for s in store.list_user_skills(user_id)
    }


def test_import_level_takes_precedence_over_confidence(seeded_store):
    result = import_extracted_skills(
        seeded_store, "u1", [ExtractedSkill(name="React", level="expert", confidence=30)],
    )

    assert result.imported == 1
    assert _levels(seeded_store, "u1") == {"React": 90}


def test_import_zero_confidence_falls_back_to_default(seeded_store):
    import_extracted_skills(seeded_store, "u1", [ExtractedSkill(name="Docker", confidence=0)])

    assert _levels(seeded_store, "u1") == {"Docker": 50}


def test_import_github_skills_uses_detected_confidence(seeded_store):
    detected = [
        GitHubSkill(name="ts", category="language", confidence=72),
        GitHubSkill(name="Docker", category="devops", confidence=130),
        GitHubSkill(name="Elixir", category="language", confidence=60),
    ]

    result = import_github_skills(seeded_store, "u1", detected)

    assert (result.imported, result.skipped) == (2, 1)
    assert _levels(seeded_store, "u1") == {"TypeScript": 72, "Docker": 100}


def test_compare_orders_common_then_cv_then_github():
    cv = [
        ExtractedSkill(name="Python", category="language", level="advanced"),
        ExtractedSkill(name="React", category="frontend", level="expert"),
        ExtractedSkill(name="Leadership", category="soft"),
    ]
    github = [
        GitHubSkill(name="Rust", category="language", confidence=40),
        GitHubSkill(name="react", category="frontend", confidence=80),
        GitHubSkill(name="python", category="language", confidence=65),
    ]

    comparison = compare_skill_sources(cv, github)

    assert [e.name for e in comparison.entries] == ["Python", "React", "Leadership", "Rust"]
    assert comparison.common == ["Python", "React"]
    assert comparison.cv_only == ["Leadership"]
    assert comparison.github_only == ["Rust"]
    react = comparison.entries[1]
    assert (react.cv_level, react.github_confidence) == ("expert", 80)


def test_combined_confidence_averages_both_sources():
    comparison = compare_skill_sources(
        [
            ExtractedSkill(name="React", level="expert"),
            ExtractedSkill(name="Docker", level="Advanced"),
        ],
        [
            GitHubSkill(name="React", confidence=81),
            GitHubSkill(name="Docker", confidence=0),
        ],
    )
    react, docker = comparison.entries

    # (90 + 81) / 2 rounds half up
    assert combined_confidence(react) == 86
    # level match is exact-case; missing GitHub confidence counts as 50
    assert combined_confidence(docker) == 43


def test_import_common_skills_skips_held_and_unknown(seeded_store):
    react = seeded_store.find_skill_by_name("React")
    seeded_store.set_user_skill("u1", react.skill_id, 20)
    comparison = compare_skill_sources(
        [
            ExtractedSkill(name="React", level="expert"),
            ExtractedSkill(name="Kubernetes", level="intermediate"),
            ExtractedSkill(name="Elixir", level="expert"),
            ExtractedSkill(name="Docker", level="expert"),
        ],
        [
            GitHubSkill(name="react", confidence=90),
            GitHubSkill(name="kubernetes", confidence=70),
            GitHubSkill(name="elixir", confidence=70),
        ],
    )

    result = import_common_skills(seeded_store, "u1", comparison)

    assert (result.imported, result.skipped) == (1, 2)
    assert _levels(seeded_store, "u1") == {"React": 20, "Kubernetes": 63}
