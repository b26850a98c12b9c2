"""Property-based tests for the role-fit scorer.

Hypothesis generates arbitrary requirement lists and user levels and
checks the invariants that must hold for any input.
"""

from hypothesis import given
from hypothesis import strategies as st

from shared.models import Importance, SkillRequirement
from app.services.fit_scorer import compute_fit

# =============================================================================
# Strategies
# =============================================================================

skill_ids = st.sampled_from(["react", "docker", "sql", "python", "aws", "git"])

raw_importance = st.one_of(
    st.sampled_from(["critical", "important", "nice-to-have", "optional", "", "CRITICAL"]),
    st.none(),
)

requirements = st.lists(
    st.builds(
        SkillRequirement,
        skill_id=skill_ids,
        skill_name=st.text(min_size=1, max_size=12),
        required_level=st.integers(min_value=-20, max_value=150),
        importance=raw_importance,
    ),
    max_size=12,
)

user_levels = st.dictionaries(skill_ids, st.integers(min_value=-20, max_value=150), max_size=6)


# =============================================================================
# Properties
# =============================================================================

@given(requirements, user_levels)
def test_fit_score_within_bounds(reqs, levels):
    assert 0 <= compute_fit(reqs, levels).fit_score <= 100


@given(requirements, user_levels)
def test_every_requirement_lands_in_exactly_one_bucket(reqs, levels):
    result = compute_fit(reqs, levels)

    assert len(result.gaps) + len(result.strengths) == len(reqs)


@given(requirements, user_levels)
def test_gap_entries_are_consistent(reqs, levels):
    result = compute_fit(reqs, levels)

    for gap in result.gaps:
        assert gap.gap > 0
        assert gap.gap == gap.required_level - gap.current_level
    for strength in result.strengths:
        assert strength.gap == 0
        assert strength.current_level >= strength.required_level


@given(requirements, user_levels)
def test_gaps_are_ordered_by_importance_then_size(reqs, levels):
    keys = [(g.importance.rank, -g.gap) for g in compute_fit(reqs, levels).gaps]

    assert keys == sorted(keys)


@given(requirements, user_levels)
def test_strengths_keep_requirement_order(reqs, levels):
    result = compute_fit(reqs, levels)
    names = [s.skill_name for s in result.strengths]

    # strengths are a subsequence of the requirements in original order
    it = iter([r.skill_name for r in reqs])
    assert all(name in it for name in names)


@given(requirements, user_levels)
def test_zero_requirements_never_become_gaps(reqs, levels):
    result = compute_fit(reqs, levels)

    assert all(g.required_level > 0 for g in result.gaps)


@given(requirements, user_levels, skill_ids)
def test_missing_entry_behaves_like_zero(reqs, levels, skill_id):
    without = {k: v for k, v in levels.items() if k != skill_id}
    with_zero = {**without, skill_id: 0}

    assert compute_fit(reqs, without) == compute_fit(reqs, with_zero)


@given(requirements, user_levels)
def test_importance_is_always_a_known_tier(reqs, levels):
    result = compute_fit(reqs, levels)

    assert all(isinstance(g.importance, Importance) for g in result.gaps + result.strengths)


@given(requirements, user_levels)
def test_repeated_calls_are_identical(reqs, levels):
    assert compute_fit(reqs, levels).model_dump() == compute_fit(reqs, levels).model_dump()
