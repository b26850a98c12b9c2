import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
for path in (ROOT, ROOT / "backend"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from shared.models import RequirementRecord
from app.services.skill_store import SkillStore, reset_store


@pytest.fixture
def store(tmp_path: Path) -> SkillStore:
    return SkillStore(tmp_path / "store.json")


@pytest.fixture
def seeded_store(store: SkillStore) -> SkillStore:
    """Catalog with a frontend and a devops role."""
    react = store.add_skill("React", "frontend")
    docker = store.add_skill("Docker", "devops")
    ts = store.add_skill("TypeScript", "language")
    k8s = store.add_skill("Kubernetes", "devops")

    store.add_role("Frontend Developer", "engineering", requirements=[
        RequirementRecord(skill_id=react.skill_id, required_level=80, importance="critical"),
        RequirementRecord(skill_id=docker.skill_id, required_level=60, importance="nice-to-have"),
    ])
    store.add_role("Platform Engineer", "engineering", requirements=[
        RequirementRecord(skill_id=docker.skill_id, required_level=80, importance="critical"),
        RequirementRecord(skill_id=k8s.skill_id, required_level=70, importance="important"),
        RequirementRecord(skill_id=ts.skill_id, required_level=30, importance="optional"),
    ])
    return store


@pytest.fixture
def client(seeded_store: SkillStore):
    from fastapi.testclient import TestClient
    from app.main import app

    reset_store(seeded_store)
    with TestClient(app) as test_client:
        yield test_client
    reset_store(None)
