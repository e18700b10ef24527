import pytest
from datetime import datetime
from fastapi.testclient import TestClient

from main import app
from gradebook.services.gradebook import GradeItem


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def client_with_policy():
    """TestClient with an overridden grading policy"""
    from gradebook.routers.gradebook import get_grading_policy

    def _make(policy):
        app.dependency_overrides[get_grading_policy] = lambda: policy
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def make_item():
    """Factory for graded items"""
    counter = {"n": 0}

    def _make(score, max_points, type="assignment", title=None):
        counter["n"] += 1
        return GradeItem(
            id=f"{type}-{counter['n']}",
            title=title or f"{type.title()} {counter['n']}",
            score=score,
            max_points=max_points,
            type=type,
            graded_at=datetime(2024, 3, 1, 12, 0),
        )

    return _make


@pytest.fixture
def sample_assignments(make_item):
    # 80/100 overall
    return [make_item(40, 50), make_item(40, 50)]


@pytest.fixture
def sample_quizzes(make_item):
    # 90/100 overall
    return [make_item(45, 50, type="quiz"), make_item(45, 50, type="quiz")]


@pytest.fixture
def item_payload():
    """Factory for graded item request bodies"""
    def _make(score, max_points, title="Work", item_id="w-1"):
        return {
            "id": item_id,
            "title": title,
            "score": score,
            "max_points": max_points,
            "graded_at": "2024-03-01T12:00:00",
        }

    return _make
