"""Completion statistics."""
import pytest

from models.question_folder import QuestionFolder
from schemas.question import QuestionCreate
from services import questions as question_service
from services.stats import completion_rate, question_stats
from tests.test_question_folders import create_qfolder, create_question


@pytest.fixture
def folder_id(db_session, alice):
    folder = QuestionFolder(user_id=alice.id, name="DSA")
    db_session.add(folder)
    db_session.commit()
    return folder.id


def add(db_session, owner_id, folder_id, difficulty, done=False):
    q = question_service.create_question(
        db_session, owner_id, QuestionCreate(folder_id=folder_id, title=f"{difficulty} q", difficulty=difficulty)
    )
    if done:
        question_service.toggle_complete(db_session, owner_id, q.id)
    return q


def test_stats_scenario(client, as_alice):
    folder = create_qfolder(client, as_alice)
    first = create_question(client, as_alice, folder["id"], "A", difficulty="easy")
    create_question(client, as_alice, folder["id"], "B", difficulty="easy")
    create_question(client, as_alice, folder["id"], "C", difficulty="hard")
    client.patch(f"/api/questions/{first['id']}/complete", headers=as_alice)

    response = client.get("/api/questions/stats", headers=as_alice)

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["total"] == 3
    assert stats["completed"] == 1
    assert stats["completionRate"] == 33
    assert stats["byDifficulty"]["easy"] == {"total": 2, "completed": 1}
    assert stats["byDifficulty"]["hard"] == {"total": 1, "completed": 0}
    assert stats["byDifficulty"]["medium"] == {"total": 0, "completed": 0}


def test_stats_empty(db_session, alice):
    stats = question_stats(db_session, alice.id)

    assert stats["total"] == 0
    assert stats["completed"] == 0
    assert stats["completion_rate"] == 0
    assert set(stats["by_difficulty"]) == {"easy", "medium", "hard"}


def test_buckets_sum_to_total(db_session, alice, folder_id):
    add(db_session, alice.id, folder_id, "easy", done=True)
    add(db_session, alice.id, folder_id, "medium")
    add(db_session, alice.id, folder_id, "medium", done=True)
    add(db_session, alice.id, folder_id, "hard", done=True)

    stats = question_stats(db_session, alice.id)

    assert sum(b["total"] for b in stats["by_difficulty"].values()) == stats["total"] == 4
    assert sum(b["completed"] for b in stats["by_difficulty"].values()) == stats["completed"] == 3
    for bucket in stats["by_difficulty"].values():
        assert bucket["completed"] <= bucket["total"]
    assert stats["completion_rate"] == 75


def test_stats_reflect_current_store_state(db_session, alice, folder_id):
    q = add(db_session, alice.id, folder_id, "easy", done=True)
    assert question_stats(db_session, alice.id)["completed"] == 1

    question_service.toggle_complete(db_session, alice.id, q.id)

    assert question_stats(db_session, alice.id)["completed"] == 0


def test_stats_are_owner_scoped(db_session, alice, bob, folder_id):
    add(db_session, alice.id, folder_id, "easy")

    assert question_stats(db_session, bob.id)["total"] == 0


@pytest.mark.parametrize("completed,total,expected", [
    (0, 0, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 2, 50),
    (1, 8, 13),
    (3, 3, 100),
])
def test_completion_rate_rounding(completed, total, expected):
    assert completion_rate(completed, total) == expected
