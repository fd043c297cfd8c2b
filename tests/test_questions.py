"""Question endpoints: defaults, filters, ordering, completion toggling."""
from datetime import datetime

from sqlalchemy.dialects import mysql

from services.questions import toggle_complete_statement
from tests.test_question_folders import add_subfolder, create_qfolder, create_question


def test_create_question_defaults(client, as_alice):
    folder = create_qfolder(client, as_alice)

    question = create_question(client, as_alice, folder["id"], "Two Sum")

    assert question["questionNumber"] == 0
    assert question["difficulty"] == "medium"
    assert question["link"] == ""
    assert question["tags"] == []
    assert question["notes"] == ""
    assert question["isCompleted"] is False
    assert question["completedAt"] is None


def test_create_question_in_subfolder(client, as_alice):
    folder = create_qfolder(client, as_alice)
    sub_id = add_subfolder(client, as_alice, folder["id"], "Arrays")["subfolders"][0]["id"]

    question = create_question(client, as_alice, sub_id, "Two Sum", difficulty="easy", tags=["Array", "hash"])

    assert question["folderId"] == sub_id
    assert question["difficulty"] == "easy"
    assert question["tags"] == ["array", "hash"]


def test_create_question_validation(client, as_alice):
    folder = create_qfolder(client, as_alice)

    no_folder = client.post("/api/questions", json={"title": "Two Sum"}, headers=as_alice)
    no_title = client.post("/api/questions", json={"folderId": folder["id"]}, headers=as_alice)
    bad_difficulty = client.post(
        "/api/questions",
        json={"folderId": folder["id"], "title": "Two Sum", "difficulty": "brutal"},
        headers=as_alice,
    )

    assert no_folder.status_code == 400
    assert no_folder.json() == {"error": "Folder ID is required"}
    assert no_title.status_code == 400
    assert no_title.json() == {"error": "Title is required"}
    assert bad_difficulty.status_code == 400
    assert "error" in bad_difficulty.json()


def test_list_orders_by_question_number(client, as_alice):
    folder = create_qfolder(client, as_alice)
    create_question(client, as_alice, folder["id"], "Three", questionNumber=3)
    create_question(client, as_alice, folder["id"], "One", questionNumber=1)
    create_question(client, as_alice, folder["id"], "Two", questionNumber=2)

    questions = client.get("/api/questions", headers=as_alice).json()["questions"]

    assert [q["title"] for q in questions] == ["One", "Two", "Three"]


def test_list_filters(client, as_alice):
    folder = create_qfolder(client, as_alice, "DSA")
    other = create_qfolder(client, as_alice, "SQL")
    easy = create_question(client, as_alice, folder["id"], "Two Sum", difficulty="easy", questionNumber=1)
    hard = create_question(client, as_alice, folder["id"], "Median", difficulty="hard", questionNumber=4)
    joins = create_question(client, as_alice, other["id"], "Joins", difficulty="easy", notes="inner vs outer")
    client.patch(f"/api/questions/{hard['id']}/complete", headers=as_alice)

    def ids(**params):
        questions = client.get("/api/questions", params=params, headers=as_alice).json()["questions"]
        return [q["id"] for q in questions]

    assert ids(folderId=folder["id"]) == [easy["id"], hard["id"]]
    assert sorted(ids(difficulty="easy")) == sorted([easy["id"], joins["id"]])
    assert len(ids(difficulty="all")) == 3
    assert ids(completed="true") == [hard["id"]]
    assert sorted(ids(completed="false")) == sorted([easy["id"], joins["id"]])
    assert ids(search="outer") == [joins["id"]]
    assert ids(search="median sum") == [easy["id"], hard["id"]]
    assert ids(folderId=folder["id"], difficulty="easy", completed="false") == [easy["id"]]


def test_list_rejects_unknown_difficulty(client, as_alice):
    response = client.get("/api/questions", params={"difficulty": "brutal"}, headers=as_alice)

    assert response.status_code == 400


def test_toggle_complete_sets_and_clears_timestamp(client, as_alice):
    folder = create_qfolder(client, as_alice)
    question = create_question(client, as_alice, folder["id"])

    done = client.patch(f"/api/questions/{question['id']}/complete", headers=as_alice).json()["question"]
    assert done["isCompleted"] is True
    assert done["completedAt"] is not None

    undone = client.patch(f"/api/questions/{question['id']}/complete", headers=as_alice).json()["question"]
    assert undone["isCompleted"] is False
    assert undone["completedAt"] is None


def test_completion_pair_holds_after_every_toggle(client, as_alice):
    folder = create_qfolder(client, as_alice)
    question = create_question(client, as_alice, folder["id"])

    for _ in range(5):
        toggled = client.patch(f"/api/questions/{question['id']}/complete", headers=as_alice).json()["question"]
        assert toggled["isCompleted"] == (toggled["completedAt"] is not None)
        stored = client.get(f"/api/questions/{question['id']}", headers=as_alice).json()["question"]
        assert stored["isCompleted"] == (stored["completedAt"] is not None)


def test_toggle_reads_flag_before_flipping_it_on_mysql():
    # MySQL applies SET assignments left to right
    statement = toggle_complete_statement(owner_id=1, question_id=1, now=datetime(2024, 1, 1))

    sql = str(statement.compile(dialect=mysql.dialect()))
    assignments = sql.split(" SET ", 1)[1].split(" WHERE ", 1)[0]

    assert assignments.startswith("completed_at=CASE")
    assert assignments.index("completed_at=") < assignments.index(", is_completed=")



def test_update_does_not_touch_completion(client, as_alice):
    folder = create_qfolder(client, as_alice)
    question = create_question(client, as_alice, folder["id"])
    client.patch(f"/api/questions/{question['id']}/complete", headers=as_alice)

    response = client.patch(
        f"/api/questions/{question['id']}",
        json={"isCompleted": False, "title": "Two Sum II", "link": "https://example.com/2"},
        headers=as_alice,
    )

    updated = response.json()["question"]
    assert updated["title"] == "Two Sum II"
    assert updated["link"] == "https://example.com/2"
    assert updated["isCompleted"] is True
    assert updated["completedAt"] is not None


def test_move_question_between_folder_and_subfolder(client, as_alice):
    folder = create_qfolder(client, as_alice)
    sub_id = add_subfolder(client, as_alice, folder["id"], "Arrays")["subfolders"][0]["id"]
    question = create_question(client, as_alice, folder["id"])

    response = client.patch(f"/api/questions/{question['id']}", json={"folderId": sub_id}, headers=as_alice)

    assert response.status_code == 200
    assert response.json()["question"]["folderId"] == sub_id


def test_delete_question(client, as_alice):
    folder = create_qfolder(client, as_alice)
    question = create_question(client, as_alice, folder["id"])

    response = client.delete(f"/api/questions/{question['id']}", headers=as_alice)

    assert response.status_code == 200
    assert client.get(f"/api/questions/{question['id']}", headers=as_alice).status_code == 404
