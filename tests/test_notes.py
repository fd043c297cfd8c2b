"""Note endpoints: create/get, partial update, pinning, ordering, search."""
import time

from tests.test_note_folders import create_folder, create_note


def test_create_then_get_returns_supplied_fields(client, as_alice, alice):
    folder = create_folder(client, as_alice, "Trees")
    created = create_note(
        client, as_alice, folder["id"],
        title="BST",
        heading="Binary search trees",
        content="left < root < right",
        tags=["Tree", " bst "],
    )

    response = client.get(f"/api/notes/{created['id']}", headers=as_alice)

    assert response.status_code == 200
    note = response.json()["note"]
    assert note == created
    assert note["folderId"] == folder["id"]
    assert note["userId"] == alice.id
    assert note["title"] == "BST"
    assert note["heading"] == "Binary search trees"
    assert note["content"] == "left < root < right"
    assert note["tags"] == ["tree", "bst"]
    assert note["isPinned"] is False
    assert note["createdAt"] and note["updatedAt"]


def test_create_note_defaults(client, as_alice):
    folder = create_folder(client, as_alice)
    note = create_note(client, as_alice, folder["id"], title="Bare")

    assert note["heading"] == ""
    assert note["content"] == ""
    assert note["tags"] == []


def test_create_note_requires_title_and_folder(client, as_alice):
    folder = create_folder(client, as_alice)

    no_title = client.post("/api/notes", json={"folderId": folder["id"]}, headers=as_alice)
    blank_title = client.post("/api/notes", json={"folderId": folder["id"], "title": "  "}, headers=as_alice)
    no_folder = client.post("/api/notes", json={"title": "BST"}, headers=as_alice)

    assert no_title.status_code == 400
    assert no_title.json() == {"error": "Title is required"}
    assert blank_title.status_code == 400
    assert no_folder.status_code == 400
    assert no_folder.json() == {"error": "Folder ID is required"}


def test_create_note_in_unknown_folder_is_404(client, as_alice):
    response = client.post("/api/notes", json={"folderId": 424242, "title": "BST"}, headers=as_alice)

    assert response.status_code == 404
    assert response.json() == {"error": "Folder not found"}


def test_partial_update_keeps_other_fields(client, as_alice):
    folder = create_folder(client, as_alice)
    note = create_note(client, as_alice, folder["id"], title="BST", content="body", tags=["tree"])

    response = client.patch(f"/api/notes/{note['id']}", json={"heading": "Search trees"}, headers=as_alice)

    assert response.status_code == 200
    updated = response.json()["note"]
    assert updated["heading"] == "Search trees"
    assert updated["title"] == "BST"
    assert updated["content"] == "body"
    assert updated["tags"] == ["tree"]


def test_update_rejects_blank_title_without_changing_note(client, as_alice):
    folder = create_folder(client, as_alice)
    note = create_note(client, as_alice, folder["id"], title="BST")

    response = client.patch(
        f"/api/notes/{note['id']}", json={"title": "", "content": "changed"}, headers=as_alice
    )

    assert response.status_code == 400
    again = client.get(f"/api/notes/{note['id']}", headers=as_alice).json()["note"]
    assert again["title"] == "BST"
    assert again["content"] == ""


def test_move_note_to_another_folder(client, as_alice):
    trees = create_folder(client, as_alice, "Trees")
    graphs = create_folder(client, as_alice, "Graphs")
    note = create_note(client, as_alice, trees["id"])

    response = client.patch(f"/api/notes/{note['id']}", json={"folderId": graphs["id"]}, headers=as_alice)

    assert response.status_code == 200
    counts = {f["name"]: f["noteCount"] for f in client.get("/api/note-folders", headers=as_alice).json()["folders"]}
    assert counts == {"Trees": 0, "Graphs": 1}


def test_move_note_to_foreign_folder_is_404(client, as_alice, as_bob):
    mine = create_folder(client, as_alice)
    theirs = create_folder(client, as_bob)
    note = create_note(client, as_alice, mine["id"])

    response = client.patch(f"/api/notes/{note['id']}", json={"folderId": theirs["id"]}, headers=as_alice)

    assert response.status_code == 404
    assert client.get(f"/api/notes/{note['id']}", headers=as_alice).json()["note"]["folderId"] == mine["id"]


def test_toggle_pin_sorts_note_first(client, as_alice):
    folder = create_folder(client, as_alice, "Trees")
    bst = create_note(client, as_alice, folder["id"], title="BST", tags=["tree", "bst"])
    time.sleep(0.01)
    create_note(client, as_alice, folder["id"], title="Heap")

    response = client.patch(f"/api/notes/{bst['id']}/pin", headers=as_alice)

    assert response.status_code == 200
    assert response.json()["note"]["isPinned"] is True
    notes = client.get("/api/notes", headers=as_alice).json()["notes"]
    assert notes[0]["id"] == bst["id"]
    assert [n["isPinned"] for n in notes] == [True, False]


def test_toggle_pin_twice_unpins(client, as_alice):
    folder = create_folder(client, as_alice)
    note = create_note(client, as_alice, folder["id"])

    client.patch(f"/api/notes/{note['id']}/pin", headers=as_alice)
    response = client.patch(f"/api/notes/{note['id']}/pin", headers=as_alice)

    assert response.json()["note"]["isPinned"] is False


def test_unpinned_notes_most_recently_updated_first(client, as_alice):
    folder = create_folder(client, as_alice)
    first = create_note(client, as_alice, folder["id"], title="First")
    time.sleep(0.01)
    second = create_note(client, as_alice, folder["id"], title="Second")
    time.sleep(0.01)
    client.patch(f"/api/notes/{first['id']}", json={"content": "touched"}, headers=as_alice)

    notes = client.get("/api/notes", headers=as_alice).json()["notes"]

    assert [n["id"] for n in notes] == [first["id"], second["id"]]


def test_filter_by_folder(client, as_alice):
    trees = create_folder(client, as_alice, "Trees")
    graphs = create_folder(client, as_alice, "Graphs")
    create_note(client, as_alice, trees["id"], "BST")
    bfs = create_note(client, as_alice, graphs["id"], "BFS")

    notes = client.get("/api/notes", params={"folderId": graphs["id"]}, headers=as_alice).json()["notes"]

    assert [n["id"] for n in notes] == [bfs["id"]]


def test_search_matches_any_term_in_any_field(client, as_alice):
    folder = create_folder(client, as_alice)
    by_title = create_note(client, as_alice, folder["id"], title="Dijkstra")
    by_heading = create_note(client, as_alice, folder["id"], title="A", heading="Shortest paths")
    by_content = create_note(client, as_alice, folder["id"], title="B", content="uses a min-heap")
    by_tag = create_note(client, as_alice, folder["id"], title="C", tags=["greedy"])
    create_note(client, as_alice, folder["id"], title="Unrelated", content="nothing here")

    def search(q):
        notes = client.get("/api/notes", params={"search": q}, headers=as_alice).json()["notes"]
        return {n["id"] for n in notes}

    assert search("dijkstra") == {by_title["id"]}
    assert search("SHORTEST") == {by_heading["id"]}
    assert search("heap greedy") == {by_content["id"], by_tag["id"]}
    assert search("zzz") == set()


def test_search_treats_wildcards_literally(client, as_alice):
    folder = create_folder(client, as_alice)
    create_note(client, as_alice, folder["id"], title="Plain")

    notes = client.get("/api/notes", params={"search": "%"}, headers=as_alice).json()["notes"]

    assert notes == []


def test_search_finds_non_ascii_tag(client, as_alice):
    folder = create_folder(client, as_alice)
    tagged = create_note(client, as_alice, folder["id"], title="Trees", tags=["Árbol"])
    create_note(client, as_alice, folder["id"], title="Graphs", tags=["grafo"])

    notes = client.get("/api/notes", params={"search": "árbol"}, headers=as_alice).json()["notes"]

    assert [n["id"] for n in notes] == [tagged["id"]]


def test_punctuation_does_not_match_tag_serialization(client, as_alice):
    folder = create_folder(client, as_alice)
    create_note(client, as_alice, folder["id"], title="Sorting", tags=["merge", "quick"])

    for term in (",", '"', "[", '",'):
        notes = client.get("/api/notes", params={"search": term}, headers=as_alice).json()["notes"]
        assert notes == [], term


def test_punctuation_still_matches_text_fields(client, as_alice):
    folder = create_folder(client, as_alice)
    note = create_note(client, as_alice, folder["id"], title="Top-k, revisited", tags=["heap"])

    notes = client.get("/api/notes", params={"search": ","}, headers=as_alice).json()["notes"]

    assert [n["id"] for n in notes] == [note["id"]]



def test_delete_note(client, as_alice):
    folder = create_folder(client, as_alice)
    note = create_note(client, as_alice, folder["id"])

    response = client.delete(f"/api/notes/{note['id']}", headers=as_alice)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Note deleted"}
    assert client.get(f"/api/notes/{note['id']}", headers=as_alice).status_code == 404
