# tests/test_notebooks.py
import uuid

def _note(client, headers, title):
    r = client.post("/api/v1/notes", headers=headers, json={"title": title})
    assert r.status_code == 201
    return r.get_json()["data"]["id"]

def _notebook(client, headers, title, **extra):
    r = client.post("/api/v1/notebooks", headers=headers, json={"title": title, **extra})
    assert r.status_code == 201
    return r.get_json()["data"]

def _get_note(client, headers, note_id):
    return client.get(f"/api/v1/notes/{note_id}", headers=headers).get_json()["data"]

def _get_notebook(client, headers, notebook_id):
    return client.get(f"/api/v1/notebooks/{notebook_id}", headers=headers).get_json()["data"]

def test_notebook_crud_and_acl(client, register):
    alice, alice_id = register("alice")
    bob, _ = register("bob")

    nb = _notebook(client, alice, " Groceries ", description=" weekly ")
    assert nb["title"] == "Groceries"
    assert nb["description"] == "weekly"
    assert nb["owner"] == alice_id["id"]
    assert nb["notes"] == []

    assert client.get(f"/api/v1/notebooks/{nb['id']}", headers=bob).status_code == 403
    assert client.put(f"/api/v1/notebooks/{nb['id']}", headers=bob, json={"title": "x"}).status_code == 403
    assert client.delete(f"/api/v1/notebooks/{nb['id']}", headers=bob).status_code == 403

    r = client.put(f"/api/v1/notebooks/{nb['id']}", headers=alice, json={"description": "monthly"})
    assert r.status_code == 200
    assert r.get_json()["data"]["title"] == "Groceries"
    assert r.get_json()["data"]["description"] == "monthly"

    assert client.post("/api/v1/notebooks", headers=alice, json={"title": " "}).status_code == 400
    assert client.get("/api/v1/notebooks/nope", headers=alice).status_code == 404

    r = client.delete(f"/api/v1/notebooks/{nb['id']}", headers=alice)
    assert r.status_code == 200
    assert client.get(f"/api/v1/notebooks/{nb['id']}", headers=alice).status_code == 404

def test_list_recently_updated_first(client, register):
    alice, _ = register("alice")
    bob, _ = register("bob")
    first = _notebook(client, alice, "first")
    _notebook(client, alice, "second")
    _notebook(client, bob, "bob's")

    r = client.get("/api/v1/notebooks", headers=alice)
    assert [n["title"] for n in r.get_json()["data"]] == ["second", "first"]

    client.put(f"/api/v1/notebooks/{first['id']}", headers=alice, json={"title": "first (edited)"})
    body = client.get("/api/v1/notebooks", headers=alice).get_json()
    assert body["count"] == 2
    assert [n["title"] for n in body["data"]] == ["first (edited)", "second"]

def test_attach_then_detach_restores_both_sides(client, register):
    alice, _ = register("alice")
    nb = _notebook(client, alice, "book")
    note_id = _note(client, alice, "page")

    r = client.put(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)
    assert r.status_code == 200
    assert r.get_json()["data"]["notes"] == [note_id]
    assert _get_note(client, alice, note_id)["notebook"] == nb["id"]

    # doublon -> 400
    r = client.put(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)
    assert r.status_code == 400

    r = client.delete(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)
    assert r.status_code == 200
    assert r.get_json()["data"]["notes"] == []
    assert _get_note(client, alice, note_id)["notebook"] is None

    # plus membre -> 400
    r = client.delete(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)
    assert r.status_code == 400

def test_get_notebook_expands_notes_in_order(client, register):
    alice, _ = register("alice")
    nb = _notebook(client, alice, "book")
    ids = [_note(client, alice, t) for t in ("one", "two", "three")]
    for note_id in (ids[2], ids[0], ids[1]):
        client.put(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)

    detail = _get_notebook(client, alice, nb["id"])
    assert [n["title"] for n in detail["notes"]] == ["three", "one", "two"]
    assert all(n["notebook"] == nb["id"] for n in detail["notes"])

def test_attach_missing_or_foreign_entities(client, register):
    alice, _ = register("alice")
    bob, _ = register("bob")
    nb = _notebook(client, alice, "alice's book")
    alice_note = _note(client, alice, "alice's note")
    bob_note = _note(client, bob, "bob's note")

    assert client.put(f"/api/v1/notebooks/{nb['id']}/notes/{uuid.uuid4()}", headers=alice).status_code == 404
    assert client.put(f"/api/v1/notebooks/{uuid.uuid4()}/notes/{alice_note}", headers=alice).status_code == 404
    assert client.put(f"/api/v1/notebooks/{nb['id']}/notes/not-an-id", headers=alice).status_code == 404

    # la note de bob dans le carnet d'alice: refusé pour les deux
    assert client.put(f"/api/v1/notebooks/{nb['id']}/notes/{bob_note}", headers=alice).status_code == 403
    assert client.put(f"/api/v1/notebooks/{nb['id']}/notes/{bob_note}", headers=bob).status_code == 403
    assert _get_note(client, bob, bob_note)["notebook"] is None

def test_deleting_notebook_detaches_notes(client, register):
    alice, _ = register("alice")
    nb = _notebook(client, alice, "book")
    ids = [_note(client, alice, t) for t in ("a", "b")]
    for note_id in ids:
        client.put(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)

    assert client.delete(f"/api/v1/notebooks/{nb['id']}", headers=alice).status_code == 200

    notes = client.get("/api/v1/notes", headers=alice).get_json()
    assert notes["count"] == 2
    assert all(n["notebook"] is None for n in notes["data"])

def test_deleting_note_removes_it_from_notebook(client, register):
    alice, _ = register("alice")
    nb = _notebook(client, alice, "book")
    keep, drop = _note(client, alice, "keep"), _note(client, alice, "drop")
    for note_id in (keep, drop):
        client.put(f"/api/v1/notebooks/{nb['id']}/notes/{note_id}", headers=alice)

    assert client.delete(f"/api/v1/notes/{drop}", headers=alice).status_code == 200
    detail = _get_notebook(client, alice, nb["id"])
    assert [n["id"] for n in detail["notes"]] == [keep]

def test_attaching_to_another_notebook_moves_the_note(client, register):
    alice, _ = register("alice")
    first = _notebook(client, alice, "first")
    second = _notebook(client, alice, "second")
    note_id = _note(client, alice, "wanderer")

    client.put(f"/api/v1/notebooks/{first['id']}/notes/{note_id}", headers=alice)
    r = client.put(f"/api/v1/notebooks/{second['id']}/notes/{note_id}", headers=alice)
    assert r.status_code == 200

    assert _get_notebook(client, alice, first["id"])["notes"] == []
    assert [n["id"] for n in _get_notebook(client, alice, second["id"])["notes"]] == [note_id]
    assert _get_note(client, alice, note_id)["notebook"] == second["id"]

def test_deleting_member_note_touches_notebook(client, register):
    alice, _ = register("alice")
    older = _notebook(client, alice, "older")
    note_id = _note(client, alice, "member")
    client.put(f"/api/v1/notebooks/{older['id']}/notes/{note_id}", headers=alice)
    _notebook(client, alice, "newer")

    body = client.get("/api/v1/notebooks", headers=alice).get_json()
    assert [n["title"] for n in body["data"]] == ["newer", "older"]

    assert client.delete(f"/api/v1/notes/{note_id}", headers=alice).status_code == 200
    body = client.get("/api/v1/notebooks", headers=alice).get_json()
    assert [n["title"] for n in body["data"]] == ["older", "newer"]

def test_detach_missing_or_foreign_entities(client, register):
    alice, _ = register("alice")
    bob, _ = register("bob")
    nb = _notebook(client, alice, "alice's book")
    alice_note = _note(client, alice, "alice's note")
    bob_note = _note(client, bob, "bob's note")
    bob_nb = _notebook(client, bob, "bob's book")
    client.put(f"/api/v1/notebooks/{nb['id']}/notes/{alice_note}", headers=alice)
    client.put(f"/api/v1/notebooks/{bob_nb['id']}/notes/{bob_note}", headers=bob)

    def detach(notebook_id, note_id, headers):
        return client.delete(f"/api/v1/notebooks/{notebook_id}/notes/{note_id}", headers=headers).status_code

    assert detach(uuid.uuid4(), alice_note, alice) == 404
    assert detach(nb["id"], uuid.uuid4(), alice) == 404
    assert detach(nb["id"], "not-an-id", alice) == 404

    # carnet ou note d'un autre utilisateur -> 403
    assert detach(nb["id"], alice_note, bob) == 403
    assert detach(bob_nb["id"], bob_note, alice) == 403
    assert detach(nb["id"], bob_note, alice) == 403

    # aucun des deux côtés n'a bougé
    assert _get_notebook(client, alice, nb["id"])["notes"][0]["id"] == alice_note
    assert _get_note(client, alice, alice_note)["notebook"] == nb["id"]
    assert _get_notebook(client, bob, bob_nb["id"])["notes"][0]["id"] == bob_note
    assert _get_note(client, bob, bob_note)["notebook"] == bob_nb["id"]
