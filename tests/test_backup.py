import gzip
import json
import os

from sborrowhub.extensions import db
from sborrowhub.models.item import Item


def test_backup_requires_admin(client, officer_headers):
    assert client.post("/backup/create").status_code == 401
    assert client.post("/backup/create", headers=officer_headers).status_code == 403


def test_create_and_list(app, client, admin_headers, make_item):
    make_item(name="Whiteboard", tags=["office"])

    response = client.post("/backup/create", headers=admin_headers)
    assert response.status_code == 201
    file_name = response.get_json()["data"]["fileName"]
    assert file_name.startswith("backup-") and file_name.endswith(".gz")

    with gzip.open(os.path.join(app.config["BACKUP_DIR"], file_name), "rt", encoding="utf-8") as fh:
        payload = json.load(fh)
    assert [row["name"] for row in payload["tables"]["items"]] == ["Whiteboard"]
    assert payload["tables"]["users"][0]["email"] == "admin@example.com"

    listed = client.get("/backup/list", headers=admin_headers).get_json()["data"]
    assert [b["fileName"] for b in listed] == [file_name]


def test_restore_brings_back_deleted_rows(client, admin_headers, officer_headers, make_item):
    item = make_item(name="Easel", quantity=3, tags=["art"])
    item_id = item.id
    file_name = client.post("/backup/create", headers=admin_headers).get_json()["data"]["fileName"]

    client.delete(f"/catalog/delete-item/{item_id}", headers=officer_headers)
    assert db.session.get(Item, item_id) is None

    response = client.post(f"/backup/restore/{file_name}", headers=admin_headers)
    assert response.status_code == 200

    restored = db.session.get(Item, item_id)
    assert restored.name == "Easel"
    assert restored.quantity == 3
    assert restored.tags == ["art"]


def test_download_and_delete(client, admin_headers):
    file_name = client.post("/backup/create", headers=admin_headers).get_json()["data"]["fileName"]

    download = client.get(f"/backup/download/{file_name}", headers=admin_headers)
    assert download.status_code == 200
    assert json.loads(gzip.decompress(download.data))["tables"]
    download.close()

    assert client.delete(f"/backup/delete/{file_name}", headers=admin_headers).status_code == 200
    assert client.get("/backup/list", headers=admin_headers).get_json()["data"] == []


def test_bad_backup_names(client, admin_headers):
    assert client.post("/backup/restore/notes.txt", headers=admin_headers).status_code == 400
    assert client.post("/backup/restore/missing.gz", headers=admin_headers).status_code == 404
    assert client.delete("/backup/delete/missing.gz", headers=admin_headers).status_code == 404


def test_corrupt_backup_is_rejected(app, client, admin_headers, make_item):
    item = make_item(name="Tripod")
    backup_dir = app.config["BACKUP_DIR"]
    os.makedirs(backup_dir, exist_ok=True)

    with open(os.path.join(backup_dir, "bad.gz"), "wb") as fh:
        fh.write(b"not gzip")
    with gzip.open(os.path.join(backup_dir, "no-tables.gz"), "wt", encoding="utf-8") as fh:
        fh.write(json.dumps({"timestamp": "2025-01-01T00:00:00"}))

    for name in ("bad.gz", "no-tables.gz"):
        response = client.post(f"/backup/restore/{name}", headers=admin_headers)
        assert response.status_code == 400
        assert response.get_json()["message"] == "Invalid backup file"

    assert db.session.get(Item, item.id).name == "Tripod"
