"""Tests for the CRUD and download routers."""

from pathlib import Path
from typing import Iterator, List

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from config import settings
from record_store.codec import decode, encode
from record_store.models import ID_FIELD, Record

CRUD_URL = f"{settings.api_prefix}/crud"
DOWNLOAD_URL = f"{settings.api_prefix}/download"


@pytest.fixture
def uploads(tmp_path: Path) -> Path:
    """Uploads directory with 25 certificate records."""
    records: List[Record] = [
        {ID_FIELD: str(100 + index), "common_name": f"host{index}.example.com", "status": "Active" if index % 2 else "Expired"}
        for index in range(25)
    ]
    (tmp_path / "certificate.xlsx").write_bytes(encode(records, [ID_FIELD, "common_name", "status"]))
    return tmp_path


@pytest.fixture
def client(uploads: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    """Test client serving datasets from the temporary uploads directory."""
    monkeypatch.setattr(settings, "uploads_dir", str(uploads))
    with TestClient(create_app()) as test_client:
        yield test_client


def stored(uploads: Path) -> List[Record]:
    return decode((uploads / "certificate.xlsx").read_bytes())[1]


def test_list_records(client: TestClient):
    """Test the list envelope with labels and pagination metadata."""
    response = client.get(CRUD_URL, params={"fileName": "certificate", "page": 3, "limit": 10})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["headers"] == [
        {"key": ID_FIELD, "label": "Cmdb Id"},
        {"key": "common_name", "label": "Common Name"},
        {"key": "status", "label": "Status"},
    ]
    assert len(body["data"]) == 5
    assert body["total"] == 25
    assert body["page"] == 3
    assert body["limit"] == 10


def test_list_records_defaults_to_certificate_dataset(client: TestClient):
    """Test that an omitted fileName falls back to the default dataset."""
    response = client.get(CRUD_URL)

    assert response.status_code == 200
    assert len(response.json()["data"]) == 10


def test_list_records_search_and_sort(client: TestClient):
    """Test keyword search with descending natural sort."""
    response = client.get(
        CRUD_URL,
        params={"fileName": "certificate", "keyword": "EXPIRED", "sortKey": "common_name", "sortOrder": "desc", "limit": 3},
    )

    body = response.json()
    assert body["total"] == 13
    assert [record["common_name"] for record in body["data"]] == [
        "host24.example.com",
        "host22.example.com",
        "host20.example.com",
    ]


def test_list_records_invalid_page(client: TestClient):
    """Test that a non-integer page is a 400 in the error envelope."""
    response = client.get(CRUD_URL, params={"fileName": "certificate", "page": "abc"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "page" in response.json()["message"]


def test_missing_file_name(client: TestClient):
    """Test that an empty fileName is rejected."""
    response = client.get(CRUD_URL, params={"fileName": ""})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Missing fileName parameter"}


def test_unknown_dataset(client: TestClient):
    """Test that a dataset without a file is a 404, not a crash."""
    response = client.get(CRUD_URL, params={"fileName": "inventory"})

    assert response.status_code == 404
    assert response.json()["success"] is False
    assert "inventory" in response.json()["message"]


def test_get_record(client: TestClient):
    """Test fetching one record by id."""
    response = client.get(CRUD_URL, params={"fileName": "certificate", ID_FIELD: "105"})

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["common_name"] == "host5.example.com"
    assert body["headers"] == {ID_FIELD: "Cmdb Id", "common_name": "Common Name", "status": "Status"}
    assert body["nonEditableHeaders"] == [ID_FIELD]


def test_get_record_not_found(client: TestClient):
    """Test that an unknown id is a 404."""
    response = client.get(CRUD_URL, params={"fileName": "certificate", ID_FIELD: "1"})

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": f"Record with {ID_FIELD} 1 not found"}


def test_create_record(client: TestClient, uploads: Path):
    """Test that create returns 201 with a server-assigned id."""
    response = client.post(CRUD_URL, params={"fileName": "certificate"}, json={ID_FIELD: "100", "common_name": "new.example.com"})

    assert response.status_code == 201
    new_data = response.json()["newData"]
    assert new_data["common_name"] == "new.example.com"
    assert new_data[ID_FIELD] != "100"
    assert stored(uploads)[-1] == new_data


def test_create_record_rejects_non_object_body(client: TestClient):
    """Test that a JSON array body is a 400."""
    response = client.post(CRUD_URL, params={"fileName": "certificate"}, json=["not", "an", "object"])

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_update_record(client: TestClient, uploads: Path):
    """Test that update replaces fields but keeps the id."""
    response = client.put(CRUD_URL, params={"fileName": "certificate", ID_FIELD: "100"}, json={ID_FIELD: 999, "status": "Revoked"})

    assert response.status_code == 200
    updated = response.json()["updatedRecord"]
    assert updated == {ID_FIELD: "100", "common_name": "host0.example.com", "status": "Revoked"}
    assert stored(uploads)[0] == updated


def test_update_record_requires_id(client: TestClient):
    """Test that update without an id is a 400."""
    response = client.put(CRUD_URL, params={"fileName": "certificate"}, json={"status": "Revoked"})

    assert response.status_code == 400
    assert response.json()["message"] == f"Missing {ID_FIELD} parameter"


def test_delete_record(client: TestClient, uploads: Path):
    """Test that delete returns the removed record."""
    response = client.delete(CRUD_URL, params={"fileName": "certificate", ID_FIELD: "124"})

    assert response.status_code == 200
    assert response.json()["deletedRecord"][ID_FIELD] == "124"
    assert len(stored(uploads)) == 24


def test_delete_record_not_found(client: TestClient, uploads: Path):
    """Test that deleting an unknown id is a 404 and leaves the file unchanged."""
    before = (uploads / "certificate.xlsx").read_bytes()

    response = client.delete(CRUD_URL, params={"fileName": "certificate", ID_FIELD: "1"})

    assert response.status_code == 404
    assert (uploads / "certificate.xlsx").read_bytes() == before


def test_crud_method_not_allowed(client: TestClient):
    """Test that unsupported methods are a 405 with an Allow header."""
    response = client.patch(CRUD_URL, params={"fileName": "certificate"}, json={})

    assert response.status_code == 405
    assert response.headers["allow"] == "GET, POST, PUT, DELETE"
    assert response.json() == {"success": False, "message": "Method PATCH Not Allowed"}


@pytest.mark.parametrize("method", ["TRACE", "OPTIONS", "HEAD", "PATCH"])
def test_crud_other_methods_list_supported_methods(client: TestClient, method: str):
    """Test that every other method gets the full Allow header."""
    response = client.request(method, CRUD_URL, params={"fileName": "certificate"})

    assert response.status_code == 405
    assert response.headers["allow"] == "GET, POST, PUT, DELETE"
    if method != "HEAD":
        assert response.json() == {"success": False, "message": f"Method {method} Not Allowed"}


def test_create_record_with_formula_like_value(client: TestClient, uploads: Path):
    """Test that a value starting with '=' is stored and served back verbatim."""
    response = client.post(CRUD_URL, params={"fileName": "certificate"}, json={"common_name": "=1+1"})

    assert response.status_code == 201
    record_id = response.json()["newData"][ID_FIELD]
    fetched = client.get(CRUD_URL, params={"fileName": "certificate", ID_FIELD: record_id})
    assert fetched.json()["data"]["common_name"] == "=1+1"
    assert stored(uploads)[-1]["common_name"] == "=1+1"


def test_update_record_with_control_character_is_bad_request(client: TestClient, uploads: Path):
    """Test that unstorable characters are a 400 and the file is unchanged."""
    before = (uploads / "certificate.xlsx").read_bytes()

    response = client.put(CRUD_URL, params={"fileName": "certificate", ID_FIELD: "100"}, json={"status": "a\u0001b"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert (uploads / "certificate.xlsx").read_bytes() == before


def test_download(client: TestClient, uploads: Path):
    """Test that download returns the raw file as an attachment."""
    response = client.get(DOWNLOAD_URL, params={"fileName": "certificate"})

    assert response.status_code == 200
    assert response.content == (uploads / "certificate.xlsx").read_bytes()
    assert response.headers["content-type"] == "application/octet-stream"
    assert response.headers["content-disposition"] == 'attachment; filename="certificate.xlsx"'


def test_download_unknown_dataset(client: TestClient):
    """Test that downloading a missing dataset is a 404."""
    response = client.get(DOWNLOAD_URL, params={"fileName": "inventory"})

    assert response.status_code == 404
    assert response.json()["message"].startswith("Failed to download file:")


def test_download_method_not_allowed(client: TestClient):
    """Test that download only accepts GET."""
    response = client.post(DOWNLOAD_URL, params={"fileName": "certificate"})

    assert response.status_code == 405
    assert response.headers["allow"] == "GET"


def test_corrupt_dataset_is_server_error(client: TestClient, uploads: Path):
    """Test that an unreadable spreadsheet surfaces its message with a 500."""
    (uploads / "broken.xlsx").write_bytes(b"garbage")

    response = client.get(CRUD_URL, params={"fileName": "broken"})

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert response.json()["message"].startswith("Failed to read spreadsheet")


def test_download_other_methods_allow_only_get(client: TestClient):
    """Test that any non-GET method on download is a 405 naming the method."""
    response = client.request("TRACE", DOWNLOAD_URL, params={"fileName": "certificate"})

    assert response.status_code == 405
    assert response.headers["allow"] == "GET"
    assert response.json() == {"success": False, "message": "Method TRACE Not Allowed"}


def test_download_rejects_path_like_file_name(client: TestClient):
    """Test that a file name cannot reach outside the uploads directory."""
    response = client.get(DOWNLOAD_URL, params={"fileName": "../../etc/passwd"})

    assert response.status_code == 400
    assert response.json()["message"].startswith("Failed to download file: Invalid dataset name")
