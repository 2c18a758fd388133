from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from doc_intake.api import create_app


@pytest.fixture()
def api_client(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("API_KEY", "secret-token")

    from doc_intake import config as config_module

    config_module.get_settings.cache_clear()
    app = create_app()
    client = TestClient(app)
    yield client
    config_module.get_settings.cache_clear()


def _auth_headers() -> dict[str, str]:
    return {"X-API-Key": "secret-token"}


def test_list_tools(api_client: TestClient):
    response = api_client.get("/v1/tools", headers=_auth_headers())
    assert response.status_code == 200
    tools = {item["tool_id"]: item for item in response.json()}
    assert tools["ocr"]["accepted_extensions"] == [".jpg", ".jpeg", ".png"]
    assert tools["pdf-tools"]["catalog"] is True
    assert all(item["known"] for item in tools.values())


def test_unknown_tool_uses_default_rule(api_client: TestClient):
    body = api_client.get("/v1/tools/foo", headers=_auth_headers()).json()
    assert body == {
        "tool_id": "foo",
        "title": "Upload your file",
        "accepted_extensions": [],
        "known": False,
        "catalog": False,
    }


def test_catalog_entries(api_client: TestClient):
    body = api_client.get("/v1/catalog", headers=_auth_headers()).json()
    assert [entry["href"] for entry in body] == [
        "/dashboard/pdf-merge",
        "/dashboard/pdf-split",
        "/dashboard/document-to-pdf",
    ]


def test_validate_rejects_unsupported_browse(api_client: TestClient):
    response = api_client.post(
        "/v1/tools/document-to-pdf/validate",
        json={"filename": "report.pdf"},
        headers=_auth_headers(),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["outcome"] == "rejected"
    assert body["accepted"] is False
    assert body["error"] == "Unsupported file type. Allowed: .doc, .docx, .ppt, .pptx, .xls, .xlsx"
    assert body["processing_path"] is None


def test_validate_accepts_case_insensitively(api_client: TestClient):
    body = api_client.post(
        "/v1/tools/ocr/validate",
        json={"filename": "scan.PNG", "source": "browse"},
        headers=_auth_headers(),
    ).json()
    assert body["accepted"] is True
    assert body["processing_path"] == "/tool/ocr/processing"


def test_validate_drop_skips_extension_check(api_client: TestClient):
    body = api_client.post(
        "/v1/tools/pdf-merge/validate",
        json={"filename": "notes.txt", "source": "drop"},
        headers=_auth_headers(),
    ).json()
    assert body["outcome"] == "accepted"


def test_validate_catalog_is_ignored(api_client: TestClient):
    body = api_client.post(
        "/v1/tools/pdf-tools/validate",
        json={"filename": "merge.pdf"},
        headers=_auth_headers(),
    ).json()
    assert body["outcome"] == "ignored"
    assert body["accepted"] is False


def test_invalid_payload_returns_422(api_client: TestClient):
    response = api_client.post(
        "/v1/tools/ocr/validate",
        json={"filename": "", "source": "clipboard"},
        headers=_auth_headers(),
    )
    assert response.status_code == 422


def test_blank_filename_returns_422(api_client: TestClient):
    response = api_client.post(
        "/v1/tools/ocr/validate",
        json={"filename": "   "},
        headers=_auth_headers(),
    )
    assert response.status_code == 422


def test_requires_api_key_when_configured(api_client: TestClient):
    assert api_client.get("/v1/tools").status_code == 401
    assert api_client.get("/v1/tools", headers={"X-API-Key": "wrong"}).status_code == 401


def test_openapi_export(api_client: TestClient):
    body = api_client.get("/v1/openapi", headers=_auth_headers()).json()
    assert "/v1/tools/{tool_id}/validate" in body["paths"]
