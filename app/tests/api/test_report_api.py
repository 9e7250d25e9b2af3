import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def project_id(client: TestClient, user_token_headers: dict, project_payload: dict) -> int:
    response = client.post("/projects/", json=project_payload, headers=user_token_headers)
    return response.json()["id"]


def test_create_report(client: TestClient, user_token_headers: dict, project_id: int):
    response = client.post(f"/projects/{project_id}/reports", json={"report": "Crew of six on site"}, headers=user_token_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["project_id"] == project_id
    assert data["report"] == "Crew of six on site"
    assert data["reporter_name"] == "Test User"


def test_blank_report_rejected(client: TestClient, user_token_headers: dict, project_id: int):
    response = client.post(f"/projects/{project_id}/reports", json={"report": "   "}, headers=user_token_headers)
    assert response.status_code == 400
    assert client.get(f"/projects/{project_id}/reports", headers=user_token_headers).json() == []


def test_report_for_missing_project(client: TestClient, user_token_headers: dict):
    response = client.post("/projects/9999/reports", json={"report": "hello"}, headers=user_token_headers)
    assert response.status_code == 404


def test_anonymous_report(client: TestClient, anonymous_token_headers: dict, project_id: int):
    response = client.post(f"/projects/{project_id}/reports", json={"report": "Gate open"}, headers=anonymous_token_headers)
    assert response.status_code == 200
    assert response.json()["reporter_name"] == "Anonymous reporter"


def test_list_reports_newest_first(client: TestClient, user_token_headers: dict, project_id: int):
    for text in ("first", "second", "third"):
        client.post(f"/projects/{project_id}/reports", json={"report": text}, headers=user_token_headers)
    response = client.get(f"/projects/{project_id}/reports", headers=user_token_headers)
    assert response.status_code == 200
    assert [r["report"] for r in response.json()] == ["third", "second", "first"]


def test_notes_history(client: TestClient, user_token_headers: dict, project_id: int):
    url = f"/projects/{project_id}/fields/next_notes"
    client.put(url, json={"value": "v1"}, headers=user_token_headers)
    client.put(url, json={"value": "v2"}, headers=user_token_headers)

    response = client.get(f"/projects/{project_id}/notes-history", headers=user_token_headers)
    assert response.status_code == 200
    records = response.json()
    assert [(r["old_value"], r["new_value"]) for r in records] == [("v1", "v2"), ("", "v1")]
    assert all(r["field"] == "next_notes" for r in records)


def test_combined_history(client: TestClient, user_token_headers: dict, project_id: int):
    client.post(f"/projects/{project_id}/reports", json={"report": "Formwork up"}, headers=user_token_headers)
    client.put(f"/projects/{project_id}/fields/planned_notes", json={"value": "Need pump truck"}, headers=user_token_headers)

    response = client.get(f"/projects/{project_id}/history", headers=user_token_headers)
    assert response.status_code == 200
    kinds = sorted(entry["kind"] for entry in response.json())
    assert kinds == ["AUDIT", "REPORT"]


def test_history_for_missing_project(client: TestClient, user_token_headers: dict):
    assert client.get("/projects/9999/history", headers=user_token_headers).status_code == 404
    assert client.get("/projects/9999/notes-history", headers=user_token_headers).status_code == 404


def test_missing_project_answers_with_the_not_found_message(client: TestClient, user_token_headers: dict):
    expected = {"detail": "Project with id=9999 not found."}
    responses = [
        client.get("/projects/9999", headers=user_token_headers),
        client.get("/projects/9999/reports", headers=user_token_headers),
        client.get("/projects/9999/history", headers=user_token_headers),
        client.post("/projects/9999/reports", json={"report": "hi"}, headers=user_token_headers),
        client.put("/projects/9999/fields/planned_notes", json={"value": "x"}, headers=user_token_headers),
    ]
    for response in responses:
        assert response.status_code == 404
        assert response.json() == expected


def test_validation_errors_answer_with_the_domain_message(client: TestClient, user_token_headers: dict, project_id: int):
    response = client.post(f"/projects/{project_id}/reports", json={"report": " "}, headers=user_token_headers)
    assert response.status_code == 400
    assert response.json() == {"detail": "Report text cannot be empty."}
