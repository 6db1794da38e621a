from datetime import timedelta
from fastapi import status

from app.services import request_service


def test_create_request(client, auth_headers, booker, now):
    response = client.post("/requests/", json={"description": "Need a tent"}, headers=auth_headers(booker))
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["requester_id"] == booker.id
    assert data["created"] == now.isoformat()
    assert data["items"] == []


def test_create_request_blank(client, auth_headers, booker):
    response = client.post("/requests/", json={"description": ""}, headers=auth_headers(booker))
    assert response.status_code == 422


def test_own_requests_include_answers(client, auth_headers, booker, owner, make_item, test_db, now):
    request = request_service.create_request(test_db, booker.id, "Need a tent", now)
    tent = make_item(owner, name="Tent", request_id=request.id)
    response = client.get("/requests/", headers=auth_headers(booker))
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [r["id"] for r in data] == [request.id]
    assert [i["id"] for i in data[0]["items"]] == [tent.id]


def test_other_requests(client, auth_headers, booker, owner, test_db, now):
    request_service.create_request(test_db, booker.id, "Mine", now)
    older = request_service.create_request(test_db, owner.id, "Older", now - timedelta(days=1))
    newer = request_service.create_request(test_db, owner.id, "Newer", now)
    response = client.get("/requests/all", headers=auth_headers(booker))
    assert [r["id"] for r in response.json()] == [newer.id, older.id]


def test_get_request(client, auth_headers, booker, owner, test_db, now):
    request = request_service.create_request(test_db, owner.id, "Need a tent", now)
    response = client.get(f"/requests/{request.id}", headers=auth_headers(booker))
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["description"] == "Need a tent"


def test_get_request_not_found(client, auth_headers, booker):
    response = client.get("/requests/999", headers=auth_headers(booker))
    assert response.status_code == status.HTTP_404_NOT_FOUND
