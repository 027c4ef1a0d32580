from sqlalchemy import delete

from src.models.schema.user import User as UserModel


def test_profile_returns_projection(client, auth_headers):
    res = client.get("/users/profile", headers=auth_headers)

    assert res.status_code == 200
    body = res.json()
    assert set(body) == {"id", "email", "name", "created_at"}
    assert body["email"] == "owner@example.com"
    assert body["name"] == "Owner"


def test_profile_requires_token(client):
    assert client.get("/users/profile").status_code == 401


def test_profile_of_deleted_account_is_rejected(client, auth_headers, db_session):
    db_session.execute(delete(UserModel))
    db_session.commit()

    res = client.get("/users/profile", headers=auth_headers)
    assert res.status_code == 403
    assert res.json() == {"error": "User not found"}
