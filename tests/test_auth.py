import pytest
from httpx import AsyncClient

from eduhub.config import settings
from eduhub.models import AuthSession, UserRole
from eduhub.services.sessions import DatabaseSessionStore

from conftest import PASSWORD


@pytest.mark.asyncio
async def test_login_sets_cookie_and_returns_user(client: AsyncClient, school):
    user = school.user(UserRole.TEACHER, email="ms.frizzle@school.edu", first_name="Valerie", last_name="Frizzle")

    response = await client.post("/auth/login", json={"email": "ms.frizzle@school.edu", "password": PASSWORD})
    assert response.status_code == 200
    body = response.json()
    assert body["user"] == {
        "id": user.id,
        "email": "ms.frizzle@school.edu",
        "firstName": "Valerie",
        "lastName": "Frizzle",
        "role": "TEACHER",
    }
    assert settings.AUTH_COOKIE_NAME in response.cookies
    assert "httponly" in response.headers["set-cookie"].lower()

    me = await client.get("/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["id"] == user.id


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client: AsyncClient, school):
    school.user(UserRole.PARENT, email="parent@school.edu")
    response = await client.post("/auth/login", json={"email": "Parent@School.edu", "password": PASSWORD})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, school):
    school.user(UserRole.TEACHER, email="t@school.edu")
    response = await client.post("/auth/login", json={"email": "t@school.edu", "password": "not-the-password"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}
    assert settings.AUTH_COOKIE_NAME not in response.cookies


@pytest.mark.asyncio
async def test_login_unknown_email(client: AsyncClient):
    response = await client.post("/auth/login", json={"email": "nobody@school.edu", "password": PASSWORD})
    assert response.status_code == 401
    assert response.json()["error"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_rejects_malformed_input(client: AsyncClient):
    response = await client.post("/auth/login", json={"email": "not-an-email", "password": "123"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid input"
    fields = {d["field"] for d in body["details"]}
    assert fields == {"email", "password"}


@pytest.mark.asyncio
async def test_me_requires_session(client: AsyncClient):
    response = await client.get("/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.asyncio
async def test_garbage_token_is_unauthenticated(client: AsyncClient):
    response = await client.get("/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_revokes_session(client: AsyncClient, school, session):
    teacher = school.teacher()
    headers = school.login(teacher)

    assert (await client.get("/auth/me", headers=headers)).status_code == 200

    response = await client.post("/auth/logout", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert session.query(AuthSession).count() == 0

    assert (await client.get("/auth/me", headers=headers)).status_code == 401


@pytest.mark.asyncio
async def test_logout_without_session_is_harmless(client: AsyncClient):
    response = await client.post("/auth/logout")
    assert response.status_code == 200


def test_expired_session_does_not_resolve(session, school):
    user = school.user(UserRole.STUDENT)
    store = DatabaseSessionStore(session)
    token = store.create(user.id)
    assert store.resolve(token).id == user.id

    row = session.query(AuthSession).filter(AuthSession.token == token).one()
    row.expires_at = row.created_at.replace(year=2000)
    session.commit()
    assert store.resolve(token) is None
    assert session.query(AuthSession).filter(AuthSession.token == token).count() == 0


def test_each_login_gets_its_own_token(session, school):
    user = school.user(UserRole.ADMIN)
    store = DatabaseSessionStore(session)
    first, second = store.create(user.id), store.create(user.id)
    assert first != second

    store.revoke(first)
    assert store.resolve(first) is None
    assert store.resolve(second).id == user.id
