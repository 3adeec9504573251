"""User client and endpoint tests."""

import pytest

from src.exceptions import BadRequest, NotFound
from src.models import Idea, User
from src.services.auth import verify_password
from src.services.avatar_storage import AvatarStorage
from src.services.user_client import UserClient

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def test_signup(client, roles):
    """Test user signup."""
    response = client.post(
        "/api/v1/users",
        json={
            "name": "Carol",
            "email": "carol@example.com",
            "password": "Password1",
            "role_id": 2,
        },
    )
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "carol@example.com"
    assert data["role"] == {"id": 2, "name": "User"}
    assert data["profile_img"] == ""
    assert "password" not in data


def test_signup_unknown_role(client, roles):
    """Signup with a role that does not exist is rejected."""
    response = client.post(
        "/api/v1/users",
        json={"name": "Carol", "email": "carol@example.com", "password": "Password1", "role_id": 9},
    )
    assert response.status_code == 400
    assert response.json()["msg"] == "No role exists with that id"


def test_signup_duplicate_email(client, alice):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/v1/users",
        json={"name": "Alice", "email": "alice@example.com", "password": "Password1", "role_id": 2},
    )
    assert response.status_code == 400
    assert response.json()["msg"] == "Email is already in use"


def test_signup_rejects_special_characters(client, roles):
    response = client.post(
        "/api/v1/users",
        json={
            "name": "C@rol!",
            "email": "carol@example.com",
            "password": "Password1",
            "role_id": 2,
        },
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "name"


def test_get_user_hides_password(client, alice, alice_headers):
    response = client.get(f"/api/v1/users/{alice.id}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Alice"
    assert "password" not in response.json()


@pytest.mark.asyncio
async def test_update_rehashes_password(db, alice):
    """A new password is stored hashed."""
    user = await UserClient(db).update({"password": "Changed123", "name": None}, alice.id)
    assert user.password != "Changed123"
    assert verify_password("Changed123", user.password)
    assert user.name == "Alice"


@pytest.mark.asyncio
async def test_email_is_same_or_unique(db, alice, bob):
    client = UserClient(db)
    assert await client.email_is_same_or_unique("alice@example.com", alice.id)
    assert await client.email_is_same_or_unique("new@example.com", alice.id)
    assert not await client.email_is_same_or_unique("bob@example.com", alice.id)


@pytest.mark.asyncio
async def test_remove_user_cascades(db, alice, tags, make_idea):
    """Deleting a user deletes their ideas."""
    make_idea(alice)
    await UserClient(db).remove(alice.id)
    assert db.query(Idea).count() == 0
    with pytest.raises(NotFound):
        await UserClient(db).select(alice.id)


@pytest.mark.asyncio
async def test_update_avatar_deletes_old_file(db, make_user, tmp_path):
    """Replacing an avatar removes the previous file once the new one is saved."""
    storage = AvatarStorage(tmp_path)
    (tmp_path / "old.png").write_bytes(PNG_BYTES)
    (tmp_path / "new.png").write_bytes(PNG_BYTES)
    user = make_user("Dora", "dora@example.com", profile_img="old.png")

    updated = await UserClient(db, storage).update_avatar(user.id, "new.png")

    assert updated.profile_img == "new.png"
    assert not (tmp_path / "old.png").exists()
    assert (tmp_path / "new.png").exists()


@pytest.mark.asyncio
async def test_remove_avatar_without_one(db, alice):
    with pytest.raises(NotFound):
        await UserClient(db).remove_avatar(alice.id)


@pytest.mark.asyncio
async def test_create_requires_role(db, roles):
    with pytest.raises(BadRequest):
        await UserClient(db).create(
            {"name": "Eve", "email": "eve@example.com", "password": "Password1", "role_id": 5}
        )


def test_update_user(client, alice, alice_headers):
    response = client.put(
        f"/api/v1/users/{alice.id}", headers=alice_headers, json={"name": "Alicia"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Alicia"
    assert response.json()["email"] == "alice@example.com"


def test_update_user_email_taken(client, alice, bob, alice_headers):
    response = client.put(
        f"/api/v1/users/{alice.id}", headers=alice_headers, json={"email": "bob@example.com"}
    )
    assert response.status_code == 400
    assert response.json()["msg"] == "Email is already in use"


def test_delete_user_by_non_owner(client, db, alice, bob_headers):
    """Deleting someone else's account is forbidden and leaves it in place."""
    response = client.delete(f"/api/v1/users/{alice.id}", headers=bob_headers)
    assert response.status_code == 403
    assert db.query(User).filter(User.id == alice.id).first() is not None


def test_delete_self(client, db, alice, alice_headers, avatar_storage):
    response = client.delete(f"/api/v1/users/{alice.id}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["id"] == alice.id
    assert db.query(User).count() == 0


def test_upload_avatar(client, make_user, avatar_storage, tmp_path, auth_for):
    """Uploading a new avatar stores it and deletes the old file."""
    (tmp_path / "old.png").write_bytes(PNG_BYTES)
    user = make_user("Dora", "dora@example.com", profile_img="old.png")
    response = client.put(
        f"/api/v1/users/{user.id}/img",
        headers=auth_for(user),
        files={"avatar": ("me.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 200
    stored = response.json()["profile_img"]
    assert stored.endswith(".png")
    assert (tmp_path / stored).exists()
    assert not (tmp_path / "old.png").exists()


def test_upload_avatar_wrong_type(client, alice, alice_headers, avatar_storage, tmp_path):
    response = client.put(
        f"/api/v1/users/{alice.id}/img",
        headers=alice_headers,
        files={"avatar": ("me.gif", b"GIF89a", "image/gif")},
    )
    assert response.status_code == 400
    assert list(tmp_path.iterdir()) == []


def test_delete_avatar(client, make_user, avatar_storage, tmp_path, auth_for):
    (tmp_path / "old.png").write_bytes(PNG_BYTES)
    user = make_user("Dora", "dora@example.com", profile_img="old.png")

    response = client.delete(f"/api/v1/users/{user.id}/img", headers=auth_for(user))
    assert response.status_code == 200
    assert response.json()["profile_img"] == ""
    assert not (tmp_path / "old.png").exists()


@pytest.mark.asyncio
async def test_update_password(db, alice):
    user = await UserClient(db).update_password(alice.id, "Another123")
    assert verify_password("Another123", user.password)
    assert not verify_password("Password1", user.password)


def test_signup_rejects_nul_in_password(client, db, roles):
    """Passwords with NUL characters fail validation instead of reaching bcrypt."""
    response = client.post(
        "/api/v1/users",
        json={
            "name": "Carol",
            "email": "carol@example.com",
            "password": "Abcdefg1\u0000x",
            "role_id": 2,
        },
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["param"] == "password"
    assert db.query(User).count() == 0
