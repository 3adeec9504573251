"""Tag client and endpoint tests."""

import pytest

from src.exceptions import BadRequest, NotFound
from src.models import TagUser
from src.services.tag_client import TagClient


@pytest.mark.asyncio
async def test_subscribe_user(db, alice, tags):
    """Subscribing lists the user on the tag."""
    tag = await TagClient(db).add_user_to_tag(1, alice.id)
    assert [user.id for user in tag.users] == [alice.id]


@pytest.mark.asyncio
async def test_subscribe_twice_is_rejected(db, alice, tags):
    """A second subscription is refused and no duplicate row is written."""
    client = TagClient(db)
    await client.add_user_to_tag(1, alice.id)

    with pytest.raises(BadRequest) as exc:
        await client.add_user_to_tag(1, alice.id)

    assert exc.value.message == "User is already subscribed to this tag"
    assert db.query(TagUser).filter(TagUser.tag_id == 1).count() == 1


@pytest.mark.asyncio
async def test_subscribe_unknown_user_or_tag(db, alice, tags):
    """Subscriptions need both the user and the tag to exist."""
    client = TagClient(db)
    with pytest.raises(BadRequest):
        await client.add_user_to_tag(999, alice.id)
    with pytest.raises(BadRequest):
        await client.add_user_to_tag(1, 999)


@pytest.mark.asyncio
async def test_unsubscribe(db, alice, bob, tags):
    """Unsubscribing removes only that user's subscription."""
    client = TagClient(db)
    await client.add_user_to_tag(2, alice.id)
    await client.add_user_to_tag(2, bob.id)

    tag = await client.remove_user_from_tag(2, alice.id)

    assert [user.id for user in tag.users] == [bob.id]


@pytest.mark.asyncio
async def test_unsubscribe_when_not_subscribed(db, alice, tags):
    """Removing a subscription that does not exist is a bad request."""
    with pytest.raises(BadRequest) as exc:
        await TagClient(db).remove_user_from_tag(1, alice.id)
    assert exc.value.message == "User is not subscribed to this tag"


@pytest.mark.asyncio
async def test_create_duplicate_name(db, tags):
    """Tag names are unique."""
    with pytest.raises(BadRequest):
        await TagClient(db).create({"name": "Python"})


@pytest.mark.asyncio
async def test_tag_is_free(db, tags):
    client = TagClient(db)
    assert not await client.tag_is_free("Python")
    assert await client.tag_is_free("Haskell")


@pytest.mark.asyncio
async def test_remove_tag_drops_links(db, alice, tags, make_idea):
    """Deleting a tag removes its idea links and subscriptions."""
    client = TagClient(db)
    idea = make_idea(alice, tag_ids=(1, 2))
    await client.add_user_to_tag(1, alice.id)

    await client.remove(1)

    db.expire_all()
    assert [tag.id for tag in idea.tags] == [2]
    assert db.query(TagUser).count() == 0
    with pytest.raises(NotFound):
        await client.select(1)


def test_list_tags(client, tags):
    """Tags are listed without authentication."""
    response = client.get("/api/v1/tags")
    assert response.status_code == 200
    assert [tag["name"] for tag in response.json()] == ["Python", "Rust", "Go"]
    assert "users" not in response.json()[0]


def test_list_tags_with_users(client, alice, alice_headers, tags):
    """``usr`` adds the subscribers to each tag."""
    client.post(f"/api/v1/tags/1/users/{alice.id}", headers=alice_headers)

    response = client.get("/api/v1/tags?usr=true")
    assert response.status_code == 200
    assert response.json()[0]["users"] == [{"id": alice.id, "name": "Alice"}]
    assert response.json()[1]["users"] == []


def test_create_tag_admin_only(client, alice_headers, admin_headers):
    """Only administrators create tags."""
    body = {"name": "Kotlin", "description": "Islands"}

    forbidden = client.post("/api/v1/tags", headers=alice_headers, json=body)
    assert forbidden.status_code == 403

    created = client.post("/api/v1/tags", headers=admin_headers, json=body)
    assert created.status_code == 201
    assert created.json()["name"] == "Kotlin"

    duplicate = client.post("/api/v1/tags", headers=admin_headers, json=body)
    assert duplicate.status_code == 400
    assert duplicate.json()["msg"] == "Tag with that name already exists"


def test_subscribe_endpoint(client, alice, alice_headers, tags):
    """Users subscribe themselves; the second attempt is rejected."""
    first = client.post(f"/api/v1/tags/1/users/{alice.id}", headers=alice_headers)
    assert first.status_code == 201
    assert first.json()["users"] == [{"id": alice.id, "name": "Alice"}]

    second = client.post(f"/api/v1/tags/1/users/{alice.id}", headers=alice_headers)
    assert second.status_code == 400


def test_subscribe_someone_else(client, alice, bob_headers, tags):
    """Subscribing another user is forbidden."""
    response = client.post(f"/api/v1/tags/1/users/{alice.id}", headers=bob_headers)
    assert response.status_code == 403


def test_admin_subscribes_someone_else(client, alice, admin_headers, tags):
    response = client.post(f"/api/v1/tags/2/users/{alice.id}", headers=admin_headers)
    assert response.status_code == 201


def test_unsubscribe_endpoint(client, alice, alice_headers, tags):
    client.post(f"/api/v1/tags/3/users/{alice.id}", headers=alice_headers)

    response = client.delete(f"/api/v1/tags/3/users/{alice.id}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["users"] == []

    again = client.delete(f"/api/v1/tags/3/users/{alice.id}", headers=alice_headers)
    assert again.status_code == 400
    assert again.json()["msg"] == "User is not subscribed to this tag"
