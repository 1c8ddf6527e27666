import pytest
from uuid import UUID
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from content.domain.models.content import Content
from content.domain.models.category import Category, content_categories
from content.domain.models.review import Review


# ---------------------------
# Helpers
# ---------------------------

def _payload(path: str = "intro-guide", category: str | None = "design", **overrides) -> dict:
    payload = {
        "path": path,
        "title": "Intro guide",
        "description": "Everything you need to get started.",
        "price": 9.5,
        "file_url": "https://cdn.test/content/cover.png",
        "category": category,
    }
    payload.update(overrides)
    return payload

async def _create(client: AsyncClient, **kwargs) -> dict:
    r = await client.post("/v1/contents", json=_payload(**kwargs))
    assert r.status_code == 201, r.text
    return r.json()

async def _category_names_of(db: AsyncSession, content_id: UUID) -> set[str]:
    q = await db.execute(
        select(Category.name)
        .select_from(content_categories.join(Category, content_categories.c.category_id == Category.id))
        .where(content_categories.c.content_id == content_id)
    )
    return {name for (name,) in q.all()}

async def _content_ids_in(db: AsyncSession, category_name: str) -> set[UUID]:
    q = await db.execute(
        select(content_categories.c.content_id)
        .select_from(content_categories.join(Category, content_categories.c.category_id == Category.id))
        .where(Category.name == category_name)
    )
    return {cid for (cid,) in q.all()}

async def _category_count(db: AsyncSession, name: str) -> int:
    q = await db.execute(select(func.count()).select_from(Category).where(Category.name == name))
    return q.scalar_one()

async def _views(db: AsyncSession, content_id: UUID) -> int:
    q = await db.execute(select(Content.views).where(Content.id == content_id))
    return q.scalar_one()

async def _owned_ids(db: AsyncSession, user_id: UUID) -> set[UUID]:
    q = await db.execute(select(Content.id).where(Content.creator_id == user_id))
    return {cid for (cid,) in q.all()}


# ==============================================================================
# Create
# ==============================================================================

@pytest.mark.asyncio
async def test_should_link_new_category_and_creator_when_content_is_created(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)

    # WHEN
    r = await client.post("/v1/contents", json=_payload())

    # THEN
    assert r.status_code == 201
    assert r.headers["location"] == "/v1/contents/intro-guide"     # -> addressed by path
    body = r.json()
    cid = UUID(body["id"])
    assert body["path"] == "intro-guide"
    assert body["categories"] == ["design"]
    assert body["creator"] == {"id": str(owner.id), "name": "Owner"}
    assert body["views"] == 0

    assert await _category_names_of(db_session, cid) == {"design"}  # -> content -> category
    assert await _content_ids_in(db_session, "design") == {cid}     # -> category -> content
    assert cid in await _owned_ids(db_session, owner.id)            # -> creator owns it


@pytest.mark.asyncio
async def test_should_reuse_existing_category_when_name_matches(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)
    first = await _create(client, path="first", category="design")

    # WHEN
    second = await _create(client, path="second", category="design")

    # THEN
    assert await _category_count(db_session, "design") == 1        # -> no duplicate category
    assert await _content_ids_in(db_session, "design") == {UUID(first["id"]), UUID(second["id"])}
    assert second["categories"] == ["design"]
    assert await _owned_ids(db_session, owner.id) == {UUID(first["id"]), UUID(second["id"])}


@pytest.mark.asyncio
async def test_should_create_content_without_category(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)

    # WHEN
    body = await _create(client, path="loose", category=None)

    # THEN
    assert body["categories"] == []
    assert await _category_names_of(db_session, UUID(body["id"])) == set()


@pytest.mark.asyncio
async def test_should_roll_back_everything_when_path_is_taken(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client, path="taken", category="design")

    # WHEN
    r = await client.post("/v1/contents", json=_payload(path="taken", category="brand-new"))

    # THEN
    assert r.status_code == 409
    assert r.json()["code"] == "CONFLICT"
    assert await _category_count(db_session, "brand-new") == 0     # -> no half-applied category
    q = await db_session.execute(select(func.count()).select_from(Content))
    assert q.scalar_one() == 1


@pytest.mark.asyncio
async def test_should_reject_create_when_not_authenticated(client: AsyncClient):
    # WHEN
    r = await client.post("/v1/contents", json=_payload())

    # THEN
    assert r.status_code == 401


# ==============================================================================
# List / detail
# ==============================================================================

@pytest.mark.asyncio
async def test_should_list_all_contents(client: AsyncClient, owner, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client, path="a", category="x")
    await _create(client, path="b", category="y")

    # WHEN
    r = await client.get("/v1/contents")

    # THEN
    assert r.status_code == 200
    assert {row["path"] for row in r.json()} == {"a", "b"}


@pytest.mark.asyncio
async def test_should_count_each_detail_read_exactly_once(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)
    cid = UUID((await _create(client))["id"])
    auth_as(None)                                                   # -> detail read is public

    # WHEN
    r1 = await client.get("/v1/contents/intro-guide")
    r2 = await client.get("/v1/contents/intro-guide")

    # THEN
    assert r1.status_code == 200 and r2.status_code == 200
    assert r1.json()["views"] == 1
    assert r2.json()["views"] == 2
    assert r2.json()["creator"]["name"] == "Owner"                  # -> creator name denormalized
    assert r2.json()["categories"] == ["design"]                    # -> category names denormalized
    assert await _views(db_session, cid) == 2


@pytest.mark.asyncio
async def test_should_return_not_found_for_unknown_path(client: AsyncClient):
    # WHEN
    r = await client.get("/v1/contents/missing")

    # THEN
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"
    assert r.json()["details"] == {"path": "missing"}


@pytest.mark.asyncio
async def test_should_not_count_a_view_when_fetching_for_edit(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)
    cid = UUID((await _create(client))["id"])

    # WHEN
    r = await client.get("/v1/contents/intro-guide/edit")

    # THEN
    assert r.status_code == 200
    assert r.json()["views"] == 0
    assert await _views(db_session, cid) == 0


@pytest.mark.asyncio
async def test_should_forbid_fetch_for_edit_by_non_owner(client: AsyncClient, owner, other_user, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client)
    auth_as(other_user)

    # WHEN
    r = await client.get("/v1/contents/intro-guide/edit")

    # THEN
    assert r.status_code == 403
    assert r.json()["code"] == "FORBIDDEN"


# ==============================================================================
# Edit
# ==============================================================================

@pytest.mark.asyncio
async def test_should_replace_fields_and_keep_links_when_edited(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)
    before = await _create(client)
    cid = UUID(before["id"])
    edit = {
        "path": "intro-guide-v2",
        "title": "Intro guide (2nd edition)",
        "description": "Updated.",
        "price": 12.0,
        "file_url": None,
    }

    # WHEN
    r = await client.post("/v1/contents/intro-guide/edit", json=edit)

    # THEN
    assert r.status_code == 200
    assert r.headers["location"] == "/v1/contents/intro-guide-v2"
    after = (await client.get("/v1/contents/intro-guide-v2/edit")).json()
    assert after["id"] == before["id"]
    for field, value in edit.items():
        assert after[field] == value                                # -> every editable field replaced
    assert after["date"] >= before["date"]                          # -> authoring time refreshed
    assert after["categories"] == ["design"]                        # -> links untouched
    assert after["creator"]["id"] == str(owner.id)
    assert await _category_names_of(db_session, cid) == {"design"}
    assert (await client.get("/v1/contents/intro-guide/edit")).status_code == 404


@pytest.mark.asyncio
async def test_should_reject_edit_onto_existing_path(client: AsyncClient, owner, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client, path="one")
    await _create(client, path="two")

    # WHEN
    r = await client.post("/v1/contents/one/edit", json={"path": "two", "title": "clash", "price": 1})

    # THEN
    assert r.status_code == 409
    assert (await client.get("/v1/contents/one/edit")).json()["title"] == "Intro guide"


@pytest.mark.asyncio
async def test_should_forbid_edit_by_non_owner(client: AsyncClient, owner, other_user, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client)
    auth_as(other_user)

    # WHEN
    r = await client.post("/v1/contents/intro-guide/edit", json={"path": "hijack", "title": "x", "price": 0})

    # THEN
    assert r.status_code == 403
    auth_as(owner)
    assert (await client.get("/v1/contents/intro-guide/edit")).status_code == 200


@pytest.mark.asyncio
async def test_should_return_not_found_when_editing_unknown_path(client: AsyncClient, owner, auth_as):
    # GIVEN
    auth_as(owner)

    # WHEN
    r = await client.post("/v1/contents/missing/edit", json={"path": "missing", "title": "x", "price": 0})

    # THEN
    assert r.status_code == 404


# ==============================================================================
# Delete
# ==============================================================================

@pytest.mark.asyncio
async def test_should_cascade_reviews_and_empty_category_when_content_is_deleted(client: AsyncClient, db_session: AsyncSession, owner, other_user, auth_as):
    # GIVEN
    auth_as(owner)
    cid = UUID((await _create(client))["id"])
    auth_as(other_user)
    r = await client.post("/v1/contents/intro-guide/reviews", json={"rating": 5, "body": "Great"})
    assert r.status_code == 201
    auth_as(owner)

    # WHEN
    r = await client.delete("/v1/contents/intro-guide")

    # THEN
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert (await client.get("/v1/contents/intro-guide")).status_code == 404
    listed = (await client.get("/v1/contents")).json()
    assert all(row["path"] != "intro-guide" for row in listed)
    assert await _category_count(db_session, "design") == 0          # -> emptied category removed
    q = await db_session.execute(select(func.count()).select_from(Review).where(Review.content_id == cid))
    assert q.scalar_one() == 0                                       # -> reviews removed
    assert cid not in await _owned_ids(db_session, owner.id)


@pytest.mark.asyncio
async def test_should_keep_category_that_still_has_contents(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client, path="one", category="design")
    keep = UUID((await _create(client, path="two", category="design"))["id"])

    # WHEN
    r = await client.delete("/v1/contents/one")

    # THEN
    assert r.status_code == 200
    assert await _category_count(db_session, "design") == 1
    assert await _content_ids_in(db_session, "design") == {keep}


@pytest.mark.asyncio
async def test_should_forbid_delete_by_non_owner(client: AsyncClient, db_session: AsyncSession, owner, other_user, auth_as):
    # GIVEN
    auth_as(owner)
    await _create(client)
    auth_as(other_user)

    # WHEN
    r = await client.delete("/v1/contents/intro-guide")

    # THEN
    assert r.status_code == 403
    assert await _category_count(db_session, "design") == 1
    assert (await client.get("/v1/contents/intro-guide")).status_code == 200


@pytest.mark.asyncio
async def test_should_return_not_found_when_deleting_unknown_path(client: AsyncClient, owner, auth_as):
    # GIVEN
    auth_as(owner)

    # WHEN
    r = await client.delete("/v1/contents/missing")

    # THEN
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_should_drop_new_category_when_its_only_content_is_deleted(client: AsyncClient, db_session: AsyncSession, owner, auth_as):
    # GIVEN: intro-guide is created in a brand new category "design"
    auth_as(owner)
    created = await _create(client, path="intro-guide", category="design")
    assert created["categories"] == ["design"]
    assert await _content_ids_in(db_session, "design") == {UUID(created["id"])}

    # WHEN
    r = await client.delete("/v1/contents/intro-guide")

    # THEN
    assert r.status_code == 200
    assert await _category_count(db_session, "design") == 0
