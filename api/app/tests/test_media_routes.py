"""API tests for media item CRUD, ownership and list semantics."""

from __future__ import annotations

import uuid

import pytest

from app.tests.utils import auth_headers, create_item, new_uid


@pytest.mark.asyncio
async def test_create_book_and_block_other_owner(client):
    created = await create_item(
        client,
        "U1",
        title="Dune",
        mediaType="book",
        authors=["Frank Herbert"],
        pageCount=412,
    )
    assert created["owner"] == "U1"
    assert created["authors"] == ["Frank Herbert"]
    assert created["pageCount"] == 412
    assert created["favorite"] is False
    assert created["tags"] == []
    assert created["dateLogged"] == created["createdAt"]
    assert "hoursPlayed" not in created

    hacked = await client.put(
        f"/api/media/{created['id']}",
        json={"title": "Hacked"},
        headers=auth_headers("U2"),
    )
    assert hacked.status_code == 403
    assert hacked.json()["error"] == "Forbidden"
    assert hacked.json()["message"]

    listing = await client.get("/api/media/me", headers=auth_headers("U1"))
    assert listing.status_code == 200
    assert [item["title"] for item in listing.json()] == ["Dune"]


@pytest.mark.asyncio
async def test_create_round_trip_matches_input(client):
    uid = new_uid("roundtrip")
    body = {
        "title": "Severance",
        "mediaType": "show",
        "cover": "https://img.example.com/severance.jpg",
        "rating": 4.5,
        "favorite": True,
        "notes": "Rewatch S1",
        "status": "in_progress",
        "tags": ["thriller", "office"],
        "externalIds": {"tmdb": "95396"},
        "dateConsumed": "2024-06-01T12:00:00Z",
        "releaseDate": "2022-02-18T00:00:00Z",
        "director": "Ben Stiller",
        "runtimeMinutes": 55,
        "seasonCount": 2,
        "episodeCount": 19,
    }
    created = await create_item(client, uid, **body)

    fetched = await client.get(f"/api/media/{created['id']}", headers=auth_headers(uid))
    assert fetched.status_code == 200
    record = fetched.json()
    for key, value in body.items():
        assert record[key] == value
    assert record["owner"] == uid
    assert record["id"] and record["createdAt"] and record["updatedAt"]


@pytest.mark.asyncio
async def test_dates_with_offsets_are_returned_in_utc(client):
    created = await create_item(
        client,
        new_uid(),
        title="Arrival",
        mediaType="movie",
        dateConsumed="2024-06-01T12:00:00+02:00",
        releaseDate="2016-11-11",
    )

    assert created["dateConsumed"] == "2024-06-01T10:00:00Z"
    assert created["releaseDate"] == "2016-11-11T00:00:00Z"
    assert created["createdAt"].endswith("Z")


@pytest.mark.asyncio
async def test_client_supplied_owner_is_ignored_on_create(client):
    created = await create_item(client, "real-owner", title="Arrival", mediaType="movie", owner="spoofed")

    assert created["owner"] == "real-owner"
    spoofed_view = await client.get("/api/media/me", headers=auth_headers("spoofed"))
    assert spoofed_view.json() == []


@pytest.mark.asyncio
async def test_create_requires_title_and_media_type(client):
    uid = new_uid()
    headers = auth_headers(uid)

    missing_title = await client.post("/api/media", json={"mediaType": "book"}, headers=headers)
    assert missing_title.status_code == 400
    assert missing_title.json()["error"] == "MissingRequiredField"
    assert "title" in missing_title.json()["errors"]

    missing_type = await client.post("/api/media", json={"title": "Untyped"}, headers=headers)
    assert missing_type.status_code == 400
    assert missing_type.json()["error"] == "MissingRequiredField"
    assert "mediaType" in missing_type.json()["errors"]

    invalid_type = await client.post("/api/media", json={"title": "Serial", "mediaType": "podcast"}, headers=headers)
    assert invalid_type.status_code == 400
    assert invalid_type.json()["error"] == "InvalidMediaType"

    listing = await client.get("/api/media/me", headers=headers)
    assert listing.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("body", "field"),
    [
        ({"title": "Dune", "mediaType": "book", "rating": 5.5}, "rating"),
        ({"title": "Dune", "mediaType": "book", "rating": -1}, "rating"),
        ({"title": "Dune", "mediaType": "book", "pageCount": -3}, "pageCount"),
        ({"title": "Celeste", "mediaType": "game", "hoursPlayed": -0.5}, "hoursPlayed"),
        ({"title": "Dune", "mediaType": "book", "favorite": "yes"}, "favorite"),
        ({"title": "Dune", "mediaType": "book", "status": "binged"}, "status"),
        ({"title": "Arrival", "mediaType": "movie", "seasonCount": 1}, "seasonCount"),
        ({"title": "Dune", "mediaType": "book", "hoursPlayed": 3}, "hoursPlayed"),
        ({"title": "   ", "mediaType": "book"}, "title"),
    ],
)
async def test_create_rejects_invalid_field_values(client, body, field):
    uid = new_uid()
    response = await client.post("/api/media", json=body, headers=auth_headers(uid))

    assert response.status_code == 400
    payload = response.json()
    assert payload["error"] == "InvalidFieldValue"
    assert field in payload["errors"]
    assert (await client.get("/api/media/me", headers=auth_headers(uid))).json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("raw", "field"),
    [
        (b'{"title": "Celeste", "mediaType": "game", "hoursPlayed": Infinity}', "hoursPlayed"),
        (b'{"title": "Celeste", "mediaType": "game", "rating": -Infinity}', "rating"),
        (b'{"title": "Celeste", "mediaType": "game", "rating": NaN}', "rating"),
    ],
)
async def test_create_rejects_non_finite_numbers(client, raw, field):
    uid = new_uid()
    headers = {**auth_headers(uid), "Content-Type": "application/json"}

    response = await client.post("/api/media", content=raw, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidFieldValue"
    assert field in response.json()["errors"]
    assert (await client.get("/api/media/me", headers=auth_headers(uid))).json() == []


@pytest.mark.asyncio
async def test_create_coerces_comma_separated_lists(client):
    created = await create_item(
        client,
        new_uid(),
        title="In Rainbows",
        mediaType="music_album",
        musicGenre="Art rock, Electronic",
        tags="favorites",
    )

    assert created["musicGenre"] == ["Art rock", "Electronic"]
    assert created["tags"] == ["favorites"]


@pytest.mark.asyncio
async def test_update_preserves_owner_and_media_type(client):
    uid = new_uid()
    created = await create_item(client, uid, title="Dune", mediaType="book", tags=["sci-fi", "classic"])

    response = await client.put(
        f"/api/media/{created['id']}",
        json={"title": "Dune Messiah", "owner": "intruder", "mediaType": "movie", "tags": ["sequel"]},
        headers=auth_headers(uid),
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["title"] == "Dune Messiah"
    assert updated["owner"] == uid
    assert updated["mediaType"] == "book"
    assert updated["tags"] == ["sequel"]


@pytest.mark.asyncio
async def test_update_merges_category_fields_and_clears_nulls(client):
    uid = new_uid()
    created = await create_item(
        client,
        uid,
        title="Outer Wilds",
        mediaType="game",
        notes="Loop 1",
        platforms=["PC"],
        hoursPlayed=5,
    )

    response = await client.put(
        f"/api/media/{created['id']}",
        json={"hoursPlayed": 22.5, "notes": None, "developers": "Mobius Digital"},
        headers=auth_headers(uid),
    )
    assert response.status_code == 200
    updated = response.json()
    assert updated["hoursPlayed"] == 22.5
    assert updated["notes"] is None
    assert updated["platforms"] == ["PC"]
    assert updated["developers"] == ["Mobius Digital"]
    assert updated["title"] == "Outer Wilds"


@pytest.mark.asyncio
async def test_update_rejects_invalid_values_without_changes(client):
    uid = new_uid()
    created = await create_item(client, uid, title="Mushishi", mediaType="anime", rating=4)
    headers = auth_headers(uid)

    for body in ({"rating": 7}, {"title": None}, {"favorite": None}, {"authors": ["Nobody"]}):
        response = await client.put(f"/api/media/{created['id']}", json=body, headers=headers)
        assert response.status_code == 400, body
        assert response.json()["error"] == "InvalidFieldValue"

    current = await client.get(f"/api/media/{created['id']}", headers=headers)
    assert current.json()["rating"] == 4
    assert current.json()["title"] == "Mushishi"


@pytest.mark.asyncio
async def test_mutations_on_missing_items_return_not_found(client):
    headers = auth_headers(new_uid())
    missing = uuid.uuid4()

    for item_id in (missing, "not-a-uuid"):
        assert (await client.put(f"/api/media/{item_id}", json={"title": "x"}, headers=headers)).status_code == 404
        assert (
            await client.put(f"/api/media/{item_id}/favorite", json={"favorite": True}, headers=headers)
        ).status_code == 404
        deleted = await client.delete(f"/api/media/{item_id}", headers=headers)
        assert deleted.status_code == 404
        assert deleted.json()["error"] == "NotFound"


@pytest.mark.asyncio
async def test_other_owner_cannot_toggle_or_delete(client):
    created = await create_item(client, "owner-a", title="Arrival", mediaType="movie")
    intruder = auth_headers("owner-b")

    toggle = await client.put(f"/api/media/{created['id']}/favorite", json={"favorite": True}, headers=intruder)
    assert toggle.status_code == 403
    delete = await client.delete(f"/api/media/{created['id']}", headers=intruder)
    assert delete.status_code == 403
    read = await client.get(f"/api/media/{created['id']}", headers=intruder)
    assert read.status_code == 403

    current = await client.get(f"/api/media/{created['id']}", headers=auth_headers("owner-a"))
    assert current.status_code == 200
    assert current.json()["favorite"] is False


@pytest.mark.asyncio
async def test_favorite_toggle_only_changes_favorite(client):
    uid = new_uid()
    created = await create_item(
        client,
        uid,
        title="In Rainbows",
        mediaType="music_album",
        artist="Radiohead",
        trackCount=10,
        tags=["2007"],
    )

    response = await client.put(
        f"/api/media/{created['id']}/favorite", json={"favorite": True}, headers=auth_headers(uid)
    )
    assert response.status_code == 200
    toggled = response.json()
    assert toggled["favorite"] is True
    untouched = {key: value for key, value in created.items() if key not in {"favorite", "updatedAt"}}
    assert {key: toggled[key] for key in untouched} == untouched


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"favorite": "true"}, {"favorite": 1}, {"favorite": None}])
async def test_favorite_toggle_requires_strict_boolean(client, body):
    uid = new_uid()
    created = await create_item(client, uid, title="Arrival", mediaType="movie")

    response = await client.put(f"/api/media/{created['id']}/favorite", json=body, headers=auth_headers(uid))

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidFieldValue"


@pytest.mark.asyncio
async def test_delete_is_permanent_and_not_idempotent(client):
    uid = new_uid()
    headers = auth_headers(uid)
    created = await create_item(client, uid, title="Dune", mediaType="book", authors=["Frank Herbert"])

    first = await client.delete(f"/api/media/{created['id']}", headers=headers)
    assert first.status_code == 200
    assert first.json() == {"message": "Media item deleted successfully"}

    second = await client.delete(f"/api/media/{created['id']}", headers=headers)
    assert second.status_code == 404
    assert (await client.get(f"/api/media/{created['id']}", headers=headers)).status_code == 404
    assert (await client.get("/api/media/me", headers=headers)).json() == []


@pytest.mark.asyncio
async def test_list_filters_by_media_type_status_and_favorite(client):
    uid = new_uid()
    headers = auth_headers(uid)
    movie = await create_item(client, uid, title="Arrival", mediaType="movie", status="completed", favorite=True)
    await create_item(client, uid, title="Dune", mediaType="book", status="in_progress")
    await create_item(client, uid, title="Celeste", mediaType="game")
    await create_item(client, new_uid("other"), title="Someone else's movie", mediaType="movie")

    movies = await client.get("/api/media/me", params={"mediaType": "movie"}, headers=headers)
    assert [item["id"] for item in movies.json()] == [movie["id"]]

    completed = await client.get("/api/media/me", params={"status": "completed"}, headers=headers)
    assert [item["title"] for item in completed.json()] == ["Arrival"]

    favorites = await client.get("/api/media/me", params={"favorite": "true"}, headers=headers)
    assert [item["title"] for item in favorites.json()] == ["Arrival"]

    not_favorites = await client.get("/api/media/me", params={"favorite": "no"}, headers=headers)
    assert sorted(item["title"] for item in not_favorites.json()) == ["Celeste", "Dune"]

    ignored = await client.get(
        "/api/media/me", params={"mediaType": "podcast", "status": "binged"}, headers=headers
    )
    assert ignored.status_code == 200
    assert len(ignored.json()) == 3


@pytest.mark.asyncio
async def test_list_default_sort_is_date_consumed_descending(client):
    uid = new_uid()
    await create_item(client, uid, title="Middle", mediaType="book", dateConsumed="2023-05-01")
    await create_item(client, uid, title="Undated", mediaType="book")
    await create_item(client, uid, title="Newest", mediaType="book", dateConsumed="2024-06-01")
    await create_item(client, uid, title="Oldest", mediaType="book", dateConsumed="2021-01-15")

    response = await client.get("/api/media/me", headers=auth_headers(uid))

    assert [item["title"] for item in response.json()] == ["Newest", "Middle", "Oldest", "Undated"]


@pytest.mark.asyncio
async def test_list_honors_sort_expression(client):
    uid = new_uid()
    headers = auth_headers(uid)
    await create_item(client, uid, title="Beta", mediaType="game", rating=3)
    await create_item(client, uid, title="Alpha", mediaType="game", rating=5)
    await create_item(client, uid, title="Gamma", mediaType="game", rating=3)

    by_title = await client.get("/api/media/me", params={"sortBy": "title"}, headers=headers)
    assert [item["title"] for item in by_title.json()] == ["Alpha", "Beta", "Gamma"]

    by_rating = await client.get("/api/media/me", params={"sortBy": "-rating title"}, headers=headers)
    assert [item["title"] for item in by_rating.json()] == ["Alpha", "Beta", "Gamma"]

    by_rating_desc_title = await client.get("/api/media/me", params={"sortBy": "rating -title"}, headers=headers)
    assert [item["title"] for item in by_rating_desc_title.json()] == ["Gamma", "Beta", "Alpha"]


@pytest.mark.asyncio
async def test_media_routes_require_bearer_token(client):
    missing = await client.get("/api/media/me")
    assert missing.status_code == 401
    assert missing.json()["error"] == "Unauthorized"

    invalid = await client.post(
        "/api/media",
        json={"title": "Dune", "mediaType": "book"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert invalid.status_code == 401


@pytest.mark.asyncio
async def test_non_object_body_is_a_validation_error(client):
    response = await client.post("/api/media", json=["Dune", "book"], headers=auth_headers(new_uid()))

    assert response.status_code == 400
    assert response.json()["error"] == "InvalidFieldValue"
    assert response.json()["message"] == "Validation Error"
