import pytest
from sqlalchemy import select

from app.models import Property, PropertyRequest
from conftest import auth_header, create_property, signup


@pytest.mark.asyncio
async def test_create_property_defaults_to_unavailable(client, db, landlord):
    landlord_id, token = landlord
    property_id = await create_property(client, token)
    prop = await db.get(Property, property_id)
    assert prop.landlord_id == landlord_id
    assert prop.availability is False
    assert prop.rent_fee == 950


@pytest.mark.asyncio
async def test_create_property_requires_landlord(client, tenant):
    _, token = tenant
    response = await client.post(
        "/properties",
        json={"title": "t", "description": "d", "address": "a", "rent_fee": 1},
        headers=auth_header(token),
    )
    assert response.status_code == 401
    anonymous = await client.post("/properties", json={"title": "t", "description": "d", "address": "a", "rent_fee": 1})
    assert anonymous.status_code == 401


@pytest.mark.asyncio
async def test_create_property_rejects_negative_rent(client, landlord):
    _, token = landlord
    response = await client.post(
        "/properties",
        json={"title": "t", "description": "d", "address": "a", "rent_fee": -5},
        headers=auth_header(token),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_listing_includes_unavailable_properties(client, landlord):
    _, token = landlord
    hidden = await create_property(client, token, title="Hidden")
    shown = await create_property(client, token, title="Shown", availability=True)
    response = await client.get("/properties")
    assert response.status_code == 200
    rows = {row["id"]: row for row in response.json()}
    assert set(rows) == {hidden, shown}
    assert rows[hidden]["availability"] is False
    assert rows[shown]["availability"] is True


@pytest.mark.asyncio
async def test_single_lookup_only_returns_available(client, landlord):
    _, token = landlord
    property_id = await create_property(client, token)

    response = await client.get(f"/properties/{property_id}")
    assert response.status_code == 404
    assert response.json() == {"error": "Property not found or not available"}
    missing = await client.get("/properties/9999")
    assert missing.json() == response.json()

    made_available = await client.put(f"/properties/{property_id}/availability", headers=auth_header(token))
    assert made_available.status_code == 200
    assert made_available.json()["property_id"] == property_id

    response = await client.get(f"/properties/{property_id}")
    assert response.status_code == 200
    assert response.json()["id"] == property_id
    assert response.json()["availability"] is True


@pytest.mark.asyncio
async def test_update_replaces_every_field(client, db, landlord):
    _, token = landlord
    property_id = await create_property(client, token, availability=True)
    response = await client.put(
        f"/properties/{property_id}",
        json={"title": "Top flat", "description": "Renovated", "address": "9 Hill Road", "rent_fee": 1200},
        headers=auth_header(token),
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Property updated successfully", "property_id": property_id}
    prop = await db.get(Property, property_id)
    assert prop.title == "Top flat"
    assert prop.rent_fee == 1200
    # Omitted fields fall back to their defaults
    assert prop.availability is False
    assert prop.image is None


@pytest.mark.asyncio
async def test_mutations_on_missing_property_are_404(client, landlord):
    _, token = landlord
    body = {"title": "t", "description": "d", "address": "a", "rent_fee": 1}
    assert (await client.put("/properties/404", json=body, headers=auth_header(token))).status_code == 404
    assert (await client.delete("/properties/404", headers=auth_header(token))).status_code == 404
    assert (await client.put("/properties/404/availability", headers=auth_header(token))).status_code == 404


@pytest.mark.asyncio
async def test_non_owner_cannot_mutate(client, db, landlord):
    _, owner_token = landlord
    property_id = await create_property(client, owner_token)
    _, intruder_token = await signup(client, "landlord", "intruder@example.com")
    headers = auth_header(intruder_token)

    update = await client.put(
        f"/properties/{property_id}",
        json={"title": "Mine now", "description": "d", "address": "a", "rent_fee": 1},
        headers=headers,
    )
    assert update.status_code == 403
    assert update.json() == {"error": "Not authorized to update this property"}
    assert (await client.put(f"/properties/{property_id}/availability", headers=headers)).status_code == 403
    assert (await client.delete(f"/properties/{property_id}", headers=headers)).status_code == 403

    prop = await db.get(Property, property_id)
    assert prop.title == "Garden flat"
    assert prop.availability is False


@pytest.mark.asyncio
async def test_delete_property_removes_pending_requests(client, db, landlord, tenant):
    _, landlord_token = landlord
    _, tenant_token = tenant
    property_id = await create_property(client, landlord_token)
    await client.post(f"/properties/{property_id}/request", headers=auth_header(tenant_token))

    response = await client.delete(f"/properties/{property_id}", headers=auth_header(landlord_token))
    assert response.status_code == 200
    assert await db.get(Property, property_id) is None
    leftovers = await db.execute(select(PropertyRequest).where(PropertyRequest.property_id == property_id))
    assert leftovers.first() is None
    assert (await client.get("/properties")).json() == []


@pytest.mark.asyncio
async def test_deleted_landlord_token_cannot_create_property(client, landlord):
    _, token = landlord
    await client.delete("/landlords/delete_profile", headers=auth_header(token))
    response = await client.post(
        "/properties",
        json={"title": "t", "description": "d", "address": "a", "rent_fee": 1},
        headers=auth_header(token),
    )
    assert response.status_code == 401
    assert (await client.get("/properties")).json() == []
