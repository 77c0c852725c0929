from scripts.seed_lookups import COUNTRIES, seed_lookups


async def test_seed_is_idempotent(session_scope, lookups):
    assert lookups == {"countries": 5, "states": 10, "categories": 5, "subcategories": 5}

    async with session_scope() as session:
        again = await seed_lookups(session)

    assert again == {"countries": 0, "states": 0, "categories": 0, "subcategories": 0}


async def test_list_countries(client, lookups):
    response = await client.get("/api/lookups/countries")

    assert response.status_code == 200
    names = [country["name"] for country in response.json()["data"]]
    assert sorted(names) == sorted(country["name"] for country in COUNTRIES)


async def test_list_states_of_country(client, lookups):
    countries = (await client.get("/api/lookups/countries")).json()["data"]
    india = next(country for country in countries if country["name"] == "India")

    response = await client.get(f"/api/lookups/countries/{india['id']}/states")

    assert response.status_code == 200
    states = response.json()["data"]
    assert [state["name"] for state in states] == ["Gujarat", "Maharashtra"]
    assert all(state["countryId"] == india["id"] for state in states)


async def test_states_of_unknown_country(client, lookups):
    response = await client.get("/api/lookups/countries/999/states")

    assert response.status_code == 404
    assert response.json()["errorCode"] == "INVALID_COUNTRY_ID"


async def test_list_categories_and_subcategories(client, lookups):
    categories = (await client.get("/api/lookups/categories")).json()["data"]
    spiritual = next(category for category in categories if category["categoryName"] == "Spiritual")

    response = await client.get(f"/api/lookups/categories/{spiritual['id']}/subcategories")

    assert response.status_code == 200
    assert [sub["subcategoryName"] for sub in response.json()["data"]] == ["Bhajan"]


async def test_subcategories_of_unknown_category(client):
    response = await client.get("/api/lookups/categories/77/subcategories")

    assert response.status_code == 404
    assert response.json()["errorCode"] == "INVALID_CATEGORY_ID"


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.json()["database"] == "connected"
