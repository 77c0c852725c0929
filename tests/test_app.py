from httpx import ASGITransport, AsyncClient

LOGIN = {"mobileNo": "5550001111", "countryCode": "+44"}


def client_for(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_otp_endpoints_use_the_apps_own_limit(build_app):
    strict = await build_app(RATE_LIMIT_ENABLED=True, RATE_LIMIT_OTP="2/minute")

    async with client_for(strict) as client:
        statuses = [(await client.post("/api/user/login", json=LOGIN)).status_code for _ in range(3)]
        limited = await client.post("/api/user/login", json=LOGIN)

    assert statuses == [404, 404, 429]
    assert limited.status_code == 429
    assert limited.json()["success"] is False
    assert limited.json()["errorCode"] == "RATE_LIMITED"


async def test_limits_are_counted_per_app(build_app):
    strict = await build_app(RATE_LIMIT_ENABLED=True, RATE_LIMIT_OTP="1/minute")
    lenient = await build_app(RATE_LIMIT_ENABLED=True, RATE_LIMIT_OTP="10/minute")

    async with client_for(strict) as client:
        await client.post("/api/user/login", json=LOGIN)
        assert (await client.post("/api/user/login", json=LOGIN)).status_code == 429

    async with client_for(lenient) as client:
        assert (await client.post("/api/user/login", json=LOGIN)).status_code == 404


async def test_verify_otp_is_limited_separately_from_login(build_app):
    strict = await build_app(RATE_LIMIT_ENABLED=True, RATE_LIMIT_OTP="1/minute")

    async with client_for(strict) as client:
        await client.post("/api/user/login", json=LOGIN)
        verify = await client.post("/api/user/verify-otp", json={**LOGIN, "otp": "123456"})

    assert verify.status_code == 400
    assert verify.json()["errorCode"] == "USER_NOT_FOUND"


async def test_disabled_limiter_never_rejects(build_app):
    open_app = await build_app(RATE_LIMIT_ENABLED=False, RATE_LIMIT_OTP="1/minute")

    async with client_for(open_app) as client:
        statuses = {(await client.post("/api/user/login", json=LOGIN)).status_code for _ in range(3)}

    assert statuses == {404}


async def test_docs_hidden_in_production(build_app):
    production = await build_app(ENVIRONMENT="production")
    development = await build_app(ENVIRONMENT="development")

    async with client_for(production) as client:
        assert (await client.get("/docs")).status_code == 404
        assert (await client.get("/openapi.json")).status_code == 404

    async with client_for(development) as client:
        assert (await client.get("/docs")).status_code == 200
        assert (await client.get("/openapi.json")).status_code == 200
