from datetime import timedelta
from types import SimpleNamespace

import jwt
import pytest

from eventhub.core.exceptions import InvalidTokenError
from eventhub.core.security import (
    create_jwt_token,
    decode_jwt_token,
    issue_session_token,
    verify_session_token,
)


def test_session_token_round_trips_user_claims(settings):
    user = SimpleNamespace(id=42, mobile_number="9999999999")

    claims = verify_session_token(issue_session_token(user, settings=settings), settings=settings)

    assert claims.userId == 42
    assert claims.mobileNumber == "9999999999"
    # one hour validity window
    assert claims.exp - claims.iat == 3600


def test_expired_token_is_rejected(settings):
    token = create_jwt_token(
        {"userId": 1, "mobileNumber": "9999999999"},
        expires_delta=timedelta(seconds=-5),
        settings=settings,
    )

    with pytest.raises(InvalidTokenError):
        decode_jwt_token(token, settings=settings)


def test_tampered_token_is_rejected(settings):
    token = create_jwt_token({"userId": 1, "mobileNumber": "9999999999"}, settings=settings)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(InvalidTokenError):
        decode_jwt_token(tampered, settings=settings)


def test_token_signed_with_another_key_is_rejected(settings):
    token = jwt.encode({"userId": 1, "mobileNumber": "1", "exp": 9999999999}, "other-key", algorithm="HS256")

    with pytest.raises(InvalidTokenError):
        verify_session_token(token, settings=settings)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_malformed_token_is_rejected(settings, token):
    with pytest.raises(InvalidTokenError):
        decode_jwt_token(token, settings=settings)


def test_token_without_user_claims_is_rejected(settings):
    token = create_jwt_token({"sub": "1"}, settings=settings)

    with pytest.raises(InvalidTokenError) as exc_info:
        verify_session_token(token, settings=settings)
    assert exc_info.value.status_code == 401


async def test_protected_route_requires_authorization_header(client):
    response = await client.delete("/api/events/deleteevent/1")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["errorCode"] == "INVALID_TOKEN"


async def test_protected_route_rejects_bad_token(client):
    response = await client.delete(
        "/api/events/deleteevent/1",
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401


async def test_protected_route_rejects_expired_token(client, settings):
    token = create_jwt_token(
        {"userId": 1, "mobileNumber": "9999999999"},
        expires_delta=timedelta(minutes=-1),
        settings=settings,
    )

    response = await client.delete(
        "/api/events/deleteevent/1",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401
