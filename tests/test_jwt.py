import time

import jwt as pyjwt
import pytest

from suarakan.jwt import SECRET_ENV_VAR, JwtClaims, TokenError, verify_token


def _payload(**overrides):
    now = int(time.time())
    payload = {
        "token_type": "access",
        "exp": now + 300,
        "iat": now,
        "jti": "jti-1",
        "user_id": 42,
        "email": "admin@example.com",
        "full_name": "Admin User",
        "user_type": "ADMIN",
        "is_email_verified": True,
    }
    payload.update(overrides)
    return payload


def _encode(payload, algorithm="HS256"):
    return pyjwt.encode(payload, "secret", algorithm=algorithm)


def test_valid_token_returns_claims():
    payload = _payload()
    claims = verify_token(_encode(payload), "secret")
    assert claims == JwtClaims(**payload)
    assert claims.user_type == "ADMIN"


def test_wrong_secret_is_rejected():
    wrong_secret = "placeholder"
    with pytest.raises(TokenError):
        verify_token(_encode(_payload()), wrong_secret)


def test_expired_token_is_rejected():
    token = _encode(_payload(exp=int(time.time()) - 3600))
    with pytest.raises(TokenError):
        verify_token(token, "secret")


def test_recently_expired_token_is_within_leeway():
    payload = _payload(exp=int(time.time()) - 10)
    assert verify_token(_encode(payload), "secret").exp == payload["exp"]


def test_missing_exp_is_rejected():
    payload = _payload()
    del payload["exp"]
    with pytest.raises(TokenError):
        verify_token(_encode(payload), "secret")


@pytest.mark.parametrize("claim", ["user_id", "email", "user_type", "is_email_verified"])
def test_missing_claim_is_rejected(claim):
    payload = _payload()
    del payload[claim]
    with pytest.raises(TokenError):
        verify_token(_encode(payload), "secret")


def test_other_algorithm_is_rejected():
    with pytest.raises(TokenError):
        verify_token(_encode(_payload(), algorithm="HS512"), "secret")


def test_malformed_token_is_rejected():
    with pytest.raises(TokenError):
        verify_token("token", "secret")


def test_secret_is_read_from_environment(monkeypatch):
    monkeypatch.setenv(SECRET_ENV_VAR, "secret")
    payload = _payload(user_id=7)
    assert verify_token(_encode(payload)).user_id == 7


def test_missing_environment_secret_raises(monkeypatch):
    monkeypatch.delenv(SECRET_ENV_VAR, raising=False)
    with pytest.raises(RuntimeError):
        verify_token(_encode(_payload()))


def test_from_dict_rejects_bool_user_id():
    with pytest.raises(TokenError):
        JwtClaims.from_dict(_payload(user_id=True))


def test_from_dict_rejects_negative_exp():
    with pytest.raises(TokenError):
        JwtClaims.from_dict(_payload(exp=-1))


def test_from_dict_ignores_extra_claims():
    payload = _payload()
    claims = JwtClaims.from_dict({**payload, "aud": "someone"})
    assert claims == JwtClaims(**payload)