"""Bearer token issuing and verification.

Learn: verify_token never raises — every failure is None. These tests
cover the round trip, expiry, tampering and wrong-key cases.
"""

import base64
import json
import uuid
from datetime import datetime, timedelta, timezone

import jwt as pyjwt

from prodhub.auth.jwt import issue_token, verify_token
from prodhub.config import settings


def test_round_trip():
    user_id = uuid.uuid4()
    claims = verify_token(issue_token(user_id))
    assert claims is not None
    assert claims.user_id == user_id


def test_seven_day_lifetime():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    token = issue_token(uuid.uuid4(), now=now)
    payload = pyjwt.decode(
        token,
        settings.jwt_secret,
        algorithms=["HS256"],
        options={"verify_exp": False},
    )
    assert payload["exp"] - payload["iat"] == 7 * 24 * 3600
    assert payload["iat"] == int(now.timestamp())


def test_deterministic_for_same_inputs():
    user_id = uuid.uuid4()
    now = datetime(2026, 3, 4, 5, 6, 7, tzinfo=timezone.utc)
    assert issue_token(user_id, now=now) == issue_token(user_id, now=now)


def test_expired_token_rejected():
    issued = datetime.now(timezone.utc) - timedelta(days=8)
    token = issue_token(uuid.uuid4(), now=issued)
    assert verify_token(token) is None


def test_tampered_signature_rejected():
    token = issue_token(uuid.uuid4())
    header, payload, signature = token.split(".")
    flipped = "A" if signature[0] != "A" else "B"
    tampered = f"{header}.{payload}.{flipped}{signature[1:]}"
    assert verify_token(tampered) is None


def test_tampered_payload_rejected():
    token = issue_token(uuid.uuid4())
    other = issue_token(uuid.uuid4())
    header, _, signature = token.split(".")
    _, other_payload, _ = other.split(".")
    assert verify_token(f"{header}.{other_payload}.{signature}") is None


def test_wrong_secret_rejected():
    token = issue_token(uuid.uuid4(), secret="another-secret-" + "y" * 40)
    assert verify_token(token) is None


def test_garbage_rejected():
    assert verify_token("not.a.token") is None
    assert verify_token("") is None
    assert verify_token("abc") is None


def test_non_uuid_subject_rejected():
    now = datetime.now(timezone.utc)
    token = pyjwt.encode(
        {"sub": "not-a-uuid", "iat": now, "exp": now + timedelta(days=1)},
        settings.jwt_secret,
        algorithm="HS256",
    )
    assert verify_token(token) is None


def test_missing_exp_rejected():
    token = pyjwt.encode(
        {"sub": str(uuid.uuid4()), "iat": datetime.now(timezone.utc)},
        settings.jwt_secret,
        algorithm="HS256",
    )
    assert verify_token(token) is None


def test_alg_none_rejected():
    def b64(obj):
        raw = json.dumps(obj).encode()
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()

    now = int(datetime.now(timezone.utc).timestamp())
    header = b64({"alg": "none", "typ": "JWT"})
    payload = b64({"sub": str(uuid.uuid4()), "iat": now, "exp": now + 3600})
    assert verify_token(f"{header}.{payload}.") is None
