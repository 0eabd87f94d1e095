"""
Key providers — HTTP client against a mocked requests session, and the
in-memory provider's release rule.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import timedelta
from unittest import mock

import pytest
import requests
from snailcrypt.config       import Config
from snailcrypt.errors       import KeyLookupFailed, KeyUnavailable
from snailcrypt.key_provider import HttpKeyProvider, StaticKeyProvider

from conftest import FUTURE, LOCKDATE


def _session(payload=None, status=200, json_error=False):
    response = mock.Mock(status_code=status)
    if json_error:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    session = mock.Mock(spec=requests.Session)
    session.post.return_value = response
    return session


# ── HTTP ──────────────────────────────────────────────────────────────────────
def test_http_request_shape():
    session = _session({"public_key": "PUB"})
    provider = HttpKeyProvider(Config(api_url="https://keys.example/", timeout=3.0), session)
    assert provider.public_key(LOCKDATE) == "PUB"
    session.post.assert_called_once_with(
        "https://keys.example/keys",
        json={"lock_date": "2022-11-19T17:00:00+0100"},
        timeout=3.0,
    )

def test_http_private_key_released():
    provider = HttpKeyProvider(Config(), _session({"public_key": "PUB", "private_key": "PRIV"}))
    assert provider.private_key(LOCKDATE) == "PRIV"

def test_http_private_key_not_released():
    provider = HttpKeyProvider(Config(), _session({"public_key": "PUB"}))
    with pytest.raises(KeyUnavailable) as exc:
        provider.private_key(FUTURE)
    assert "not been yet released" in str(exc.value)

def test_http_private_key_null_not_released():
    provider = HttpKeyProvider(Config(), _session({"public_key": "PUB", "private_key": None}))
    with pytest.raises(KeyUnavailable):
        provider.private_key(FUTURE)

def test_http_service_error_code():
    provider = HttpKeyProvider(Config(), _session({"code": 400, "message": "invalid lock date"}, 400))
    with pytest.raises(KeyLookupFailed) as exc:
        provider.public_key(LOCKDATE)
    assert str(exc.value) == "invalid lock date"

def test_http_service_error_code_on_private_lookup_is_not_unavailable():
    provider = HttpKeyProvider(Config(), _session({"code": "E42", "message": "boom"}))
    with pytest.raises(KeyLookupFailed):
        provider.private_key(LOCKDATE)

def test_http_missing_public_key():
    provider = HttpKeyProvider(Config(), _session({}))
    with pytest.raises(KeyLookupFailed):
        provider.public_key(LOCKDATE)

@pytest.mark.parametrize("session", [
    _session(json_error=True),
    _session(["not", "an", "object"]),
    _session({"public_key": "PUB"}, status=503),
])
def test_http_bad_responses(session):
    with pytest.raises(KeyLookupFailed):
        HttpKeyProvider(Config(), session).public_key(LOCKDATE)

def test_http_transport_error():
    session = mock.Mock(spec=requests.Session)
    session.post.side_effect = requests.exceptions.ConnectionError("unreachable")
    with pytest.raises(KeyLookupFailed) as exc:
        HttpKeyProvider(Config(), session).public_key(LOCKDATE)
    assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)

def test_http_timeout():
    session = mock.Mock(spec=requests.Session)
    session.post.side_effect = requests.exceptions.Timeout("slow")
    with pytest.raises(KeyLookupFailed):
        HttpKeyProvider(Config(), session).private_key(LOCKDATE)

# ── In-memory ─────────────────────────────────────────────────────────────────
def test_static_release_follows_clock():
    keys = {LOCKDATE: ("PUB", "PRIV")}
    before = StaticKeyProvider(keys, clock=lambda: LOCKDATE - timedelta(seconds=1))
    at     = StaticKeyProvider(keys, clock=lambda: LOCKDATE)
    assert before.public_key(LOCKDATE) == "PUB"
    with pytest.raises(KeyUnavailable):
        before.private_key(LOCKDATE)
    assert at.private_key(LOCKDATE) == "PRIV"

def test_static_accepts_formatted_lockdates():
    provider = StaticKeyProvider({"2022-11-19T17:00:00+0100": ("PUB", "PRIV")})
    assert provider.private_key(LOCKDATE) == "PRIV"

def test_static_unknown_lockdate():
    with pytest.raises(KeyLookupFailed):
        StaticKeyProvider({}).public_key(LOCKDATE)
