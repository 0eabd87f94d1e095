"""
Shared fixtures: throwaway RSA keypairs served by an in-memory provider.
Key generation happens here only; the library itself never generates keys.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import datetime

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from snailcrypt.envelope     import parse_lockdate
from snailcrypt.key_provider import KeyProvider, StaticKeyProvider

LOCKDATE = parse_lockdate("2022-11-19T17:00:00+0100")
FUTURE   = parse_lockdate("2999-01-01T00:00:00+0000")


def make_keypair(key_size: int = 2048):
    priv = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    public_pem = priv.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo
    ).decode()
    private_pem = priv.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption()
    ).decode()
    return public_pem, private_pem


class CountingKeyProvider(KeyProvider):
    """Records every lookup made through the wrapped provider."""

    def __init__(self, inner: KeyProvider):
        self.inner = inner
        self.calls = []

    def public_key(self, lockdate: datetime) -> str:
        self.calls.append(("public", lockdate))
        return self.inner.public_key(lockdate)

    def private_key(self, lockdate: datetime) -> str:
        self.calls.append(("private", lockdate))
        return self.inner.private_key(lockdate)


@pytest.fixture(scope="session")
def keypair():
    return make_keypair()


@pytest.fixture(scope="session")
def other_keypair():
    return make_keypair()


@pytest.fixture
def provider(keypair, other_keypair):
    return CountingKeyProvider(StaticKeyProvider({
        LOCKDATE: keypair,
        FUTURE:   other_keypair,
    }))
