"""
Version 3 client
================
Adds a filename so an arbitrary file can be time-locked:

    3:b64(lockdate):b64(cipher):b64(hint):b64(filename)

Built on an internal V2Client the same way V2 is built on V1.
"""

import logging
from datetime import datetime

from ..analyzer import ClientVersion
from ..envelope import V3Codec
from ..errors import SnailcryptError
from ..key_provider import KeyProvider
from .client import Client, DecryptResult
from .v2_client import V2Client

logger = logging.getLogger(__name__)


class V3Client(Client):

    def __init__(self, key_provider: KeyProvider):
        self._v2_client = V2Client(key_provider)
        self._codec = V3Codec()

    def encrypt(self, plaintext: str, lockdate: datetime,
                hint: str = "", filename: str = "") -> str:
        encrypted = self._v2_client.encrypt(plaintext, lockdate, hint=hint)
        return self._codec.extend(encrypted, filename)

    def decrypt(self, envelope: str) -> DecryptResult:
        inner, filename = self._codec.reduce(envelope)
        try:
            result = self._v2_client.decrypt(inner)
        except SnailcryptError as exc:
            logger.debug(f"v3 decrypt failed, returning recovered fields: {exc}")
            raise exc.with_fields(filename=filename)
        return DecryptResult(plaintext=result.plaintext, hint=result.hint, filename=filename)

    def lockdate_from_envelope(self, envelope: str) -> datetime:
        return self._codec.lockdate(envelope)

    def datetime_format(self) -> str:
        return self._v2_client.datetime_format()

    def version(self) -> ClientVersion:
        return ClientVersion.V3
