"""
Version 2 client
================
Adds an unencrypted hint next to the cipher:

    2:b64(lockdate):b64(cipher):b64(hint)

Encryption and decryption are done by an internal V1Client; this class
only rewrites the version tag and handles the trailing hint field.
"""

import logging
from datetime import datetime

from ..analyzer import ClientVersion
from ..envelope import V2Codec
from ..errors import CapabilityError, SnailcryptError
from ..key_provider import KeyProvider
from .client import Client, DecryptResult
from .v1_client import V1Client

logger = logging.getLogger(__name__)


class V2Client(Client):

    def __init__(self, key_provider: KeyProvider):
        self._v1_client = V1Client(key_provider)
        self._codec = V2Codec()

    def encrypt(self, plaintext: str, lockdate: datetime,
                hint: str = "", filename: str = "") -> str:
        if filename:
            raise CapabilityError("Client version 2 does not support a filename.")
        encrypted = self._v1_client.encrypt(plaintext, lockdate)
        return self._codec.extend(encrypted, hint)

    def decrypt(self, envelope: str) -> DecryptResult:
        inner, hint = self._codec.reduce(envelope)
        try:
            result = self._v1_client.decrypt(inner)
        except SnailcryptError as exc:
            logger.debug(f"v2 decrypt failed, returning recovered hint: {exc}")
            raise exc.with_fields(hint=hint)
        return DecryptResult(plaintext=result.plaintext, hint=hint)

    def lockdate_from_envelope(self, envelope: str) -> datetime:
        return self._codec.lockdate(envelope)

    def datetime_format(self) -> str:
        return self._v1_client.datetime_format()

    def version(self) -> ClientVersion:
        return ClientVersion.V2
