"""
Version 1 client
================
Plain time-locked text: the plaintext is chunk-encrypted with the public
key of the lockdate and wrapped as

    1:b64(lockdate):b64(cipher)

No hint, no filename. Asking for either is refused before any key lookup.
"""

import logging
from datetime import datetime

from ..analyzer import ClientVersion
from ..chunk_cipher import ChunkCipher
from ..envelope import V1Codec, format_lockdate
from ..errors import CapabilityError, CryptoError
from ..key_provider import KeyProvider
from .client import Client, DecryptResult

logger = logging.getLogger(__name__)


class V1Client(Client):

    def __init__(self, key_provider: KeyProvider):
        self._key_provider = key_provider
        self._codec = V1Codec()

    def encrypt(self, plaintext: str, lockdate: datetime,
                hint: str = "", filename: str = "") -> str:
        if hint:
            raise CapabilityError("Client version 1 does not support a plaintext hint.")
        if filename:
            raise CapabilityError("Client version 1 does not support a filename.")

        # Fails on naive datetimes before the network is touched.
        format_lockdate(lockdate)
        public_pem = self._key_provider.public_key(lockdate)
        cipher = ChunkCipher.from_pem(public_pem=public_pem).encrypt(plaintext.encode("utf-8"))

        envelope = self._codec.serialize(lockdate, cipher)
        logger.info(f"Encrypted v1 envelope ({len(envelope)} chars) "
                    f"locked until {format_lockdate(lockdate)}")
        return envelope

    def decrypt(self, envelope: str) -> DecryptResult:
        parsed = self._codec.parse(envelope)
        private_pem = self._key_provider.private_key(parsed.lockdate)
        plaintext = ChunkCipher.from_pem(private_pem=private_pem).decrypt(parsed.cipher)
        try:
            text = plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CryptoError(f"Decrypted plaintext is not valid UTF-8: {exc}") from exc
        logger.info(f"Decrypted v1 envelope locked until {format_lockdate(parsed.lockdate)}")
        return DecryptResult(plaintext=text)

    def lockdate_from_envelope(self, envelope: str) -> datetime:
        return self._codec.lockdate(envelope)

    def version(self) -> ClientVersion:
        return ClientVersion.V1
