"""
Chunked RSA-OAEP cipher
=======================
Encrypts arbitrary-length plaintext directly with RSA, one OAEP operation
per 126-byte chunk.

A single OAEP operation can only take a few hundred bytes, so the plaintext
is cut into fixed PLAINTEXT_CHUNK_SIZE slices. Every slice becomes exactly
one key-sized cipher block, and the blocks are concatenated without any
separator:

    cipher = E(p[0:126]) || E(p[126:252]) || ...     each block = key bytes

On the way back the block boundaries come from the key size alone. The
decrypted chunks are joined and cut at the first NUL byte, so plaintext
containing NUL bytes does not survive a round trip.

Padding is OAEP with MGF1-SHA1 / SHA1 and no label, which is what OpenSSL
calls RSA_PKCS1_OAEP_PADDING. 126 bytes stays below the SHA1-OAEP limit
for 2048-bit keys and larger (214 bytes at 2048 bits).

Dependencies: cryptography >= 41.0
"""

import logging
from typing import Union

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding

from .errors import CryptoError, KeyLookupFailed

logger = logging.getLogger(__name__)

PLAINTEXT_CHUNK_SIZE = 126


def _pem_bytes(pem: Union[str, bytes]) -> bytes:
    # The key release service quotes its PEM strings.
    if isinstance(pem, bytes):
        pem = pem.decode("utf-8")
    return pem.replace("'", "").encode("utf-8")


class ChunkCipher:
    """RSA-OAEP encryption / decryption in fixed-size plaintext chunks."""

    def __init__(self, private_key=None, public_key=None):
        """
        Pass loaded cryptography RSA key objects.
        A private key alone is enough for both directions.
        """
        if private_key is not None and public_key is None:
            public_key = private_key.public_key()
        self._private_key = private_key
        self._public_key  = public_key

    @classmethod
    def from_pem(cls, private_pem: Union[str, bytes] = None,
                 public_pem: Union[str, bytes] = None) -> "ChunkCipher":
        """Load keys from PEM text as handed out by the key release service."""
        try:
            priv = (serialization.load_pem_private_key(_pem_bytes(private_pem), password=None)
                    if private_pem else None)
            pub  = (serialization.load_pem_public_key(_pem_bytes(public_pem))
                    if public_pem else None)
        except (ValueError, TypeError) as exc:
            raise KeyLookupFailed(f"Unable to load key from PEM: {exc}") from exc
        return cls(private_key=priv, public_key=pub)

    @property
    def block_size(self) -> int:
        """Cipher block length in bytes, e.g. 256 for a 2048-bit key."""
        key = self._public_key if self._public_key is not None else self._private_key
        if key is None:
            raise CryptoError("No key loaded.")
        return (key.key_size + 7) // 8

    def _oaep(self):
        return padding.OAEP(
            mgf=padding.MGF1(algorithm=hashes.SHA1()),
            algorithm=hashes.SHA1(),
            label=None
        )

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt with the public key.
        Output is ceil(len(plaintext) / 126) * block_size bytes long.
        """
        if self._public_key is None:
            raise CryptoError("No public key loaded.")

        chunks = []
        i = 0
        while i * PLAINTEXT_CHUNK_SIZE < len(plaintext):
            start = i * PLAINTEXT_CHUNK_SIZE
            chunk = plaintext[start:min(len(plaintext), start + PLAINTEXT_CHUNK_SIZE)]
            try:
                block = self._public_key.encrypt(chunk, self._oaep())
            except ValueError as exc:
                raise CryptoError(f"Encryption of chunk {i} failed: {exc}") from exc
            chunks.append(block)
            i += 1

        cipher = b"".join(chunks)
        logger.debug(f"Encrypted {len(plaintext)}B in {i} chunk(s) -> {len(cipher)}B")
        return cipher

    def decrypt(self, cipher: bytes) -> bytes:
        """
        Decrypt with the private key.
        The result is cut at the first NUL byte.
        """
        if self._private_key is None:
            raise CryptoError("No private key loaded.")

        block_size = self.block_size
        if len(cipher) % block_size:
            raise CryptoError(
                f"Cipher length {len(cipher)} is not a multiple of the "
                f"{block_size}-byte key block.")

        count = len(cipher) // block_size
        plaintext = bytearray()
        for i in range(count):
            block = cipher[i * block_size:(i + 1) * block_size]
            try:
                plaintext += self._private_key.decrypt(block, self._oaep())
            except ValueError as exc:
                raise CryptoError(f"Decryption of chunk {i} failed: {exc}") from exc

        end = plaintext.find(b"\x00")
        if end != -1:
            del plaintext[end:]
        logger.debug(f"Decrypted {count} chunk(s) -> {len(plaintext)}B")
        return bytes(plaintext)
