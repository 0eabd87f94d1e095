"""
snailcrypt — time-lock encryption client
========================================
Encrypt text today so that nobody, including you, can read it before a
chosen lockdate. The key release service hands out an RSA public key for
any lockdate but keeps the matching private key until that moment passes.

Envelope versions:
    1  TEXT      — 1:b64(lockdate):b64(cipher)
    2  HINT      — adds an unencrypted hint
    3  FILENAME  — adds a filename for time-locked files

Layers:
    ChunkCipher           — RSA-OAEP over 126-byte plaintext chunks
    V1/V2/V3Codec         — colon-separated envelope format
    VersionAnalyzer       — version tag detection
    KeyProvider           — key release service (HTTP or in-memory)
    V1/V2/V3Client        — each version wraps the previous one
    VersionSelectorClient — picks the version per call

License: MIT
"""

__version__  = "0.3.0"
__project__  = "snailcrypt"

from .analyzer     import ClientVersion, VersionAnalyzer
from .chunk_cipher import ChunkCipher, PLAINTEXT_CHUNK_SIZE
from .config       import Config
from .envelope     import (DATETIME_FORMAT, Envelope, V1Codec, V2Codec, V3Codec,
                           codec_for, format_lockdate, parse_envelope, parse_lockdate)
from .errors       import (SnailcryptError, FormatError, UnknownVersionError,
                           KeyProviderError, KeyUnavailable, KeyLookupFailed,
                           CryptoError, CapabilityError)
from .key_provider import KeyProvider, HttpKeyProvider, StaticKeyProvider
from .clients.client                  import Client, DecryptResult
from .clients.v1_client               import V1Client
from .clients.v2_client               import V2Client
from .clients.v3_client               import V3Client
from .clients.version_selector_client import VersionSelectorClient
from .factory      import create_analyzer, create_client, create_config
from .ez           import ez_decrypt, ez_encrypt, timer_url

__all__ = [
    "ClientVersion",
    "VersionAnalyzer",
    "ChunkCipher",
    "PLAINTEXT_CHUNK_SIZE",
    "Config",
    "DATETIME_FORMAT",
    "Envelope",
    "V1Codec",
    "V2Codec",
    "V3Codec",
    "codec_for",
    "format_lockdate",
    "parse_envelope",
    "parse_lockdate",
    "SnailcryptError",
    "FormatError",
    "UnknownVersionError",
    "KeyProviderError",
    "KeyUnavailable",
    "KeyLookupFailed",
    "CryptoError",
    "CapabilityError",
    "KeyProvider",
    "HttpKeyProvider",
    "StaticKeyProvider",
    "Client",
    "DecryptResult",
    "V1Client",
    "V2Client",
    "V3Client",
    "VersionSelectorClient",
    "create_analyzer",
    "create_client",
    "create_config",
    "ez_decrypt",
    "ez_encrypt",
    "timer_url",
]
