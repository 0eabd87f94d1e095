"""
Envelope wire format
====================
An envelope is a colon-separated string whose first field is the version
tag. Every later field is base64:

    V1:  1:b64(lockdate):b64(cipher)
    V2:  2:b64(lockdate):b64(cipher):b64(hint)
    V3:  3:b64(lockdate):b64(cipher):b64(hint):b64(filename)

Each version is the previous one with its tag replaced and one field
appended. V1Codec reads and writes the base layout; ExtensionCodec adds or
peels the trailing field of V2 and V3, so a newer client can wrap the
output of the older one without touching the cipher field.

The field count is checked exactly for the claimed version. Trailing empty
fields count (empty plaintext gives an empty cipher field, an empty hint an
empty hint field).
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from .analyzer import FIELD_SEPARATOR, ClientVersion, VersionAnalyzer
from .errors import FormatError, SnailcryptError

logger = logging.getLogger(__name__)

DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def format_lockdate(lockdate: datetime) -> str:
    if lockdate.utcoffset() is None:
        raise FormatError(f"Lockdate {lockdate.isoformat()} has no UTC offset.")
    return lockdate.strftime(DATETIME_FORMAT)


def parse_lockdate(text: str) -> datetime:
    try:
        return datetime.strptime(text, DATETIME_FORMAT)
    except ValueError as exc:
        raise FormatError(f"Invalid lockdate {text!r}: {exc}") from exc


def b64encode_bytes(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64encode_text(text: str) -> str:
    return b64encode_bytes(text.encode("utf-8"))


def b64decode_bytes(field: str, name: str) -> bytes:
    try:
        return base64.b64decode(field, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise FormatError(f"Invalid base64 in {name} field: {exc}") from exc


def b64decode_text(field: str, name: str) -> str:
    try:
        return b64decode_bytes(field, name).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(f"Invalid UTF-8 in {name} field: {exc}") from exc


@dataclass(frozen=True)
class Envelope:
    version: ClientVersion
    lockdate: datetime
    cipher: bytes
    hint: str     = ""
    filename: str = ""


class EnvelopeCodec:
    """Shared field splitting and lockdate access for every version."""

    version: ClientVersion = None
    field_count: int = 0

    def split(self, envelope: str) -> List[str]:
        fields = envelope.split(FIELD_SEPARATOR)
        if len(fields) != self.field_count:
            raise FormatError(
                f"Cipher is invalid. It must consist of {self.field_count} "
                f"components separated by a colon.")
        return fields

    def lockdate(self, envelope: str) -> datetime:
        fields = self.split(envelope)
        return parse_lockdate(b64decode_text(fields[1], "lockdate"))


class V1Codec(EnvelopeCodec):
    version = ClientVersion.V1
    field_count = 3

    def serialize(self, lockdate: datetime, cipher: bytes) -> str:
        return FIELD_SEPARATOR.join([
            str(self.version),
            b64encode_text(format_lockdate(lockdate)),
            b64encode_bytes(cipher),
        ])

    def parse(self, envelope: str) -> Envelope:
        """
        Decode lockdate and cipher. The tag is taken as-is so that V2/V3
        can hand down their reduced envelope.
        """
        fields = self.split(envelope)
        lockdate = parse_lockdate(b64decode_text(fields[1], "lockdate"))
        cipher = b64decode_bytes(fields[2], "cipher")
        return Envelope(self.version, lockdate, cipher)


class ExtensionCodec(EnvelopeCodec):
    """A version that appends one base64 text field to its parent layout."""

    parent: EnvelopeCodec = None
    field_name: str = ""

    def __init__(self):
        self.field_count = self.parent.field_count + 1

    def extend(self, inner_envelope: str, value: str) -> str:
        """Swap the parent's tag for ours and append b64(value)."""
        fields = self.parent.split(inner_envelope)
        fields[0] = str(self.version)
        fields.append(b64encode_text(value))
        return FIELD_SEPARATOR.join(fields)

    def reduce(self, envelope: str) -> Tuple[str, str]:
        """Peel off the trailing field; returns (inner_envelope, value)."""
        fields = self.split(envelope)
        value = b64decode_text(fields.pop(), self.field_name)
        return FIELD_SEPARATOR.join(fields), value


class V2Codec(ExtensionCodec):
    version = ClientVersion.V2
    parent = V1Codec()
    field_name = "hint"


class V3Codec(ExtensionCodec):
    version = ClientVersion.V3
    parent = V2Codec()
    field_name = "filename"


_CODECS = {
    ClientVersion.V1: V1Codec(),
    ClientVersion.V2: V2Codec(),
    ClientVersion.V3: V3Codec(),
}


def codec_for(version: ClientVersion) -> EnvelopeCodec:
    return _CODECS[version]


def parse_envelope(envelope: str, analyzer: VersionAnalyzer = None) -> Envelope:
    """
    Fully decode an envelope of any version without key material.
    On failure the raised error carries every auxiliary field decoded so far.
    """
    version = (analyzer or VersionAnalyzer()).get_version(envelope)
    recovered = {}
    codec = codec_for(version)
    try:
        while isinstance(codec, ExtensionCodec):
            envelope, recovered[codec.field_name] = codec.reduce(envelope)
            codec = codec.parent
        base = codec.parse(envelope)
    except SnailcryptError as exc:
        raise exc.with_fields(**recovered)
    logger.debug(f"Parsed v{version} envelope: {len(base.cipher)}B cipher")
    return Envelope(version, base.lockdate, base.cipher, **recovered)
