"""
Envelope version detection.

The version tag is the first colon-separated field of an envelope. The
analyzer only looks at that tag; it does not validate the rest.
"""

from enum import Enum
from functools import total_ordering

from .errors import UnknownVersionError

FIELD_SEPARATOR = ":"


@total_ordering
class ClientVersion(Enum):
    V1 = "1"
    V2 = "2"
    V3 = "3"

    def __lt__(self, other):
        if not isinstance(other, ClientVersion):
            return NotImplemented
        return int(self.value) < int(other.value)

    def __str__(self):
        return self.value


class VersionAnalyzer:
    """Maps an envelope to the ClientVersion that produced it."""

    def get_version(self, envelope: str) -> ClientVersion:
        """
        An empty envelope has an empty tag and is rejected like any
        other unknown tag.
        """
        return self.str_to_version(envelope.split(FIELD_SEPARATOR, 1)[0])

    def str_to_version(self, tag: str) -> ClientVersion:
        try:
            return ClientVersion(tag)
        except ValueError:
            raise UnknownVersionError(f"Unknown client version: {tag}") from None
