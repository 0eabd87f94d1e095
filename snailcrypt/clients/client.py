"""
Client interface shared by every envelope version.

A client turns plaintext plus a lockdate into an envelope string and back.
Failures raise snailcrypt.errors exceptions; a failed decrypt still carries
the hint and filename it managed to recover on the raised error.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ..analyzer import ClientVersion
from ..envelope import DATETIME_FORMAT


@dataclass(frozen=True)
class DecryptResult:
    plaintext: str
    hint: str     = ""
    filename: str = ""

    def __str__(self):
        return self.plaintext


class Client(ABC):

    @abstractmethod
    def encrypt(self, plaintext: str, lockdate: datetime,
                hint: str = "", filename: str = "") -> str:
        """Encrypt plaintext so it can be decrypted once lockdate has passed."""

    @abstractmethod
    def decrypt(self, envelope: str) -> DecryptResult:
        pass

    @abstractmethod
    def lockdate_from_envelope(self, envelope: str) -> datetime:
        pass

    def datetime_format(self) -> str:
        return DATETIME_FORMAT

    @abstractmethod
    def version(self) -> ClientVersion:
        pass
