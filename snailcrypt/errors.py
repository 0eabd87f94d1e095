"""
snailcrypt error hierarchy.

Every public operation raises one of these. Decryption failures carry the
auxiliary fields (hint, filename) that were already recovered from the
envelope when the failure happened, so a caller can still show the hint of
a message whose key has not been released yet.
"""


class SnailcryptError(Exception):
    """Base class for snailcrypt errors."""

    def __init__(self, message: str = "", hint: str = "", filename: str = ""):
        super().__init__(message)
        self.message  = message
        self.hint     = hint
        self.filename = filename

    def with_fields(self, hint: str = None, filename: str = None) -> "SnailcryptError":
        """Attach recovered auxiliary fields and return self for re-raising."""
        if hint is not None:
            self.hint = hint
        if filename is not None:
            self.filename = filename
        return self


# Envelope structure
class FormatError(SnailcryptError):
    """Wrong field count, bad base64/UTF-8, or an unparsable lockdate."""


class UnknownVersionError(FormatError):
    pass


# Key release service
class KeyProviderError(SnailcryptError):
    pass


class KeyUnavailable(KeyProviderError):
    """The private key for the lockdate has not been released yet."""


class KeyLookupFailed(KeyProviderError):
    """Transport, HTTP or service error while fetching a key."""


# Cipher
class CryptoError(SnailcryptError):
    pass


class CapabilityError(SnailcryptError):
    """The client version cannot carry a requested field."""
