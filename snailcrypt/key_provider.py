"""
Key release providers.

The key release service indexes RSA keypairs by lockdate. The public key
is always available; the private key is only handed out once the lockdate
has passed.

Request:   POST <api_url>/keys   {"lock_date": "2022-11-19T17:00:00+0100"}
Response:  {"public_key": "...", "private_key": "..."}     (private optional)
       or  {"code": ..., "message": "..."}

Dependencies: requests
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Tuple

import requests

from .config import Config
from .envelope import format_lockdate
from .errors import KeyLookupFailed, KeyUnavailable

logger = logging.getLogger(__name__)

NOT_RELEASED_MESSAGE = "Error: private key has not been yet released"


class KeyProvider(ABC):
    """Source of PEM encoded keys for a lockdate."""

    @abstractmethod
    def public_key(self, lockdate: datetime) -> str:
        """Return the public key PEM. Raises KeyLookupFailed."""

    @abstractmethod
    def private_key(self, lockdate: datetime) -> str:
        """Return the private key PEM. Raises KeyUnavailable or KeyLookupFailed."""


class HttpKeyProvider(KeyProvider):
    """Fetches keys from the snailcrypt key release API."""

    def __init__(self, config: Config = None, session: requests.Session = None):
        self._config  = config or Config()
        self._session = session or requests.Session()

    def _request(self, lockdate: datetime) -> dict:
        lock_date = format_lockdate(lockdate)
        url = self._config.keys_url
        logger.debug(f"Key lookup: POST {url} lock_date={lock_date}")
        try:
            response = self._session.post(url, json={"lock_date": lock_date},
                                          timeout=self._config.timeout)
        except requests.exceptions.RequestException as exc:
            raise KeyLookupFailed(f"Key lookup for {lock_date} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            raise KeyLookupFailed(
                f"Key lookup for {lock_date} failed: HTTP {response.status_code}, "
                f"response is not a JSON object")

        if "code" in payload:
            message = payload.get("message") or f"service error {payload['code']}"
            raise KeyLookupFailed(str(message))

        if response.status_code != 200:
            raise KeyLookupFailed(
                f"Key lookup for {lock_date} failed: HTTP {response.status_code}")
        return payload

    def public_key(self, lockdate: datetime) -> str:
        public_key = self._request(lockdate).get("public_key")
        if not isinstance(public_key, str):
            raise KeyLookupFailed("Error: unable to extract public key from response")
        return public_key

    def private_key(self, lockdate: datetime) -> str:
        private_key = self._request(lockdate).get("private_key")
        if not isinstance(private_key, str):
            raise KeyUnavailable(NOT_RELEASED_MESSAGE)
        return private_key


class StaticKeyProvider(KeyProvider):
    """
    Serves externally supplied keypairs from memory.

    keys maps lockdates (datetime or formatted string) to
    (public_pem, private_pem). The private key is withheld until clock()
    reaches the lockdate, the way the release service does it.
    """

    def __init__(self, keys: Dict[object, Tuple[str, str]],
                 clock: Optional[Callable[[], datetime]] = None):
        self._keys = {
            k if isinstance(k, str) else format_lockdate(k): pair
            for k, pair in keys.items()
        }
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _pair(self, lockdate: datetime) -> Tuple[str, str]:
        lock_date = format_lockdate(lockdate)
        try:
            return self._keys[lock_date]
        except KeyError:
            raise KeyLookupFailed(f"No keypair for lockdate {lock_date}") from None

    def public_key(self, lockdate: datetime) -> str:
        return self._pair(lockdate)[0]

    def private_key(self, lockdate: datetime) -> str:
        pair = self._pair(lockdate)
        if self._clock() < lockdate:
            raise KeyUnavailable(NOT_RELEASED_MESSAGE)
        return pair[1]
