"""
Client configuration.

Defaults point at the public snailcrypt service. Each value can be
overridden through the environment:

    SNAILCRYPT_API_URL      base URL of the key release API
    SNAILCRYPT_TIMEOUT      seconds to wait for a key lookup
    SNAILCRYPT_WEBAPP_URL   timer page used by ez.timer_url()
"""

import os
from dataclasses import dataclass

DEFAULT_API_URL    = "https://api.snailcrypt.com"
DEFAULT_WEBAPP_URL = "https://webapp.snailcrypt.com/timer.php"
DEFAULT_TIMEOUT    = 10.0


@dataclass(frozen=True)
class Config:
    api_url: str    = DEFAULT_API_URL
    timeout: float  = DEFAULT_TIMEOUT
    webapp_url: str = DEFAULT_WEBAPP_URL

    @classmethod
    def from_env(cls) -> "Config":
        timeout = os.environ.get("SNAILCRYPT_TIMEOUT")
        return cls(
            api_url=os.environ.get("SNAILCRYPT_API_URL", DEFAULT_API_URL),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            webapp_url=os.environ.get("SNAILCRYPT_WEBAPP_URL", DEFAULT_WEBAPP_URL),
        )

    @property
    def keys_url(self) -> str:
        return self.api_url.rstrip("/") + "/keys"
