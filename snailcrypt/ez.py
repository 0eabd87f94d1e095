"""
One-call helpers around the version selecting client.
"""

from datetime import datetime
from typing import Union
from urllib.parse import urlencode

from .clients.client import Client, DecryptResult
from .config import Config
from .envelope import parse_lockdate
from .factory import create_client, create_config


def ez_encrypt(plaintext: str, lockdate: Union[datetime, str],
               hint: str = "", filename: str = "", client: Client = None) -> str:
    """
    Encrypt with the oldest envelope version able to carry hint/filename.
    lockdate may be a string like "2022-11-19T17:00:00+0100".
    """
    if isinstance(lockdate, str):
        lockdate = parse_lockdate(lockdate)
    client = client or create_client()
    return client.encrypt(plaintext, lockdate, hint=hint, filename=filename)


def ez_decrypt(envelope: str, client: Client = None) -> DecryptResult:
    client = client or create_client()
    return client.decrypt(envelope)


def timer_url(envelope: str, config: Config = None) -> str:
    """Link to the web app page that counts down to the envelope's lockdate."""
    config = config or create_config()
    return f"{config.webapp_url}?{urlencode({'c': envelope})}"
