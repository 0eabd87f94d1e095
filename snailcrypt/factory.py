"""
Composition root: wires config, analyzer, key provider and clients.

    client = create_client()                       # picks the version per call
    client = create_client(ClientVersion.V2)       # a single version
    client = create_client(key_provider=provider)  # offline / tests
"""

import logging

from .analyzer import ClientVersion, VersionAnalyzer
from .clients.client import Client
from .clients.v1_client import V1Client
from .clients.v2_client import V2Client
from .clients.v3_client import V3Client
from .clients.version_selector_client import VersionSelectorClient
from .config import Config
from .key_provider import HttpKeyProvider, KeyProvider

logger = logging.getLogger(__name__)

_CLIENT_CLASSES = {
    ClientVersion.V1: V1Client,
    ClientVersion.V2: V2Client,
    ClientVersion.V3: V3Client,
}


def create_config() -> Config:
    return Config.from_env()


def create_analyzer() -> VersionAnalyzer:
    return VersionAnalyzer()


def create_client(version: ClientVersion = None, config: Config = None,
                  key_provider: KeyProvider = None) -> Client:
    """
    Build a client. Without a version the result is a VersionSelectorClient
    over V1/V2/V3 sharing one key provider.
    """
    if key_provider is None:
        config = config or create_config()
        key_provider = HttpKeyProvider(config)
        logger.debug(f"Using key release API at {config.api_url}")

    if version is not None:
        return _CLIENT_CLASSES[version](key_provider)

    return VersionSelectorClient(
        create_analyzer(),
        V1Client(key_provider),
        V2Client(key_provider),
        V3Client(key_provider),
    )
