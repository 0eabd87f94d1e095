"""
Version selecting client.

Encrypts with the oldest version that can carry the requested fields and
decrypts with whichever version produced the envelope.
"""

import logging
from datetime import datetime
from typing import Dict

from ..analyzer import ClientVersion, VersionAnalyzer
from .client import Client, DecryptResult

logger = logging.getLogger(__name__)


class VersionSelectorClient(Client):

    def __init__(self, analyzer: VersionAnalyzer,
                 v1_client: Client, v2_client: Client, v3_client: Client):
        self._analyzer = analyzer
        self._clients: Dict[ClientVersion, Client] = {
            ClientVersion.V1: v1_client,
            ClientVersion.V2: v2_client,
            ClientVersion.V3: v3_client,
        }

    @property
    def analyzer(self) -> VersionAnalyzer:
        return self._analyzer

    def select(self, hint: str = "", filename: str = "") -> Client:
        if filename:
            return self._clients[ClientVersion.V3]
        if hint:
            return self._clients[ClientVersion.V2]
        return self._clients[ClientVersion.V1]

    def _client_for(self, envelope: str) -> Client:
        version = self._analyzer.get_version(envelope)
        logger.debug(f"Envelope dispatched to v{version} client")
        return self._clients[version]

    def encrypt(self, plaintext: str, lockdate: datetime,
                hint: str = "", filename: str = "") -> str:
        return self.select(hint, filename).encrypt(plaintext, lockdate,
                                                   hint=hint, filename=filename)

    def decrypt(self, envelope: str) -> DecryptResult:
        return self._client_for(envelope).decrypt(envelope)

    def lockdate_from_envelope(self, envelope: str) -> datetime:
        return self._client_for(envelope).lockdate_from_envelope(envelope)

    def datetime_format(self) -> str:
        return self._clients[ClientVersion.V1].datetime_format()

    def version(self) -> ClientVersion:
        return max(self._clients)
