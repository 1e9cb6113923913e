"""hugh

Find Philips Hue bridges on the local network, pair with them and control
their lights over the v1 REST API.
"""

from hugh.api.http_client import HttpClient
from hugh.config import ClientConfig
from hugh.exceptions import (
    BridgeApiError,
    ConfigError,
    DecodeError,
    DiscoveryBrowseFailure,
    HughError,
    MalformedResponse,
    PairingRejected,
    StateChangeRejected,
    TransportError,
    UnexpectedResponseShape,
)
from hugh.models.bridge import Bridge, BridgeCredentials
from hugh.models.light import Light, LightState
from hugh.repo.light_repository import LightRepository
from hugh.services.discovery_service import BridgeDiscoverer, MulticastBrowser, ServiceEntry, parse_service_text
from hugh.services.pairing_service import BridgePairer

__all__ = [
    "Bridge",
    "BridgeApiError",
    "BridgeCredentials",
    "BridgeDiscoverer",
    "BridgePairer",
    "ClientConfig",
    "ConfigError",
    "DecodeError",
    "DiscoveryBrowseFailure",
    "HttpClient",
    "HughError",
    "Light",
    "LightRepository",
    "LightState",
    "MalformedResponse",
    "MulticastBrowser",
    "PairingRejected",
    "ServiceEntry",
    "StateChangeRejected",
    "TransportError",
    "UnexpectedResponseShape",
    "parse_service_text",
]
