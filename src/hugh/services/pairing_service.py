import logging
import socket
from ipaddress import IPv4Address
from typing import Callable, Optional, Union

from hugh.api.http_client import HttpClient, bridge_url
from hugh.api.responses import single_response
from hugh.config import ClientConfig
from hugh.exceptions import DecodeError, PairingRejected

_LOGGER = logging.getLogger(__name__)

# Bridge limits for the two halves of "devicetype"
APP_NAME_MAX = 20
DEVICE_NAME_MAX = 19


class BridgePairer:
    """Asks a bridge for a new username.

    The link button on the bridge has to be pressed shortly before
    :meth:`connect` is called; otherwise the bridge answers with error 101
    and :class:`PairingRejected` is raised. Every successful call creates a
    new username on the bridge.
    """

    def __init__(
        self,
        client: HttpClient,
        config: Optional[ClientConfig] = None,
        hostname: Callable[[], str] = socket.gethostname,
    ):
        self.client = client
        self.config = config or ClientConfig()
        self.hostname = hostname

    def device_type(self) -> str:
        device = self.config.device_name or self.hostname()
        return f"{self.config.app_name[:APP_NAME_MAX]}#{device[:DEVICE_NAME_MAX]}"

    def connect(self, bridge_address: Union[str, IPv4Address]) -> str:
        """Pair with the bridge at ``bridge_address`` and return the username."""
        payload = {"devicetype": self.device_type()}
        body = self.client.post(bridge_url(str(bridge_address)), payload)

        # Erwartet: [{'success': {'username': 'DEIN_APP_KEY'}}]
        response = single_response(body)
        username = (response.success or {}).get("username")
        if not username:
            error = response.error
            if error is None:
                raise DecodeError(f"Pairing response carries neither a username nor an error: {body!r}")
            raise PairingRejected(error.type, error.address, error.description)

        _LOGGER.info("Paired with bridge at %s", bridge_address)
        return username
