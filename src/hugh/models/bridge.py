from ipaddress import IPv4Address

from pydantic import BaseModel, ConfigDict


class Bridge(BaseModel):
    """A Hue bridge as announced over mDNS."""

    model_config = ConfigDict(frozen=True)

    id: str
    model: str
    ip: IPv4Address


class BridgeCredentials(BaseModel):
    """Where a light lives and the username to talk to it with."""

    model_config = ConfigDict(frozen=True)

    address: str
    username: str
