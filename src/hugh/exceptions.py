"""Exceptions raised by hugh."""

from __future__ import annotations


class HughError(Exception):
    """Base exception for all hugh errors."""


class TransportError(HughError):
    """The HTTP request to the bridge could not be completed."""


class DecodeError(HughError):
    """A bridge response did not match the expected JSON shape."""


class UnexpectedResponseShape(DecodeError):
    """A response array did not hold exactly one element.

    The bridge wraps even single results in an array, so anything other
    than one element means the exchange went wrong.
    """

    def __init__(self, length: int) -> None:
        super().__init__(f"Expected a single-element response array, got {length}")
        self.length = length


MalformedResponse = UnexpectedResponseShape


class BridgeApiError(HughError):
    """The bridge answered with an error object."""

    def __init__(self, type: int, address: str, description: str) -> None:
        super().__init__(
            f"Bridge returned error type={type} address={address!r} "
            f"description={description!r}"
        )
        self.type = type
        self.address = address
        self.description = description


class PairingRejected(BridgeApiError):
    """The bridge refused to hand out a username.

    Most often type 101, meaning the link button was not pressed.
    """


class StateChangeRejected(BridgeApiError):
    """The bridge refused a light state change."""


class DiscoveryBrowseFailure(HughError):
    """The mDNS browse session could not be started."""


class ConfigError(HughError):
    """The settings read from the environment are invalid."""
