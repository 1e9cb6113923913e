import logging
from ipaddress import IPv4Address
from typing import Any, Union

from pydantic import ValidationError

from hugh.api.http_client import HttpClient, bridge_url
from hugh.api.responses import ApiResponse, single_response
from hugh.commands.base import (
    AlertCommand,
    BrightnessCommand,
    ColorTemperatureCommand,
    EffectCommand,
    HueCommand,
    OnCommand,
    SaturationCommand,
    StateCommand,
    XYCommand,
)
from hugh.exceptions import BridgeApiError, DecodeError, HughError, StateChangeRejected
from hugh.models.bridge import BridgeCredentials
from hugh.models.light import Light

_LOGGER = logging.getLogger(__name__)


def decode_lights(payload: Any, bridge: BridgeCredentials) -> list[Light]:
    """Decode a ``GET /lights`` body into lights.

    The body maps light ids to payloads that carry no id themselves, so
    each key is copied onto its light after decoding.
    """
    if isinstance(payload, list):
        # Errors such as "unauthorized user" still come wrapped in an array
        for item in payload:
            try:
                error = ApiResponse.model_validate(item).error
            except ValidationError as e:
                raise DecodeError(f"Unexpected response element: {item!r}") from e
            if error is not None:
                raise BridgeApiError(error.type, error.address, error.description)
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected an object of lights, got {type(payload).__name__}")

    lights = []
    for light_id, body in payload.items():
        try:
            light = Light.model_validate(body)
        except ValidationError as e:
            raise DecodeError(f"Could not decode light {light_id!r}: {e}") from e

        light.id = light_id
        light.bridge = bridge
        lights.append(light)
    return lights


class LightRepository:
    def __init__(self, client: HttpClient):
        self.client = client

    def fetch_all(self, bridge_address: Union[str, IPv4Address], token: str) -> list[Light]:
        address = str(bridge_address)
        body = self.client.get(bridge_url(address, token, "lights"))
        lights = decode_lights(body, BridgeCredentials(address=address, username=token))
        _LOGGER.debug("Fetched %d lights from %s", len(lights), address)
        return lights

    def set_on(self, light: Light, on: bool) -> None:
        self.apply(light, OnCommand(on=on))

    def set_brightness(self, light: Light, brightness: int) -> None:
        self.apply(light, BrightnessCommand(brightness=brightness))

    def set_hue(self, light: Light, hue: int) -> None:
        self.apply(light, HueCommand(hue=hue))

    def set_saturation(self, light: Light, saturation: int) -> None:
        self.apply(light, SaturationCommand(saturation=saturation))

    def set_xy(self, light: Light, xy: tuple[float, float]) -> None:
        self.apply(light, XYCommand(xy=xy))

    def set_color_temperature(self, light: Light, mirek: int) -> None:
        self.apply(light, ColorTemperatureCommand(color_temperature=mirek))

    def set_alert(self, light: Light, alert: str) -> None:
        self.apply(light, AlertCommand(alert=alert))

    def set_effect(self, light: Light, effect: str) -> None:
        self.apply(light, EffectCommand(effect=effect))

    def toggle(self, light: Light) -> bool:
        """Flip the light's on/off state and return the new value."""
        on = not light.state.on
        self.set_on(light, on)
        return on

    def apply(self, light: Light, command: StateCommand) -> None:
        """Send one state change and mirror it on the local snapshot."""
        if light.bridge is None:
            raise HughError(f"Light {light.id!r} is not attached to a bridge")

        url = bridge_url(light.bridge.address, light.bridge.username, "lights", light.id, "state")
        response = single_response(self.client.put(url, command.body()))
        if response.error is not None:
            error = response.error
            raise StateChangeRejected(error.type, error.address, error.description)
        if response.success is None:
            raise DecodeError(f"State change of light {light.id!r} returned neither success nor error")

        setattr(light.state, command.state_field, command.value())
