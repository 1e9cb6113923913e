from typing import Annotated, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

CIECoordinate = Annotated[float, Field(ge=0.0, le=1.0)]


class StateCommand(BaseModel):
    """Partial body for ``PUT /lights/<id>/state``, one field per command."""

    model_config = ConfigDict(populate_by_name=True)

    # LightState attribute the command changes
    state_field: ClassVar[str]

    def body(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def value(self):
        return getattr(self, self.state_field)


class OnCommand(StateCommand):
    state_field: ClassVar[str] = "on"
    on: bool


class BrightnessCommand(StateCommand):
    state_field: ClassVar[str] = "brightness"
    brightness: int = Field(..., alias="bri", ge=1, le=254)


class HueCommand(StateCommand):
    state_field: ClassVar[str] = "hue"
    hue: int = Field(..., ge=0, le=65535)


class SaturationCommand(StateCommand):
    state_field: ClassVar[str] = "saturation"
    saturation: int = Field(..., alias="sat", ge=0, le=254)


# Das "xy"-Paar geht als [x, y] über die Leitung
class XYCommand(StateCommand):
    state_field: ClassVar[str] = "xy"
    xy: tuple[CIECoordinate, CIECoordinate]


class ColorTemperatureCommand(StateCommand):
    state_field: ClassVar[str] = "color_temperature"
    # 153 (6500K) bis 500 (2000K)
    color_temperature: int = Field(..., alias="ct", ge=153, le=500)


class AlertCommand(StateCommand):
    state_field: ClassVar[str] = "alert"
    alert: Literal["none", "select", "lselect"]


class EffectCommand(StateCommand):
    state_field: ClassVar[str] = "effect"
    effect: Literal["none", "colorloop"]
