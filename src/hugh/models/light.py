from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from hugh.models.bridge import BridgeCredentials

HUE_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"

CIECoords = tuple[float, float]


class LightState(BaseModel):
    # Werte kommen so, wie die Bridge sie schickt; Bereiche prüft erst die Command-Seite
    model_config = ConfigDict(populate_by_name=True)

    on: bool = False
    brightness: Optional[int] = Field(None, alias="bri")
    hue: Optional[int] = None
    saturation: Optional[int] = Field(None, alias="sat")
    xy: Optional[CIECoords] = None
    color_temperature: Optional[int] = Field(None, alias="ct")
    alert: Optional[str] = None
    effect: Optional[str] = None
    mode: Optional[str] = None
    color_mode: Optional[str] = Field(None, alias="colormode")
    reachable: bool = False


class LightSWUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    state: str = ""
    last_install: Optional[datetime] = Field(None, alias="lastinstall")

    @field_validator("last_install", mode="before")
    @classmethod
    def _parse_hue_time(cls, value):
        # Bridge timestamps carry no zone and are UTC
        if value is None or isinstance(value, datetime):
            return value
        return datetime.strptime(value, HUE_TIME_FORMAT).replace(tzinfo=timezone.utc)

    @field_serializer("last_install")
    def _format_hue_time(self, value: Optional[datetime]):
        return value.strftime(HUE_TIME_FORMAT) if value else None


class TemperatureRange(BaseModel):
    min: int = 0
    max: int = 0


class CapabilitiesControl(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    min_dim_level: Optional[int] = Field(None, alias="mindimlevel")
    max_lumen: Optional[int] = Field(None, alias="maxlumen")
    color_gamut_type: Optional[str] = Field(None, alias="colorgamuttype")
    # R, G and B corners of the gamut triangle
    color_gamut: Optional[tuple[CIECoords, CIECoords, CIECoords]] = Field(None, alias="colorgamut")
    ct: Optional[TemperatureRange] = None


class StreamingCapabilities(BaseModel):
    renderer: bool = False
    proxy: bool = False


class LightCapabilities(BaseModel):
    certified: bool = False
    control: CapabilitiesControl = Field(default_factory=CapabilitiesControl)
    streaming: StreamingCapabilities = Field(default_factory=StreamingCapabilities)


class LightConfig(BaseModel):
    archetype: str = ""  # z.B. "sultanbulb"
    function: str = ""
    direction: str = ""


class Light(BaseModel):
    """Snapshot of one light as reported by ``GET /lights``.

    ``id`` is not part of the payload; it is the key the light was listed
    under and gets filled in after decoding. ``bridge`` routes later state
    changes and is never serialised.
    """

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    id: str = ""
    name: str
    type: str = ""
    model_id: str = Field("", alias="modelid")
    manufacturer: str = Field("", alias="manufacturername")
    product: str = Field("", alias="productname")
    unique_id: str = Field("", alias="uniqueid")
    sw_version: str = Field("", alias="swversion")
    sw_update: LightSWUpdate = Field(default_factory=LightSWUpdate, alias="swupdate")
    capabilities: LightCapabilities = Field(default_factory=LightCapabilities)
    config: LightConfig = Field(default_factory=LightConfig)
    state: LightState = Field(default_factory=LightState)
    bridge: Optional[BridgeCredentials] = Field(None, exclude=True, repr=False)
