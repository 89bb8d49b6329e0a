"""Process-level settings for the liquid gauge visualization."""

from pydantic import Field
from pydantic_settings import BaseSettings


class GaugeSettings(BaseSettings):
    """Settings read from ``LIQUID_GAUGE_*`` environment variables."""

    container_margin_px: float = Field(
        default=10.0, description="Margin applied to the host panel element on create"
    )
    surface_margin_px: float = Field(
        default=20.0, description="Subtracted from the panel's client size to size the surface"
    )
    surface_id_prefix: str = Field(
        default="fill-gauge", description="Prefix of generated drawing surface ids"
    )
    renderer: str = Field(default="liquid-fill", description="Renderer entry point name")
    log_level: str = Field(default="INFO", description="Logging level for the CLI")

    model_config = {"env_prefix": "LIQUID_GAUGE_"}
