"""Mini README: Centralised configuration models and helpers for Tellodrone.

Structure:
    * TelloSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables describing where the
    drone lives on the network, which local ports to bind, and how long to wait
    for acknowledgements. The configuration is cached so the cost of validation
    is incurred only once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class TelloSettings(BaseSettings):
    """Runtime configuration for a Tello UDP connection."""

    environment: str = Field(
        "development",
        description="Deployment label reported in provider metadata, e.g. 'lab' or 'field'.",
    )
    drone_host: str = Field(
        "192.168.10.1",
        description="Address of the drone on its own Wi-Fi access point.",
    )
    command_port: int = Field(
        8889,
        description="UDP port used for commands and their responses.",
        ge=1,
        le=65535,
    )
    state_port: int = Field(
        8890,
        description="UDP port the drone broadcasts state telemetry to.",
        ge=1,
        le=65535,
    )
    local_host: str = Field(
        "0.0.0.0",
        description="Local interface both UDP sockets bind to.",
    )
    skip_ok: bool = Field(
        True,
        description="Suppress 'ok' acknowledgements from the message event.",
    )
    await_acknowledgement: bool = Field(
        True,
        description=(
            "Block each non-read command until the drone answers 'ok'."
            " Disable to fall back to the per-command delay table."
        ),
    )
    acknowledgement_timeout_seconds: float = Field(
        10.0,
        description="How long a command may wait for its acknowledgement.",
        gt=0,
    )
    socket_timeout_seconds: float = Field(
        0.5,
        description="Receive timeout used by the listener threads between stop checks.",
        gt=0,
    )
    schema_path: Optional[Path] = Field(
        None,
        description="Optional JSON file replacing the bundled command schema.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the command line tool.",
    )

    class Config:
        env_prefix = "TELLODRONE_"
        env_file = ".env"
        case_sensitive = False

    @validator("schema_path", pre=True)
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        """Expand user directories so ``~/schema.json`` works from the shell."""

        if value in (None, ""):
            return None
        return Path(value).expanduser().resolve()

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache()
def get_settings() -> TelloSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return TelloSettings()
