"""Application configuration model."""

from pathlib import Path
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from batlights.utils.persistence import PydanticPersistence

CONFIG_DIR = Path.home() / ".batlights"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"

# LEDDMX-00 controllers accept commands on the FFF3 characteristic of the FFF0 service
DEFAULT_WRITE_CHARACTERISTIC = "0000fff3-0000-1000-8000-00805f9b34fb"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Peripheral
    device_address: str | None = Field(
        default=None,
        description="Bluetooth address of the light controller (e.g. BE:27:62:00:3E:91)",
    )
    write_characteristic: str = Field(
        default=DEFAULT_WRITE_CHARACTERISTIC,
        description="GATT characteristic UUID that command frames are written to",
    )

    # Timing
    scan_timeout: float = Field(
        default=5.0, gt=0, description="How long to scan for the device (seconds)"
    )
    connect_timeout: float = Field(
        default=10.0, gt=0, description="Connection timeout (seconds)"
    )

    # Dispatch
    queue_capacity: int = Field(
        default=100, ge=1, description="Frames buffered before the UI blocks on submit"
    )

    @field_validator("device_address")
    @classmethod
    def normalize_address(cls, v: str | None) -> str | None:
        """Addresses are compared case-insensitively; store them upper-case."""
        if v is None:
            return None
        v = v.strip()
        return v.upper() if v else None

    @field_validator("write_characteristic")
    @classmethod
    def validate_characteristic(cls, v: str) -> str:
        """Ensure the characteristic is a UUID."""
        try:
            return str(UUID(v))
        except ValueError as e:
            raise ValueError(f"'{v}' is not a valid UUID") from e

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.batlights/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)
