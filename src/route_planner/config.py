"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_PLANNER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Restaurant Delivery Route Planner API"
    api_prefix: str = "/api"
    orders_file: Path = Field(
        default=Path("data/orders.json"),
        description="Seed file with the pending orders offered to the driver.",
    )

    # Restaurant the distances are measured from
    restaurant_name: str = "Seasons Cafe"
    restaurant_address: str = "938 Hingham St, Rockland, MA 02370"
    restaurant_phone: str = "+1-781-534-0616"

    # Priority score = wait_time_weight * wait minutes + distance_weight * miles
    wait_time_weight: float = Field(default=0.7, ge=0.0)
    distance_weight: float = Field(default=0.3, ge=0.0)

    # Estimated time = handling minutes per stop + minutes per mile travelled
    handling_minutes_per_stop: float = Field(default=8.0, ge=0.0)
    minutes_per_mile: float = Field(default=3.0, ge=0.0)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("orders_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
