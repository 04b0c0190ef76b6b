# This file defines runtime settings for the price API in one place.
# It exists so the API key, bind address, database location, and table names are configured without code edits.
# The config loader reads environment variables once at process start and returns an immutable object.
# It also validates schema and table names to prevent unsafe SQL identifier usage.

from __future__ import annotations

import os
import re

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine import URL

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ApiConfig(BaseModel):
    """Typed, immutable API runtime configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    api_name: str = "Treatment Price API"
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "local"
    log_level: str = "INFO"
    api_key: str = Field(min_length=1, repr=False)
    api_key_header: str = "x-api-key"
    database_url: str = Field(min_length=1, repr=False)
    db_schema: str = "trengo"
    treatment_table_name: str = "laserum"
    pack_table_name: str = "laserum_pack"
    min_similarity: float = 0.3
    bundle_flag: str = "true"
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"

    @field_validator("db_schema", "treatment_table_name", "pack_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535.")
        return value

    @field_validator("min_similarity")
    @classmethod
    def validate_min_similarity(cls, value: float) -> float:
        if not 0.0 < value <= 1.0:
            raise ValueError("min_similarity must be in (0, 1].")
        return value

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def treatment_table(self) -> str:
        return f"{self.db_schema}.{self.treatment_table_name}"

    @property
    def pack_table(self) -> str:
        return f"{self.db_schema}.{self.pack_table_name}"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def _database_url_from_env() -> str:
    explicit = os.getenv("DATABASE_URL", "").strip()
    if explicit:
        return explicit

    host = os.getenv("POSTGRES_HOST", "").strip()
    database = os.getenv("POSTGRES_DB", "").strip()
    if not host or not database:
        return ""

    url = URL.create(
        "postgresql+psycopg2",
        username=os.getenv("POSTGRES_USER") or None,
        password=os.getenv("POSTGRES_PASSWORD") or None,
        host=host,
        port=_env_int("POSTGRES_PORT", 5432),
        database=database,
    )
    return url.render_as_string(hide_password=False)


def _port_from_env() -> int:
    if os.getenv("API_PORT", "").strip():
        return _env_int("API_PORT", 3000)
    return _env_int("PORT", 3000)


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Treatment Price API"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _port_from_env(),
        "environment": os.getenv("ENV", "local"),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "api_key": os.getenv("API_KEY", ""),
        "api_key_header": os.getenv("API_KEY_HEADER", "x-api-key"),
        "database_url": _database_url_from_env(),
        "db_schema": os.getenv("API_DB_SCHEMA", "trengo"),
        "treatment_table_name": os.getenv("API_TREATMENT_TABLE_NAME", "laserum"),
        "pack_table_name": os.getenv("API_PACK_TABLE_NAME", "laserum_pack"),
        "min_similarity": _env_float("API_MIN_SIMILARITY", 0.3),
        "bundle_flag": os.getenv("API_BUNDLE_FLAG", "true"),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if not config_values["api_key"]:
        raise RuntimeError("API_KEY is required for API startup.")
    if not config_values["database_url"]:
        raise RuntimeError(
            "DATABASE_URL (or POSTGRES_HOST and POSTGRES_DB) is required for API startup."
        )

    return ApiConfig.model_validate(config_values)
