"""Configuration loading from bitperm.toml.

Example file:

    [bitperm]
    max_bits = 32

    [demo]
    bits = 8
    set_bits = 5
    count = 20

    [selftest]
    max_bits = 16
    batch = false
"""

from __future__ import annotations

import os
from typing import Any, cast

from pydantic import BaseModel, Field, ValidationError, model_validator

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

from bitperm.core.errors import ConfigurationError
from bitperm.core.table import MAX_SUPPORTED_BITS, MAXBITS
from bitperm.eval.selftest import DEFAULT_SELFTEST_BITS

CONFIG_ENV = "BITPERM_CONFIG"
CONFIG_NAME = "bitperm.toml"


class DemoSettings(BaseModel):
    """Settings for the demo command."""

    bits: int = Field(default=8, ge=0, le=MAX_SUPPORTED_BITS)
    set_bits: int = Field(default=5, ge=0)
    count: int = Field(default=20, ge=0)

    @model_validator(mode="after")
    def _set_bits_within_bits(self) -> "DemoSettings":
        if self.set_bits > self.bits:
            raise ValueError(
                f"set_bits must not exceed bits, got {self.set_bits} > {self.bits}"
            )
        return self


class SelfTestSettings(BaseModel):
    """Settings for the selftest command."""

    max_bits: int = Field(default=DEFAULT_SELFTEST_BITS, ge=0, le=MAX_SUPPORTED_BITS)
    batch: bool = False


class Settings(BaseModel):
    """Top-level bitperm settings.

    Attributes:
        max_bits: Width of the coefficient table used by the demo
        demo: Demo command defaults
        selftest: Selftest command defaults
    """

    max_bits: int = Field(default=MAXBITS, ge=0, le=MAX_SUPPORTED_BITS)
    demo: DemoSettings = Field(default_factory=DemoSettings)
    selftest: SelfTestSettings = Field(default_factory=SelfTestSettings)


def _resolve_config_path(config_path: str | None) -> str | None:
    """Resolve configuration path from env, explicit path, or defaults."""
    env_config = os.environ.get(CONFIG_ENV)
    if env_config:
        return env_config
    if config_path:
        return config_path
    candidates = [
        CONFIG_NAME,
        os.path.expanduser(f"~/{CONFIG_NAME}"),
    ]
    for candidate in candidates:
        if os.path.exists(candidate):
            return candidate
    return None


def load_config(config_path: str | None = None) -> Settings:
    """Load settings, falling back to defaults when no file is found.

    Args:
        config_path: Path to bitperm.toml (auto-detected if None)

    Returns:
        Validated settings

    Raises:
        FileNotFoundError: If an explicit or BITPERM_CONFIG path does not exist
        ConfigurationError: If the file is not valid TOML or holds bad values
    """
    resolved_path = _resolve_config_path(config_path)
    if resolved_path is None:
        return Settings()
    if not os.path.exists(resolved_path):
        raise FileNotFoundError(
            f"Config file not found at {resolved_path}. "
            f"Set {CONFIG_ENV} or create {CONFIG_NAME}"
        )
    with open(resolved_path, "rb") as f:
        try:
            raw = cast(dict[str, Any], tomllib.load(f))
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {resolved_path}: {e}") from e

    data: dict[str, Any] = dict(raw.get("bitperm", {}))
    for section in ("demo", "selftest"):
        if section in raw:
            data[section] = raw[section]
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings in {resolved_path}: {e}") from e
