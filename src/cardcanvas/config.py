"""Configuration loading and validation."""

import tomllib
from pathlib import Path

from pydantic import BaseModel

DEFAULT_CONFIG_NAME = "cardcanvas.toml"


class FetchConfig(BaseModel):
    """Remote image fetching settings."""

    timeout: float = 15.0
    """Upper bound in seconds for a single image download."""

    user_agent: str = "cardcanvas/0.1"
    """User-Agent header sent with image requests."""

    max_bytes: int = 20 * 1024 * 1024
    """Largest accepted download; bigger responses are rejected."""


class FontConfig(BaseModel):
    """Font discovery settings."""

    fonts_dir: Path | None = None
    """Extra directory scanned for .ttf and .otf files, in addition to the bundled fonts directory."""


class ServerConfig(BaseModel):
    """HTTP server settings used by `cardcanvas serve`."""

    host: str = "127.0.0.1"
    port: int = 8000


class Config(BaseModel):
    """Root configuration. Every section has defaults, so an empty file is valid."""

    fetch: FetchConfig = FetchConfig()
    fonts: FontConfig = FontConfig()
    server: ServerConfig = ServerConfig()


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, looks for cardcanvas.toml in the
            current directory and falls back to defaults when it is absent.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not config_path.exists():
            return Config()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        config_dict = tomllib.load(f)

    return Config(**config_dict)
