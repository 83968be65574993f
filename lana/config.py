"""Configuration file management for lana."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_API_URL = "http://localhost:8001"
API_URL_ENV = "LANA_API_URL"


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "lana" / "config.toml"


def create_default_config(config_path: Path | None = None, api_url: str | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        api_url: Base URL to store. If None, uses the built-in default.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "api_url": normalize_api_url(api_url or DEFAULT_API_URL),
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def normalize_api_url(url: str) -> str:
    """Strip whitespace and trailing slashes from a base URL."""
    return url.strip().rstrip("/")


def get_api_url(config_path: Path | None = None) -> str:
    """Resolve the API base URL.

    The ``LANA_API_URL`` environment variable wins, then ``api_url`` from the
    config file, then the built-in default. A missing config file is not an
    error.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Base URL without trailing slash.
    """
    from_env = os.environ.get(API_URL_ENV)
    if from_env:
        return normalize_api_url(from_env)

    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return DEFAULT_API_URL

    api_url = config.get("api_url")
    if isinstance(api_url, str) and api_url.strip():
        return normalize_api_url(api_url)
    return DEFAULT_API_URL


def set_api_url(api_url: str, config_path: Path | None = None) -> None:
    """Store the API base URL, keeping any other settings.

    Args:
        api_url: New base URL.
        config_path: Path to config file. If None, uses default location.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        config = {}

    config["api_url"] = normalize_api_url(api_url)
    save_config(config, config_path)
