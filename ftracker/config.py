"""Configuration file management for ftracker."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from ftracker.domain.categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES, build_category_sets
from ftracker.domain.models import CategoryName, TransactionType


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    FTRACKER_CONFIG overrides the default location.

    Returns:
        Path to the config file.
    """
    override = os.environ.get("FTRACKER_CONFIG")
    if override:
        return Path(override).expanduser()
    return get_xdg_config_home() / "ftracker" / "config.toml"


def default_config() -> dict[str, Any]:
    """Get the configuration written by 'ftracker init'."""
    return {
        "default_user": "me",
        "strict_categories": True,
        "strict_storage": False,
        "categories": {
            "income": list(INCOME_CATEGORIES),
            "expense": list(EXPENSE_CATEGORIES),
        },
    }


@dataclass(frozen=True)
class Settings:
    """Effective settings after merging the config file over defaults."""

    default_user: str = "me"
    strict_categories: bool = True
    strict_storage: bool = False
    categories: dict[TransactionType, tuple[CategoryName, ...]] = field(default_factory=build_category_sets)


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If config file is not valid TOML.
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


def load_settings(config_path: Path | None = None) -> Settings:
    """Load effective settings; a missing config file yields the defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Settings with file values applied over defaults.

    Raises:
        tomllib.TOMLDecodeError: If config file is not valid TOML.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()

    categories = config.get("categories", {})
    return Settings(
        default_user=str(config.get("default_user", "me")),
        strict_categories=bool(config.get("strict_categories", True)),
        strict_storage=bool(config.get("strict_storage", False)),
        categories=build_category_sets(
            income=categories.get("income"),
            expense=categories.get("expense"),
        ),
    )
