"""Load and provide typed access to config.yaml."""

from pathlib import Path

import yaml

DEFAULTS = {
    "definitions": {"folder": None},
    "defaults": {"country": "de", "region": None},
}


def load_config(path: Path | None = None) -> dict:
    """Load config.yaml and return as dict with defaults merged."""
    if path is None:
        path = package_root() / "config.yaml"
    with open(path) as f:
        cfg = yaml.safe_load(f) or {}

    # Merge each section over its defaults
    for section, defaults in DEFAULTS.items():
        cfg[section] = {**defaults, **(cfg.get(section) or {})}

    return cfg


def package_root() -> Path:
    """Return the holidaycal package directory (holds config.yaml and data/)."""
    return Path(__file__).parent.parent


def data_dir() -> Path:
    """Return the built-in rule-set folder."""
    return package_root() / "data"


def definitions_folder(config: dict | None = None) -> Path:
    """Resolve the rule-set folder from config, falling back to the built-in data."""
    if config is None:
        config = load_config()
    folder = config["definitions"]["folder"]
    if not folder:
        return data_dir()
    folder = Path(folder)
    if not folder.is_absolute():
        folder = package_root() / folder
    return folder
