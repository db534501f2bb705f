"""Configuration file loading."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ruamel.yaml import YAML
from pydantic import ValidationError

from redspawn.models.config import RedspawnConfig


logger = logging.getLogger(__name__)


def load_config(config_file: Optional[Union[str, Path]] = None) -> RedspawnConfig:
    """Load configuration from a YAML file, or return the defaults."""
    if config_file is None:
        return RedspawnConfig()

    config_file = Path(config_file)
    if not config_file.exists():
        raise FileNotFoundError(f"Config not found: {config_file}")

    try:
        data = _read_yaml(config_file)
        config = RedspawnConfig(**data)
        logger.debug(f"Loaded config: {config_file}")
        return config
    except ValidationError as e:
        logger.error(f"Invalid config {config_file}: {e}")
        raise


def _read_yaml(file_path: Path) -> Dict[str, Any]:
    """Read and parse YAML file."""
    yaml = YAML(typ="safe")
    data = yaml.load(file_path.read_text())
    # An empty file loads as None
    return data or {}
