"""Interpreter settings schema and loader.

Settings are read from ``screenspec.yaml`` (project root by default) and can
be overridden per process with ``SCREENSPEC_*`` environment variables, which
``screenspec.startup`` loads from ``.env``.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "screenspec.yaml"
ENV_PREFIX = "SCREENSPEC_"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class InterpreterSettings(BaseModel):
    """Runtime settings for the interpreter, CLI and HTTP host.

    Attributes:
        bundle_dir: Directory holding the document and its assets.
        document_file: Document file name inside the bundle.
        asset_dirs: Bundle sub-directories searched for base64 assets, in order.
        asset_suffix: Suffix marking a reference to a base64 text file.
        image_mime: MIME type used when wrapping base64 image content.
        api_host: Bind host for the HTTP host.
        api_port: Bind port for the HTTP host.
        log_level: Default log level for entry points.
    """

    bundle_dir: Path = Field(default=Path("bundle"), description="Bundle root directory")
    document_file: str = Field(default="bundle.json", min_length=1)
    asset_dirs: List[str] = Field(default_factory=lambda: ["", "images_base64"])
    asset_suffix: str = Field(default=".b64.txt", min_length=1)
    image_mime: str = Field(default="image/png")
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level '{v}'. Valid levels: {sorted(VALID_LOG_LEVELS)}")
        return level


def _env_overrides() -> Dict[str, Any]:
    """Collect SCREENSPEC_<FIELD> overrides from the environment."""
    overrides: Dict[str, Any] = {}
    for name in InterpreterSettings.model_fields:
        raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
        if raw is None:
            continue
        if name == "asset_dirs":
            overrides[name] = [part.strip() for part in raw.split(",")]
        else:
            overrides[name] = raw
    return overrides


def load_settings(config_path: Optional[Path] = None) -> InterpreterSettings:
    """Load interpreter settings from YAML plus environment overrides.

    Args:
        config_path: Optional explicit path to the settings file.
            If not provided, uses ./screenspec.yaml.

    Returns:
        InterpreterSettings (defaults if no file exists).

    Raises:
        ValueError: If the file or an override contains invalid settings.
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILE

    data: Dict[str, Any] = {}
    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is None:
            logger.warning(f"Empty settings file at {config_path}")
        elif not isinstance(loaded, dict):
            raise ValueError(f"Settings file must contain a mapping: {config_path}")
        else:
            data = loaded
            logger.debug(f"Loaded settings from {config_path}")
    else:
        logger.debug(f"No settings file found at {config_path}, using defaults")

    data.update(_env_overrides())

    try:
        return InterpreterSettings.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings in {config_path}: {e}")
