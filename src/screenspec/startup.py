"""Centralized initialization for all screenspec entry points.

This module provides a single point of initialization for:
- Environment variables (.env loading)
- Interpreter settings (screenspec.yaml + SCREENSPEC_* overrides)

All entry points (API, CLI, Streamlit) should use ensure_initialized()
to guarantee consistent startup behavior.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from screenspec.config.settings import DEFAULT_CONFIG_FILE, InterpreterSettings, load_settings

logger = logging.getLogger(__name__)


@dataclass
class StartupState:
    """Resolved state after initialization."""

    project_root: Path
    settings: InterpreterSettings
    config_path: Path
    env_loaded: bool = False


# Module-level state
_initialized: bool = False
_state: Optional[StartupState] = None


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Find project root by looking for screenspec.yaml or pyproject.toml.

    Args:
        start_path: Starting path for search. Defaults to the working directory.

    Returns:
        Project root directory.
    """
    current = start_path or Path.cwd()
    for parent in [current] + list(current.parents):
        if (parent / DEFAULT_CONFIG_FILE).exists():
            return parent
        if (parent / "pyproject.toml").exists():
            return parent
    return current


def _load_env(project_root: Path) -> bool:
    """Load .env file from project root.

    Returns:
        True if .env was loaded, False otherwise.
    """
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        logger.debug(f"Loaded .env from {env_path}")
        return True
    logger.debug(f".env not found at {env_path}")
    return False


def ensure_initialized(config_path: Optional[Path] = None) -> StartupState:
    """Ensure the application is initialized (idempotent).

    Loads .env and settings on first call. Subsequent calls return cached
    state, unless they name a different settings file, which reloads it.

    Args:
        config_path: Explicit settings file; defaults to <project root>/screenspec.yaml.

    Returns:
        Current StartupState.
    """
    global _initialized, _state

    if _initialized and _state is not None:
        if config_path is None or Path(config_path).resolve() == _state.config_path:
            return _state
        logger.debug(f"Settings file changed from {_state.config_path} to {config_path}, reinitializing")

    project_root = _find_project_root()
    env_loaded = _load_env(project_root)
    resolved_config = Path(config_path or project_root / DEFAULT_CONFIG_FILE).resolve()
    settings = load_settings(resolved_config)

    # Relative bundle paths are relative to the project root
    if not settings.bundle_dir.is_absolute():
        settings = settings.model_copy(update={"bundle_dir": project_root / settings.bundle_dir})

    _state = StartupState(
        project_root=project_root,
        settings=settings,
        config_path=resolved_config,
        env_loaded=env_loaded,
    )
    _initialized = True
    return _state


def get_settings() -> InterpreterSettings:
    """Settings of the initialized application (initializes on first use)."""
    return ensure_initialized().settings


def reset_initialization() -> None:
    """Forget cached state (used by tests)."""
    global _initialized, _state
    _initialized = False
    _state = None
