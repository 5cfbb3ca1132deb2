"""
Engine Configuration - Defaults for encoding, timing and worker pools
Loaded from YAML so deployments can tune the engine without code changes
"""

import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import InputError, ImageIOError
from .types import OutputFormat

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'PICCY_CONFIG'
DEFAULT_CONFIG_PATH = Path.home() / '.piccy' / 'config.yaml'


# ============================================================================
# Config Data Structure
# ============================================================================

@dataclass
class EngineConfig:
    """Engine-wide defaults"""

    # Animation timing
    default_gif_delay_ms: int = 20

    # Fan-out pool size (None = one worker per core)
    max_workers: Optional[int] = None

    # Output settings
    intermediate_format: str = "png"
    webp_lossless: bool = True
    gif_transparency_threshold: int = 128

    def __post_init__(self):
        self.validate()

    @staticmethod
    def _is_int(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)

    def validate(self) -> None:
        if not self._is_int(self.default_gif_delay_ms) or self.default_gif_delay_ms < 0:
            raise InputError(f"default_gif_delay_ms must be a non-negative integer, got {self.default_gif_delay_ms!r}")
        if self.max_workers is not None and (not self._is_int(self.max_workers) or self.max_workers < 1):
            raise InputError(f"max_workers must be a positive integer or null, got {self.max_workers!r}")
        if not isinstance(self.webp_lossless, bool):
            raise InputError(f"webp_lossless must be true or false, got {self.webp_lossless!r}")
        threshold = self.gif_transparency_threshold
        if not self._is_int(threshold) or not 0 <= threshold <= 256:
            raise InputError(f"gif_transparency_threshold must be an integer within 0..256, got {threshold!r}")
        # Raises InputError for unknown names
        OutputFormat.parse(self.intermediate_format)

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat.parse(self.intermediate_format)

    @property
    def worker_count(self) -> int:
        return self.max_workers or os.cpu_count() or 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EngineConfig':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in fields(cls)}
        unknown = set(data) - valid_fields
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", sorted(unknown))
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)


# ============================================================================
# Loading / Saving
# ============================================================================

def _default_path() -> Optional[Path]:
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_config(path: Optional[Union[str, Path]] = None) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    Args:
        path: YAML file to read. Defaults to $PICCY_CONFIG, then
            ~/.piccy/config.yaml; built-in defaults when neither exists.

    Returns:
        The parsed EngineConfig
    """
    path = Path(path) if path is not None else _default_path()
    if path is None:
        return EngineConfig()

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ImageIOError(f"Could not read config file {path}: {e}", path) from e
    except yaml.YAMLError as e:
        raise InputError(f"Invalid YAML in config file {path}: {e}") from e

    if data is None:
        logger.warning("Config file %s is empty, using defaults", path)
        return EngineConfig()
    if not isinstance(data, dict):
        raise InputError(f"Config file {path} must contain a mapping")

    # Allow the settings to live under a top-level 'piccy' key
    if isinstance(data.get('piccy'), dict):
        data = data['piccy']

    logger.debug("Loaded config from %s", path)
    return EngineConfig.from_dict(data)


def save_config(config: EngineConfig, path: Union[str, Path]) -> Path:
    """Write a config to a YAML file"""
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise ImageIOError(f"Could not write config file {path}: {e}", path) from e
    return path


# ============================================================================
# Process-wide active config
# ============================================================================

_active_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the active config, loading it on first use"""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config


def set_config(config: Optional[EngineConfig]) -> None:
    """Replace the active config (None resets to lazy loading)"""
    global _active_config
    _active_config = config
