"""
Global Configuration and Layout Defaults.

This module centralizes the constants used by the layout engine, the
render coordinator and the exporters, and loads optional per-project
overrides from `.witu/config.yaml`.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# --- Layout ---
H_SPACING = 180
V_SPACING = 60
NODE_RADIUS = 14
PADDING_X = 70
PADDING_Y = 40

# Room to the right of the last column for node labels
LABEL_ALLOWANCE = 220
BOTTOM_ALLOWANCE = 100

# Rank given to nodes that cannot be reached from the root (0 is the root)
DEFAULT_RANK = 1

# Valid range of the service's max-rank parameter
MIN_MAX_RANK = 1
MAX_MAX_RANK = 5
DEFAULT_MAX_RANK = 3

# --- Rendering ---
MIN_CANVAS_HEIGHT = 400
ZOOM_STEP = 1.25
MIN_ZOOM = 0.25
MAX_ZOOM = 4.0

# --- Export ---
MANIFEST_API_VERSION = "65.0"
MANIFEST_NAMESPACE = "http://soap.sforce.com/2006/04/metadata"
GENERATOR_NAME = "Where Is This Used? (WITU)"

CONFIG_ENV_VAR = "WITU_CONFIG"
DEFAULT_CONFIG_PATH = Path(".witu/config.yaml")


class LayoutConfig(BaseModel):
    """Spacing used by the layered layout engine."""
    h_spacing: int = Field(default=H_SPACING, gt=0)
    v_spacing: int = Field(default=V_SPACING, gt=0)
    margin_x: int = Field(default=PADDING_X, ge=0)
    margin_y: int = Field(default=PADDING_Y, ge=0)
    label_allowance: int = Field(default=LABEL_ALLOWANCE, ge=0)
    bottom_allowance: int = Field(default=BOTTOM_ALLOWANCE, ge=0)
    node_radius: int = Field(default=NODE_RADIUS, gt=0)

    model_config = ConfigDict(frozen=True)


class WituConfig(BaseModel):
    """Project configuration, usually read from .witu/config.yaml."""
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    manifest_version: str = MANIFEST_API_VERSION
    default_viewport_width: Optional[int] = Field(default=None, gt=0)
    clipboard_command: Optional[str] = None


def _resolve_config_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> WituConfig:
    """
    Load configuration from YAML.

    A missing file yields the defaults. A file that cannot be parsed or does
    not validate is reported as a warning and the defaults are used instead.
    """
    config_path = _resolve_config_path(path)
    if not config_path.exists():
        return WituConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return WituConfig.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.warning(f"Ignoring invalid config {config_path}: {e}")
        return WituConfig()
