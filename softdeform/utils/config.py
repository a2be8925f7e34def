"""Configuration management for soft-selection deformation."""

from pathlib import Path
from typing import Dict, Optional

# Numerical constants
DEFAULT_RADIUS = 2.0
DEFAULT_THRESHOLD = 0.1
DEFAULT_MODE = "smooth"
NEIGHBOR_FACTOR = 0.5
QUANTIZE_DECIMALS = 6
GRID_CELL_PAD = 1e-6
EPS_NORMALIZE = 1e-8

FALLOFF_MODES = ("linear", "smooth", "cubic")

DEFORM_CONFIG = {
    "radius": DEFAULT_RADIUS,
    "mode": DEFAULT_MODE,
    "threshold": DEFAULT_THRESHOLD,
    "neighbor_factor": NEIGHBOR_FACTOR,
    "use_grid": True,
}

DRAG_CONFIG = {
    "steps": 1,
}

DEDUP_CONFIG = {
    "decimals": QUANTIZE_DECIMALS,
    "world_space": True,
}


def default_cfg() -> Dict:
    """Default configuration (fresh copy, safe to mutate)."""
    config = DEFORM_CONFIG.copy()
    config["drag"] = DRAG_CONFIG.copy()
    config["dedup"] = DEDUP_CONFIG.copy()
    return config


def merge_cfg(base: Dict, override: Optional[Dict]) -> Dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = dict(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_cfg(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(cfg: Dict) -> None:
    """Validate deformation parameters; raises ValueError on bad values."""
    radius = float(cfg.get("radius", DEFAULT_RADIUS))
    if not radius > 0.0:
        raise ValueError(f"Falloff radius must be > 0, got {radius}")

    threshold = float(cfg.get("threshold", DEFAULT_THRESHOLD))
    if not threshold > 0.0:
        raise ValueError(f"Adjacency threshold must be > 0, got {threshold}")

    mode = str(cfg.get("mode", DEFAULT_MODE)).lower()
    if mode not in FALLOFF_MODES:
        raise ValueError(f"Unknown falloff mode: {mode!r} (expected one of {FALLOFF_MODES})")

    steps = int(cfg.get("drag", {}).get("steps", 1))
    if steps < 1:
        raise ValueError(f"Drag steps must be >= 1, got {steps}")


def load_config(config_path) -> Dict:
    """Load a YAML file and merge it over :func:`default_cfg`."""
    import yaml

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        user_cfg = yaml.safe_load(f) or {}

    if not isinstance(user_cfg, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")

    # Accept both a bare mapping and one nested under "deform"
    user_cfg = user_cfg.get("deform", user_cfg)

    cfg = merge_cfg(default_cfg(), user_cfg)
    validate_config(cfg)
    return cfg
