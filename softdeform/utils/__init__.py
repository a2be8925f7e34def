"""
Common utilities and configuration.
"""

# ============================================================================
# Configuration
# ============================================================================
from .config import (
    # Config functions
    default_cfg,
    merge_cfg,
    validate_config,
    load_config,

    # Numerical constants
    DEFAULT_RADIUS,
    DEFAULT_THRESHOLD,
    DEFAULT_MODE,
    NEIGHBOR_FACTOR,
    QUANTIZE_DECIMALS,
    GRID_CELL_PAD,
    EPS_NORMALIZE,
    FALLOFF_MODES,

    # Config dictionaries
    DEFORM_CONFIG,
    DRAG_CONFIG,
    DEDUP_CONFIG,
)

# ============================================================================
# Utilities
# ============================================================================
from .utils import (
    ensure_torch,
    as_numpy,
    as_vec3,
    all_finite,
)


__all__ = [
    # Configuration
    "default_cfg",
    "merge_cfg",
    "validate_config",
    "load_config",

    # Constants
    "DEFAULT_RADIUS",
    "DEFAULT_THRESHOLD",
    "DEFAULT_MODE",
    "NEIGHBOR_FACTOR",
    "QUANTIZE_DECIMALS",
    "GRID_CELL_PAD",
    "EPS_NORMALIZE",
    "FALLOFF_MODES",

    # Config dictionaries
    "DEFORM_CONFIG",
    "DRAG_CONFIG",
    "DEDUP_CONFIG",

    # Utilities - Conversion
    "ensure_torch",
    "as_numpy",
    "as_vec3",
    "all_finite",
]
