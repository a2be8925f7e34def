"""
Core soft-selection deformation.

Components:
- Falloff curves (linear / smooth / cubic)
- Soft-selection driver
- Drag sessions
"""

# ============================================================================
# Falloff
# ============================================================================
from .falloff import (
    FalloffMode,
    falloff,
    falloff_weights,
)

# ============================================================================
# Driver
# ============================================================================
from .drag import DragSession
from .soft_selection import (
    DeformResult,
    SoftSelectionDeformer,
    deform,
)


__all__ = [
    # Falloff
    "FalloffMode",
    "falloff",
    "falloff_weights",

    # Driver
    "DeformResult",
    "SoftSelectionDeformer",
    "DragSession",
    "deform",
]
