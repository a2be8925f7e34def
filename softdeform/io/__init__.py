"""
Input/Output utilities for meshes.

Includes:
- Wavefront OBJ import/export
- ASCII PLY export
"""

from .mesh_io import (
    load_obj,
    save_obj,
    save_ply,
)

__all__ = [
    "load_obj",
    "save_obj",
    "save_ply",
]
