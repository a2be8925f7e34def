"""
Mesh container and geometric helpers.
"""

from .mesh import Mesh
from .normals import (
    normalize,
    triangle_faces,
    face_normals,
    compute_vertex_normals,
)
from .transform import (
    to_homogeneous,
    transform_points,
    world_to_local_direction,
)

__all__ = [
    "Mesh",

    # Normals
    "normalize",
    "triangle_faces",
    "face_normals",
    "compute_vertex_normals",

    # Transforms
    "to_homogeneous",
    "transform_points",
    "world_to_local_direction",
]
