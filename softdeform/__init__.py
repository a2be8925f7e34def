"""
softdeform - Proximity-Weighted Soft-Selection Mesh Deformation

Drag one vertex of a mesh and have its neighbourhood follow with a smooth,
distance-attenuated motion, the way soft selection works in 3D editors.

Components:
    - Core: Falloff curves, soft-selection driver, drag sessions
    - Analysis: Proximity adjacency, coincident-vertex de-duplication
    - Processing: Displacement propagation to neighbours
    - Geometry: Mesh container, vertex normals, transforms
    - IO: OBJ / PLY files
    - Utils: Configuration and helper functions

Example:
    >>> from softdeform import Mesh, SoftSelectionDeformer
    >>>
    >>> mesh = Mesh(positions, faces=faces)
    >>> mesh.add_normal_listener(lambda m: m.compute_vertex_normals())
    >>>
    >>> deformer = SoftSelectionDeformer(radius=2.0, mode="smooth")
    >>> drag = deformer.begin_drag(mesh, anchor_index=12)
    >>> drag.move([0.3, 1.2, 0.0])
    >>> drag.end()
"""

__version__ = "1.0.0"

# ============================================================================
# Core
# ============================================================================
from .core import (
    # Falloff
    FalloffMode,
    falloff,
    falloff_weights,

    # Driver
    DeformResult,
    SoftSelectionDeformer,
    DragSession,
    deform,
)

# ============================================================================
# Analysis
# ============================================================================
from .analysis import (
    # Adjacency
    point_distances,
    find_neighbors,
    SpatialHashGrid,
    AdjacencyEstimator,

    # De-duplication
    quantize,
    unique_vertex_indices,
    selection_handles,
)

# ============================================================================
# Processing
# ============================================================================
from .processing import apply_displacement

# ============================================================================
# Geometry
# ============================================================================
from .geometry import (
    Mesh,
    compute_vertex_normals,
    transform_points,
    world_to_local_direction,
)

# ============================================================================
# IO
# ============================================================================
from .io import (
    load_obj,
    save_obj,
    save_ply,
)

# ============================================================================
# Utils
# ============================================================================
from .utils import (
    default_cfg,
    load_config,
    validate_config,
    ensure_torch,
    as_numpy,
    DEFAULT_RADIUS,
    DEFAULT_THRESHOLD,
    DEFAULT_MODE,
    NEIGHBOR_FACTOR,
)


__all__ = [
    "__version__",

    # ========================================================================
    # Core
    # ========================================================================
    "FalloffMode",
    "falloff",
    "falloff_weights",
    "DeformResult",
    "SoftSelectionDeformer",
    "DragSession",
    "deform",

    # ========================================================================
    # Analysis
    # ========================================================================
    "point_distances",
    "find_neighbors",
    "SpatialHashGrid",
    "AdjacencyEstimator",
    "quantize",
    "unique_vertex_indices",
    "selection_handles",

    # ========================================================================
    # Processing
    # ========================================================================
    "apply_displacement",

    # ========================================================================
    # Geometry
    # ========================================================================
    "Mesh",
    "compute_vertex_normals",
    "transform_points",
    "world_to_local_direction",

    # ========================================================================
    # IO
    # ========================================================================
    "load_obj",
    "save_obj",
    "save_ply",

    # ========================================================================
    # Utils
    # ========================================================================
    "default_cfg",
    "load_config",
    "validate_config",
    "ensure_torch",
    "as_numpy",
    "DEFAULT_RADIUS",
    "DEFAULT_THRESHOLD",
    "DEFAULT_MODE",
    "NEIGHBOR_FACTOR",
]
