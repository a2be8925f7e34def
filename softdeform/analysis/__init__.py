"""
Spatial analysis: proximity adjacency and coincident-vertex handling.

Components:
- Adjacency: threshold neighbour scan, dynamic spatial hash grid
- Dedup: fixed-precision quantization for selection handles
"""

# ============================================================================
# Adjacency
# ============================================================================
from .adjacency import (
    point_distances,
    find_neighbors,
    SpatialHashGrid,
    AdjacencyEstimator,
)

# ============================================================================
# De-duplication
# ============================================================================
from .dedup import (
    quantize,
    unique_vertex_indices,
    selection_handles,
)


__all__ = [
    # Adjacency
    "point_distances",
    "find_neighbors",
    "SpatialHashGrid",
    "AdjacencyEstimator",

    # De-duplication
    "quantize",
    "unique_vertex_indices",
    "selection_handles",
]
