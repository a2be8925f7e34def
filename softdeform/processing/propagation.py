"""Displacement of one vertex plus a damped nudge to its proximity neighbours."""

import logging
from typing import Optional

import torch

from ..analysis.adjacency import AdjacencyEstimator, find_neighbors
from ..utils.config import DEFAULT_THRESHOLD, NEIGHBOR_FACTOR
from ..utils.utils import as_vec3

logger = logging.getLogger(__name__)


def _buffer(mesh_or_positions) -> torch.Tensor:
    return getattr(mesh_or_positions, "positions", mesh_or_positions)


def apply_displacement(
    mesh,
    vertex_index: int,
    influence: float,
    delta,
    threshold: float = DEFAULT_THRESHOLD,
    neighbor_factor: float = NEIGHBOR_FACTOR,
    adjacency: Optional[AdjacencyEstimator] = None,
) -> torch.Tensor:
    """
    Move ``vertex_index`` by ``delta * influence`` and each neighbour by
    ``delta * influence * neighbor_factor``.

    Neighbours are looked up on the buffer as it is *before* the primary
    write. The neighbour factor is a flat damping, not falloff-curved, and
    nothing is de-duplicated: a vertex reached here and again as a primary
    target later in the same pass accumulates both moves.

    Args:
        mesh: ``Mesh`` or (N, 3) position tensor, mutated in place
        vertex_index: primary target
        influence: falloff weight in [0, 1]
        delta: (3,) displacement in object space
        threshold: adjacency distance, used when ``adjacency`` is None
        neighbor_factor: neighbour share of the primary influence
        adjacency: estimator to reuse across calls (keeps its grid current)

    Returns:
        neighbors: (K,) long tensor of nudged vertex indices
    """
    positions = _buffer(mesh)
    n = positions.shape[0]
    vertex_index = int(vertex_index)
    if vertex_index < 0 or vertex_index >= n:
        raise IndexError(f"Vertex index {vertex_index} out of range for {n} vertices")

    influence = float(influence)
    if not 0.0 <= influence <= 1.0:
        raise ValueError(f"Influence must lie in [0, 1], got {influence}")

    delta = as_vec3(delta, positions, name="delta")

    if adjacency is None:
        neighbors = find_neighbors(positions, vertex_index, threshold)
    else:
        neighbors = adjacency(positions, vertex_index)

    positions[vertex_index] = positions[vertex_index] + delta * influence
    if adjacency is not None:
        adjacency.notify_moved(vertex_index, positions[vertex_index])

    if neighbors.numel() > 0:
        nudge = delta * influence * float(neighbor_factor)
        positions[neighbors] = positions[neighbors] + nudge
        if adjacency is not None:
            for j in neighbors.tolist():
                adjacency.notify_moved(j, positions[j])

    return neighbors
