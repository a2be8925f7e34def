"""Proximity-based adjacency: vertices closer than a threshold count as connected."""

import math
from collections import defaultdict
from typing import Dict, List, Optional, Set, Tuple

import torch

from ..utils.config import DEFAULT_THRESHOLD, GRID_CELL_PAD

Cell = Tuple[int, int, int]

_OFFSETS = [(dx, dy, dz) for dx in (-1, 0, 1) for dy in (-1, 0, 1) for dz in (-1, 0, 1)]


def _buffer(mesh_or_positions) -> torch.Tensor:
    return getattr(mesh_or_positions, "positions", mesh_or_positions)


def _check_threshold(threshold: float) -> float:
    threshold = float(threshold)
    if not threshold > 0.0:
        raise ValueError(f"Adjacency threshold must be > 0, got {threshold}")
    return threshold


def _check_index(positions: torch.Tensor, index: int) -> int:
    index = int(index)
    n = positions.shape[0]
    if index < 0 or index >= n:
        raise IndexError(f"Vertex index {index} out of range for {n} vertices")
    return index


def point_distances(points: torch.Tensor, p: torch.Tensor) -> torch.Tensor:
    """Euclidean distance from every row of ``points`` to ``p``."""
    return torch.sqrt(((points - p) ** 2).sum(dim=-1))


def find_neighbors(mesh, vertex_index: int, threshold: float = DEFAULT_THRESHOLD) -> torch.Tensor:
    """
    Indices of all other vertices strictly closer than ``threshold``.

    Full O(N) scan over the position buffer; spatial proximity only, the
    index buffer is never consulted.

    Args:
        mesh: ``Mesh`` or (N, 3) position tensor
        vertex_index: query vertex
        threshold: connection distance (strict ``<``)

    Returns:
        neighbors: (K,) long tensor, ascending, never contains ``vertex_index``
    """
    positions = _buffer(mesh)
    threshold = _check_threshold(threshold)
    vertex_index = _check_index(positions, vertex_index)

    d = point_distances(positions, positions[vertex_index])
    mask = d < threshold
    mask[vertex_index] = False
    return torch.nonzero(mask, as_tuple=False).flatten()


class SpatialHashGrid:
    """
    Uniform grid over vertex positions, kept current as vertices move.

    Cells are (slightly more than) one threshold wide, so every point strictly
    within ``threshold`` of a query lies in the 27 cells around it.
    """

    def __init__(self, cell_size: float = DEFAULT_THRESHOLD):
        self.cell_size = _check_threshold(cell_size) * (1.0 + GRID_CELL_PAD)
        self._cells: Dict[Cell, Set[int]] = defaultdict(set)
        self._keys: List[Cell] = []

    def __len__(self):
        return len(self._keys)

    def _key(self, p) -> Cell:
        x, y, z = (float(c) for c in p)
        c = self.cell_size
        return (math.floor(x / c), math.floor(y / c), math.floor(z / c))

    def build(self, positions: torch.Tensor) -> "SpatialHashGrid":
        """(Re)index every vertex of ``positions``."""
        # Keyed exactly like move(); Python ints do not overflow
        pts = positions.detach().reshape(-1, 3).tolist()

        self._cells = defaultdict(set)
        self._keys = [self._key(p) for p in pts]
        for i, key in enumerate(self._keys):
            self._cells[key].add(i)
        return self

    def move(self, index: int, position) -> None:
        """Re-bucket ``index`` after its position changed."""
        new_key = self._key(position)
        old_key = self._keys[index]
        if new_key == old_key:
            return

        bucket = self._cells[old_key]
        bucket.discard(index)
        if not bucket:
            del self._cells[old_key]
        self._cells[new_key].add(index)
        self._keys[index] = new_key

    def candidates(self, position) -> Set[int]:
        """Indices bucketed in the 3x3x3 block of cells around ``position``."""
        kx, ky, kz = self._key(position)
        out: Set[int] = set()
        for dx, dy, dz in _OFFSETS:
            bucket = self._cells.get((kx + dx, ky + dy, kz + dz))
            if bucket:
                out |= bucket
        return out

    def query(self, positions: torch.Tensor, index: int, threshold: float) -> torch.Tensor:
        """Same result as :func:`find_neighbors`, restricted to nearby cells."""
        p = positions[index]
        cand = self.candidates(p.tolist())
        cand.discard(index)
        if not cand:
            return torch.empty(0, dtype=torch.long, device=positions.device)

        idx = torch.tensor(sorted(cand), dtype=torch.long, device=positions.device)
        d = point_distances(positions[idx], p)
        return idx[d < threshold]


class AdjacencyEstimator:
    """
    Callable neighbour lookup used by the displacement propagator.

    With ``use_grid`` a :class:`SpatialHashGrid` replaces the full scan; the
    propagator reports every write through :meth:`notify_moved` so neighbour
    membership matches the scan exactly.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD, use_grid: bool = True):
        self.threshold = _check_threshold(threshold)
        self.use_grid = bool(use_grid)
        self._grid: Optional[SpatialHashGrid] = None

    def bind(self, positions: torch.Tensor) -> "AdjacencyEstimator":
        """Prepare for a pass over ``positions`` (rebuilds the grid)."""
        if self.use_grid:
            self._grid = SpatialHashGrid(self.threshold).build(positions)
        else:
            self._grid = None
        return self

    def invalidate_cache(self):
        """Drop the grid so the next call rebuilds it."""
        self._grid = None

    def notify_moved(self, index: int, position) -> None:
        if self._grid is not None:
            self._grid.move(index, position.tolist() if torch.is_tensor(position) else position)

    def __call__(self, positions: torch.Tensor, index: int) -> torch.Tensor:
        positions = _buffer(positions)
        if not self.use_grid:
            return find_neighbors(positions, index, self.threshold)

        index = _check_index(positions, index)
        if self._grid is None or len(self._grid) != positions.shape[0]:
            self.bind(positions)
        return self._grid.query(positions, index, self.threshold)
