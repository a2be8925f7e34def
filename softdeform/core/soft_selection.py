"""Soft-selection driver: falloff-weighted deformation around an anchor vertex."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np
import torch

from ..analysis.adjacency import AdjacencyEstimator, point_distances
from ..processing.propagation import apply_displacement
from ..utils.config import (
    DEFAULT_MODE,
    DEFAULT_RADIUS,
    DEFAULT_THRESHOLD,
    NEIGHBOR_FACTOR,
    validate_config,
)
from ..utils.utils import all_finite, as_vec3
from .drag import DragSession
from .falloff import FalloffMode, falloff, falloff_weights

logger = logging.getLogger(__name__)


@dataclass
class DeformResult:
    """Summary of one deformation pass."""

    influenced: int = 0
    nudged: int = 0
    max_displacement: float = 0.0


class SoftSelectionDeformer:
    """
    Moves an anchor vertex by a delta and drags its surroundings with it.

    Each vertex within ``radius`` of the anchor gets ``falloff(d) * delta``
    and passes half of that on to its proximity neighbours (vertices closer
    than ``threshold``).
    """

    def __init__(
        self,
        radius: float = DEFAULT_RADIUS,
        mode=DEFAULT_MODE,
        threshold: float = DEFAULT_THRESHOLD,
        neighbor_factor: float = NEIGHBOR_FACTOR,
        use_grid: bool = True,
    ):
        self.mode = FalloffMode.parse(mode)
        validate_config({"radius": radius, "threshold": threshold, "mode": self.mode.value})
        self.radius = float(radius)
        self.threshold = float(threshold)
        self.neighbor_factor = float(neighbor_factor)
        self.use_grid = bool(use_grid)

    @classmethod
    def from_cfg(cls, cfg: Dict) -> "SoftSelectionDeformer":
        return cls(
            radius=float(cfg.get("radius", DEFAULT_RADIUS)),
            mode=cfg.get("mode", DEFAULT_MODE),
            threshold=float(cfg.get("threshold", DEFAULT_THRESHOLD)),
            neighbor_factor=float(cfg.get("neighbor_factor", NEIGHBOR_FACTOR)),
            use_grid=bool(cfg.get("use_grid", True)),
        )

    def __repr__(self):
        return (f"SoftSelectionDeformer(radius={self.radius}, mode={self.mode.value!r}, "
                f"threshold={self.threshold}, neighbor_factor={self.neighbor_factor}, "
                f"use_grid={self.use_grid})")

    def influence(self, mesh, anchor_index: int) -> torch.Tensor:
        """Per-vertex falloff weight around the anchor, without moving anything."""
        if mesh.vertex_count == 0:
            return torch.zeros(0, dtype=mesh.positions.dtype)
        anchor_index = mesh.validate_index(anchor_index)
        d = point_distances(mesh.positions, mesh.positions[anchor_index])
        return falloff_weights(d, self.radius, self.mode)

    def deform(self, mesh, anchor_index: int, delta) -> DeformResult:
        """
        One deformation pass, in place on ``mesh.positions``.

        Vertices are visited in ascending index order. A vertex's distance to
        the anchor is taken from its position when it is visited, so nudges it
        received as a neighbour earlier in the pass count towards it.

        Raises before touching the buffer on a bad index or non-finite input;
        if the pass itself overflows, the buffer is restored and
        FloatingPointError is raised.
        """
        n = mesh.vertex_count
        if n == 0:
            return DeformResult()

        anchor_index = mesh.validate_index(anchor_index)
        positions = mesh.positions
        delta = as_vec3(delta, positions, name="delta")
        if not all_finite(positions):
            raise ValueError("Mesh positions contain NaN/Inf; refusing to deform")

        result = DeformResult()
        if bool((delta != 0).any()):
            result = self._run_pass(positions, anchor_index, delta)

        mesh.needs_update = True
        mesh.request_normal_update()

        logger.debug(
            "deform anchor=%d delta=%s influenced=%d nudged=%d max|d|=%.6g",
            anchor_index, delta.tolist(), result.influenced, result.nudged, result.max_displacement,
        )
        return result

    def _run_pass(self, positions: torch.Tensor, anchor_index: int, delta: torch.Tensor) -> DeformResult:
        n = positions.shape[0]
        snapshot = positions.clone()
        p_anchor = snapshot[anchor_index]

        # Distances are only recomputed for vertices already moved this pass
        start_dist = point_distances(positions, p_anchor).tolist()
        moved = np.zeros(n, dtype=bool)

        # One estimator per pass so concurrent passes never share grid state
        adjacency = AdjacencyEstimator(self.threshold, use_grid=self.use_grid).bind(positions)
        influenced = 0
        nudged = 0

        try:
            for i in range(n):
                if moved[i]:
                    d = float(point_distances(positions[i:i + 1], p_anchor)[0])
                else:
                    d = start_dist[i]
                if math.isnan(d):
                    raise FloatingPointError(f"Distance of vertex {i} to the anchor is NaN")
                if math.isinf(d):
                    # Overflowed, so outside any finite radius
                    continue

                w = falloff(d, self.radius, self.mode)
                if w <= 0.0:
                    continue

                neighbors = apply_displacement(
                    positions, i, w, delta,
                    neighbor_factor=self.neighbor_factor,
                    adjacency=adjacency,
                )
                influenced += 1
                if neighbors.numel() > 0:
                    moved[neighbors.cpu().numpy()] = True
                    nudged += int(neighbors.numel())
        except Exception:
            positions.copy_(snapshot)
            raise

        if not all_finite(positions):
            positions.copy_(snapshot)
            raise FloatingPointError("Deformation produced non-finite positions; pass rolled back")

        disp = torch.norm(positions - snapshot, dim=1)
        return DeformResult(
            influenced=influenced,
            nudged=nudged,
            max_displacement=float(disp.max()),
        )

    def begin_drag(self, mesh, anchor_index: int, start_point=None) -> DragSession:
        """Start an incremental drag on ``anchor_index``."""
        return DragSession(self, mesh, anchor_index, start_point)


def deform(mesh, anchor_index: int, delta, radius: float = DEFAULT_RADIUS, mode=DEFAULT_MODE,
           threshold: float = DEFAULT_THRESHOLD, deformer: Optional[SoftSelectionDeformer] = None) -> DeformResult:
    """Functional shortcut around :meth:`SoftSelectionDeformer.deform`."""
    if deformer is None:
        deformer = SoftSelectionDeformer(radius=radius, mode=mode, threshold=threshold)
    return deformer.deform(mesh, anchor_index, delta)
