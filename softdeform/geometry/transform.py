"""Object/world space transforms for positions and drag deltas."""

import torch

from ..utils.utils import ensure_torch


def to_homogeneous(points: torch.Tensor) -> torch.Tensor:
    """(N, 3) -> (N, 4) with w = 1."""
    ones = torch.ones(points.shape[:-1] + (1,), device=points.device, dtype=points.dtype)
    return torch.cat([points, ones], dim=-1)


def transform_points(matrix, points: torch.Tensor) -> torch.Tensor:
    """Apply a 4x4 affine ``matrix`` to (N, 3) ``points``."""
    M = ensure_torch(matrix, device=points.device, dtype=points.dtype).reshape(4, 4)
    return (to_homogeneous(points) @ M.T)[..., :3]


def world_to_local_direction(matrix, vec) -> torch.Tensor:
    """
    Map a world-space displacement into object space.

    Only the linear 3x3 block of ``matrix`` is inverted; a displacement is a
    direction, so the translation column must not be applied.
    """
    v = ensure_torch(vec, dtype=torch.float64).reshape(3)
    M = ensure_torch(matrix, dtype=torch.float64).reshape(4, 4)
    A = M[:3, :3]

    if abs(float(torch.linalg.det(A))) < 1e-12:
        raise ValueError("Object transform is singular; cannot map delta to object space")

    return torch.linalg.solve(A, v)
