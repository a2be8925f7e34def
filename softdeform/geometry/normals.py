"""Per-vertex shading normals."""

from typing import Optional

import torch

from ..utils.config import EPS_NORMALIZE


def normalize(v: torch.Tensor, eps: float = EPS_NORMALIZE) -> torch.Tensor:
    """L2-normalize last dimension, safe for zeros."""
    norm = torch.norm(v, dim=-1, keepdim=True)
    return v / torch.clamp(norm, min=eps)


def triangle_faces(num_vertices: int, device=None) -> torch.Tensor:
    """Implicit index buffer for a non-indexed triangle soup."""
    if num_vertices % 3 != 0:
        raise ValueError(f"Non-indexed buffer needs a multiple of 3 vertices, got {num_vertices}")
    return torch.arange(num_vertices, device=device, dtype=torch.long).reshape(-1, 3)


def face_normals(positions: torch.Tensor, faces: torch.Tensor) -> torch.Tensor:
    """Unnormalized face normals (length = 2 * triangle area)."""
    v0 = positions[faces[:, 0]]
    v1 = positions[faces[:, 1]]
    v2 = positions[faces[:, 2]]
    return torch.cross(v1 - v0, v2 - v0, dim=-1)


def compute_vertex_normals(positions: torch.Tensor, faces: Optional[torch.Tensor] = None) -> torch.Tensor:
    """
    Area-weighted vertex normals.

    Args:
        positions: (N, 3) vertex positions
        faces: (F, 3) triangle indices; None treats the buffer as consecutive
            triangles

    Returns:
        normals: (N, 3) unit normals (zero for vertices with no faces)
    """
    if faces is None:
        faces = triangle_faces(positions.shape[0], device=positions.device)

    normals = torch.zeros_like(positions)
    if faces.numel() == 0:
        return normals

    fn = face_normals(positions, faces)
    for k in range(3):
        normals.index_add_(0, faces[:, k], fn)

    return normalize(normals)
