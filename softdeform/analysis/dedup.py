"""Coincident-vertex de-duplication for selection handles."""

from typing import Tuple

import numpy as np
import torch

from ..utils.config import QUANTIZE_DECIMALS
from ..utils.utils import as_numpy


def quantize(points, decimals: int = QUANTIZE_DECIMALS) -> np.ndarray:
    """
    Integer grid keys at ``decimals`` fixed decimal places.

    Integer keys make -0.0 and 0.0 identical and avoid formatting/locale
    dependent string keys.
    """
    pts = as_numpy(points).astype(np.float64).reshape(-1, 3)
    scale = 10.0 ** int(decimals)
    return np.rint(pts * scale).astype(np.int64)


def unique_vertex_indices(points, decimals: int = QUANTIZE_DECIMALS) -> np.ndarray:
    """First buffer index of every distinct quantized position, in buffer order."""
    keys = quantize(points, decimals)
    if keys.shape[0] == 0:
        return np.zeros(0, dtype=np.int64)
    _, first = np.unique(keys, axis=0, return_index=True)
    return np.sort(first).astype(np.int64)


def selection_handles(mesh, decimals: int = QUANTIZE_DECIMALS, world_space: bool = True) -> Tuple[torch.Tensor, np.ndarray]:
    """
    Positions and buffer indices of one handle per distinct vertex.

    Returns:
        handle_positions: (H, 3) positions (world space when ``world_space``)
        vertex_indices: (H,) buffer index each handle drags
    """
    pts = mesh.world_positions() if world_space else mesh.positions
    idx = unique_vertex_indices(pts, decimals)
    return pts[torch.from_numpy(idx)], idx
