"""Mesh container: position buffer, optional index buffer, derived normals."""

from typing import Callable, List, Optional

import torch

from ..utils.utils import ensure_torch
from .normals import compute_vertex_normals
from .transform import transform_points

NormalListener = Callable[["Mesh"], None]


class Mesh:
    """
    Vertex buffer shared between the editor, the deformer and the renderer.

    ``positions`` is borrowed, not copied, when it already is a tensor of the
    requested dtype, so in-place deformation is visible to the owner.
    """

    def __init__(
        self,
        positions,
        faces=None,
        matrix_world=None,
        dtype: torch.dtype = torch.float32,
        device: str = 'cpu',
    ):
        self.positions = ensure_torch(positions, device=device, dtype=dtype)
        if self.positions.ndim != 2 or self.positions.shape[-1] != 3:
            raise ValueError(f"positions must be (N, 3), got {tuple(self.positions.shape)}")

        self.faces: Optional[torch.Tensor] = None
        if faces is not None:
            self.faces = ensure_torch(faces, device=device, dtype=torch.long).reshape(-1, 3)
            if self.faces.numel() and (int(self.faces.min()) < 0 or int(self.faces.max()) >= self.vertex_count):
                raise ValueError("Face indices out of range for vertex buffer")

        if matrix_world is None:
            matrix_world = torch.eye(4, dtype=torch.float64)
        self.matrix_world = ensure_torch(matrix_world, dtype=torch.float64).reshape(4, 4)

        self.normals = torch.zeros_like(self.positions)
        self.needs_update = False
        self.normals_dirty = True
        self._normal_listeners: List[NormalListener] = []

    def __len__(self):
        return self.vertex_count

    def __repr__(self):
        nf = 0 if self.faces is None else self.faces.shape[0]
        return f"Mesh(vertices={self.vertex_count}, faces={nf}, dtype={self.positions.dtype})"

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    def validate_index(self, index: int) -> int:
        """Return ``index`` as int; negative or out-of-range raises IndexError."""
        index = int(index)
        if index < 0 or index >= self.vertex_count:
            raise IndexError(f"Vertex index {index} out of range for {self.vertex_count} vertices")
        return index

    def position(self, index: int) -> torch.Tensor:
        return self.positions[self.validate_index(index)].clone()

    def set_position(self, index: int, value) -> None:
        index = self.validate_index(index)
        self.positions[index] = ensure_torch(value, device=self.positions.device, dtype=self.positions.dtype)

    def world_positions(self) -> torch.Tensor:
        """Positions mapped through ``matrix_world``."""
        return transform_points(self.matrix_world, self.positions)

    # ------------------------------------------------------------------
    # Normal recompute signal
    # ------------------------------------------------------------------
    def add_normal_listener(self, fn: NormalListener) -> None:
        self._normal_listeners.append(fn)

    def remove_normal_listener(self, fn: NormalListener) -> None:
        self._normal_listeners.remove(fn)

    def request_normal_update(self) -> None:
        """Flag normals stale and notify listeners; never recomputes itself."""
        self.normals_dirty = True
        for fn in list(self._normal_listeners):
            fn(self)

    def compute_vertex_normals(self) -> torch.Tensor:
        self.normals = compute_vertex_normals(self.positions, self.faces)
        self.normals_dirty = False
        return self.normals

    def clone(self) -> "Mesh":
        """Deep copy of the buffers (listeners are not copied)."""
        m = Mesh(
            self.positions.clone(),
            faces=None if self.faces is None else self.faces.clone(),
            matrix_world=self.matrix_world.clone(),
            dtype=self.positions.dtype,
            device=str(self.positions.device),
        )
        m.normals = self.normals.clone()
        m.normals_dirty = self.normals_dirty
        return m
