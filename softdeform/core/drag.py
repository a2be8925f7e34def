"""Incremental drag sessions on top of the soft-selection driver."""

import logging

import torch

from ..geometry.transform import world_to_local_direction
from ..utils.utils import as_vec3

logger = logging.getLogger(__name__)


class DragSession:
    """
    Pointer drag on one anchor vertex.

    Every :meth:`move` deforms by the pointer motion since the previous move
    (converted to object space) and then advances the stored pointer.
    """

    def __init__(self, deformer, mesh, anchor_index: int, start_point=None):
        self.deformer = deformer
        self.mesh = mesh
        self.anchor_index = mesh.validate_index(anchor_index)

        ref = torch.zeros(3, dtype=torch.float64)
        if start_point is None:
            start_point = mesh.world_positions()[self.anchor_index]
        self.last_point = as_vec3(start_point, ref, name="start_point")
        self.active = True
        self.steps = 0

    def __repr__(self):
        state = "active" if self.active else "ended"
        return f"DragSession(anchor={self.anchor_index}, steps={self.steps}, {state})"

    def move(self, pointer):
        """Deform toward ``pointer`` (world space); returns the pass result."""
        if not self.active:
            raise RuntimeError("Drag session has ended")

        pointer = as_vec3(pointer, self.last_point, name="pointer")
        delta_world = pointer - self.last_point
        delta_local = world_to_local_direction(self.mesh.matrix_world, delta_world)

        result = self.deformer.deform(self.mesh, self.anchor_index, delta_local)

        # Only advance once the pass has been accepted
        self.last_point = pointer
        self.steps += 1
        return result

    def end(self) -> None:
        if self.active:
            logger.debug("drag on vertex %d ended after %d steps", self.anchor_index, self.steps)
        self.active = False
