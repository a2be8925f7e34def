# ============================================================================
# Drag session tests
# ============================================================================
import pytest
import torch

from softdeform import SoftSelectionDeformer

ANCHOR = 40


def test_default_start_is_anchor_world_position(grid_mesh):
    drag = SoftSelectionDeformer().begin_drag(grid_mesh, ANCHOR)
    assert drag.last_point.tolist() == [0.0, 0.0, 0.0]
    assert drag.active


def test_incremental_moves_accumulate(grid_mesh):
    before = grid_mesh.positions[ANCHOR].clone()
    drag = SoftSelectionDeformer().begin_drag(grid_mesh, ANCHOR)

    drag.move([0.0, 0.0, 0.5])
    drag.move([0.0, 0.0, 1.0])

    assert drag.steps == 2
    assert drag.last_point.tolist() == [0.0, 0.0, 1.0]
    assert torch.allclose(grid_mesh.positions[ANCHOR], before + torch.tensor([0.0, 0.0, 1.0]))


def test_world_delta_mapped_to_object_space(grid_mesh):
    # Uniform scale 2 plus a translation the delta must ignore
    grid_mesh.matrix_world = torch.tensor([
        [2.0, 0.0, 0.0, 10.0],
        [0.0, 2.0, 0.0, 0.0],
        [0.0, 0.0, 2.0, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ], dtype=torch.float64)

    drag = SoftSelectionDeformer().begin_drag(grid_mesh, ANCHOR)
    assert drag.last_point.tolist() == [10.0, 0.0, 0.0]

    drag.move([10.0, 0.0, 2.0])
    assert grid_mesh.positions[ANCHOR].tolist() == pytest.approx([0.0, 0.0, 1.0])


def test_rejected_move_keeps_pointer(grid_mesh):
    drag = SoftSelectionDeformer().begin_drag(grid_mesh, ANCHOR, start_point=[0.0, 0.0, 0.0])
    before = grid_mesh.positions.clone()

    with pytest.raises(ValueError):
        drag.move([float("nan"), 0.0, 0.0])

    assert drag.last_point.tolist() == [0.0, 0.0, 0.0]
    assert drag.steps == 0
    assert torch.equal(grid_mesh.positions, before)


def test_move_after_end_raises(grid_mesh):
    drag = SoftSelectionDeformer().begin_drag(grid_mesh, ANCHOR)
    drag.end()
    assert not drag.active
    with pytest.raises(RuntimeError):
        drag.move([0.0, 0.0, 1.0])


def test_begin_drag_checks_index(grid_mesh):
    with pytest.raises(IndexError):
        SoftSelectionDeformer().begin_drag(grid_mesh, 1000)
