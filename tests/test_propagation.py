# ============================================================================
# Displacement propagation tests
# ============================================================================
import pytest
import torch

from softdeform import AdjacencyEstimator, Mesh, apply_displacement


def _three_points():
    return torch.tensor([
        [0.0, 0.0, 0.0],
        [0.05, 0.0, 0.0],
        [1.0, 0.0, 0.0],
    ], dtype=torch.float32)


def test_primary_and_half_strength_neighbor():
    pts = _three_points()
    nb = apply_displacement(pts, 0, 0.5, [2.0, 0.0, 0.0])

    assert nb.tolist() == [1]
    assert pts[0].tolist() == [1.0, 0.0, 0.0]
    assert pts[1].tolist() == pytest.approx([0.55, 0.0, 0.0])
    # Vertex 2 is where vertex 0 lands, but neighbours are found before the move
    assert pts[2].tolist() == [1.0, 0.0, 0.0]


def test_custom_neighbor_factor():
    pts = _three_points()
    apply_displacement(pts, 0, 1.0, [0.0, 1.0, 0.0], neighbor_factor=0.25)
    assert pts[1].tolist() == pytest.approx([0.05, 0.25, 0.0])


def test_works_on_mesh_with_estimator():
    mesh = Mesh(_three_points())
    est = AdjacencyEstimator(0.1, use_grid=True).bind(mesh.positions)
    nb = apply_displacement(mesh, 1, 1.0, [0.0, 0.0, 1.0], adjacency=est)

    assert nb.tolist() == [0]
    assert mesh.positions[1].tolist() == pytest.approx([0.05, 0.0, 1.0])
    assert mesh.positions[0].tolist() == pytest.approx([0.0, 0.0, 0.5])

    # The grid followed both writes
    assert est(mesh.positions, 0).tolist() == []


@pytest.mark.parametrize("influence", [-0.1, 1.5])
def test_influence_out_of_range(influence):
    pts = _three_points()
    with pytest.raises(ValueError):
        apply_displacement(pts, 0, influence, [1.0, 0.0, 0.0])
    assert torch.equal(pts, _three_points())


def test_non_finite_delta_rejected_before_write():
    pts = _three_points()
    with pytest.raises(ValueError):
        apply_displacement(pts, 0, 1.0, [float("nan"), 0.0, 0.0])
    assert torch.equal(pts, _three_points())


def test_index_out_of_range():
    with pytest.raises(IndexError):
        apply_displacement(_three_points(), 5, 1.0, [1.0, 0.0, 0.0])
