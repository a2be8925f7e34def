# ============================================================================
# Selection-handle de-duplication tests
# ============================================================================
import numpy as np
import torch

from softdeform import Mesh, quantize, selection_handles, unique_vertex_indices


def test_negative_zero_shares_key():
    keys = quantize([[0.0, -0.0, 1e-9], [-0.0, 0.0, 0.0]])
    assert np.array_equal(keys[0], keys[1])


def test_first_occurrence_in_buffer_order():
    pts = [
        [0.0, 0.0, 0.0],
        [1.0, 0.0, 0.0],
        [0.0, 0.0, 0.0],
        [1.0000001, 0.0, 0.0],
        [2.0, 0.0, 0.0],
    ]
    assert unique_vertex_indices(pts).tolist() == [0, 1, 4]
    assert unique_vertex_indices(pts, decimals=8).tolist() == [0, 1, 3, 4]


def test_empty():
    assert unique_vertex_indices(np.zeros((0, 3))).tolist() == []


def test_handles_in_world_space():
    mesh = Mesh(
        torch.tensor([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]),
        matrix_world=[[1, 0, 0, 3], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]],
    )
    pos, idx = selection_handles(mesh)
    assert idx.tolist() == [0, 2]
    assert pos.tolist() == [[3.0, 0.0, 0.0], [4.0, 0.0, 0.0]]

    pos, _ = selection_handles(mesh, world_space=False)
    assert pos.tolist() == [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]
