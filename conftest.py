# Shared fixtures for the test-suite.
import pytest
import torch

from softdeform import Mesh


def make_grid(n: int = 9, spacing: float = 0.5):
    """Flat n x n grid in the XY plane, centred on the origin, triangulated."""
    half = (n - 1) / 2.0
    pts = [[(i - half) * spacing, (j - half) * spacing, 0.0] for j in range(n) for i in range(n)]
    faces = []
    for j in range(n - 1):
        for i in range(n - 1):
            a = j * n + i
            b, c, d = a + 1, a + n, a + n + 1
            faces.append([a, b, d])
            faces.append([a, d, c])
    return torch.tensor(pts, dtype=torch.float32), torch.tensor(faces, dtype=torch.long)


@pytest.fixture
def grid_mesh():
    """81-vertex grid, spacing 0.5 (no two vertices within the 0.1 threshold).

    Vertex 40 sits at the origin.
    """
    pts, faces = make_grid()
    return Mesh(pts, faces=faces)


@pytest.fixture
def five_vertex_mesh():
    """Vertices 2 and 3 are 0.05 apart; everything else is far away."""
    pts = torch.tensor([
        [-5.0, 0.0, 0.0],
        [0.0, 5.0, 0.0],
        [0.0, 0.0, 0.0],
        [0.0, 0.05, 0.0],
        [5.0, 0.0, 0.0],
    ], dtype=torch.float32)
    return Mesh(pts)
