# ============================================================================
# OBJ / PLY I/O tests
# ============================================================================
import pytest
import torch

from softdeform import Mesh, load_obj, save_obj, save_ply

QUAD_OBJ = """# unit quad
o quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vn 0 0 1
f 1/1/1 2/1/1 3/1/1 4/1/1
"""


def test_load_quad_is_fan_triangulated(tmp_path):
    path = tmp_path / "quad.obj"
    path.write_text(QUAD_OBJ, encoding="utf-8")

    with pytest.warns(UserWarning, match="fan-triangulated"):
        mesh = load_obj(path)

    assert mesh.vertex_count == 4
    assert mesh.faces.tolist() == [[0, 1, 2], [0, 2, 3]]
    assert mesh.positions.dtype == torch.float32


def test_negative_indices(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n", encoding="utf-8")
    assert load_obj(path).faces.tolist() == [[0, 1, 2]]


def test_points_only_warns(tmp_path):
    path = tmp_path / "pts.obj"
    path.write_text("v 0 0 0\nv 1 0 0\n", encoding="utf-8")
    with pytest.warns(UserWarning, match="no faces"):
        mesh = load_obj(path)
    assert mesh.faces is None


@pytest.mark.parametrize("text", [
    "v 0 0\n",
    "v 0 zero 0\n",
    "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 7\n",
    "v 0 0 0\nf 1 2\n",
])
def test_malformed(tmp_path, text):
    path = tmp_path / "bad.obj"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_obj(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_obj(tmp_path / "nope.obj")


def test_save_and_reload(tmp_path, grid_mesh):
    grid_mesh.positions[40, 2] = 0.75
    grid_mesh.compute_vertex_normals()

    path = tmp_path / "out" / "grid.obj"
    save_obj(path, grid_mesh)
    text = path.read_text(encoding="utf-8")
    assert "vn " in text
    assert "f 1//1 2//2 11//11" in text

    again = load_obj(path)
    assert torch.allclose(again.positions, grid_mesh.positions, atol=1e-6)
    assert torch.equal(again.faces, grid_mesh.faces)


def test_save_ply_header(tmp_path):
    mesh = Mesh(torch.tensor([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]]), faces=[[0, 1, 2]])
    mesh.compute_vertex_normals()

    path = tmp_path / "tri.ply"
    save_ply(path, mesh)
    lines = path.read_text(encoding="utf-8").splitlines()

    assert lines[0] == "ply"
    assert "element vertex 3" in lines
    assert "element face 1" in lines
    assert lines[-1] == "3 0 1 2"
    assert lines[lines.index("end_header") + 1].split() == ["0.000000"] * 5 + ["1.000000"]
