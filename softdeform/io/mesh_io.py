"""Mesh file I/O (Wavefront OBJ, ASCII PLY)."""

import warnings
from pathlib import Path

import numpy as np

from ..geometry.mesh import Mesh
from ..utils.utils import as_numpy


def _parse_face_index(token: str, num_vertices: int, lineno: int) -> int:
    """OBJ ``v``, ``v/vt``, ``v//vn`` or ``v/vt/vn`` -> zero-based vertex index."""
    try:
        raw = int(token.split("/")[0])
    except ValueError:
        raise ValueError(f"Malformed face index {token!r} on line {lineno}") from None

    idx = raw - 1 if raw > 0 else num_vertices + raw
    if raw == 0 or idx < 0 or idx >= num_vertices:
        raise ValueError(f"Face index {raw} out of range on line {lineno}")
    return idx


def load_obj(path) -> Mesh:
    """
    Read vertices and faces from an OBJ file.

    Polygons with more than three corners are fan-triangulated. Texture
    coordinates, normals and groups are ignored.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Mesh file not found: {path}")

    verts = []
    faces = []
    triangulated = False

    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            parts = line.split()
            if not parts or parts[0].startswith("#"):
                continue

            if parts[0] == "v":
                if len(parts) < 4:
                    raise ValueError(f"Vertex record needs 3 coordinates on line {lineno}")
                try:
                    verts.append([float(c) for c in parts[1:4]])
                except ValueError:
                    raise ValueError(f"Malformed vertex on line {lineno}: {line.strip()}") from None

            elif parts[0] == "f":
                if len(parts) < 4:
                    raise ValueError(f"Face needs at least 3 vertices on line {lineno}")
                corners = [_parse_face_index(tok, len(verts), lineno) for tok in parts[1:]]
                if len(corners) > 3:
                    triangulated = True
                for k in range(1, len(corners) - 1):
                    faces.append([corners[0], corners[k], corners[k + 1]])

    if triangulated:
        warnings.warn(f"{path.name}: polygons with more than 3 vertices were fan-triangulated")
    if not faces:
        warnings.warn(f"{path.name}: no faces found; normals will be zero")

    positions = np.asarray(verts, dtype=np.float32).reshape(-1, 3)
    face_arr = np.asarray(faces, dtype=np.int64).reshape(-1, 3) if faces else None
    return Mesh(positions, faces=face_arr)


def save_obj(path, mesh: Mesh, write_normals: bool = True) -> None:
    """Write positions, faces and (optionally) vertex normals as OBJ."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    V = as_numpy(mesh.positions)
    N = as_numpy(mesh.normals) if write_normals else None
    F = as_numpy(mesh.faces) if mesh.faces is not None else None

    with path.open("w", encoding="utf-8") as f:
        f.write(f"# softdeform: {len(V)} vertices\n")
        np.savetxt(f, V, fmt="v %.6f %.6f %.6f")
        if N is not None:
            np.savetxt(f, N, fmt="vn %.6f %.6f %.6f")
        if F is not None and len(F):
            F1 = F + 1
            if N is not None:
                for a, b, c in F1:
                    f.write(f"f {a}//{a} {b}//{b} {c}//{c}\n")
            else:
                np.savetxt(f, F1, fmt="f %d %d %d")


def save_ply(path, mesh: Mesh) -> None:
    """Save mesh in ASCII PLY format (vertices, normals, faces)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    V = as_numpy(mesh.positions)
    N = as_numpy(mesh.normals)
    F = as_numpy(mesh.faces) if mesh.faces is not None else np.zeros((0, 3), dtype=np.int64)

    with path.open("w", encoding="utf-8") as f:
        f.write("ply\nformat ascii 1.0\n")
        f.write(f"element vertex {len(V)}\n")
        f.write("property float x\nproperty float y\nproperty float z\n")
        f.write("property float nx\nproperty float ny\nproperty float nz\n")
        f.write(f"element face {len(F)}\n")
        f.write("property list uchar int vertex_indices\n")
        f.write("end_header\n")
        if len(V):
            np.savetxt(f, np.concatenate([V, N], axis=1), fmt="%.6f")
        if len(F):
            np.savetxt(f, F, fmt="3 %d %d %d")
