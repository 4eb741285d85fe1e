"""
Mesh container and file loading.

A mesh is just a list of 3D points (vertices) and a list of triangles, each
triangle being 3 indices into the vertex list. The topology checks only need
the triangles, flattened into one long index buffer; the vertices come along
so reports can say *where* a bad edge is.

Loading goes through trimesh, which reads STL, OBJ, PLY, OFF, 3MF and more.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import logging

import numpy as np
import trimesh

# Set up logging for this module
logger = logging.getLogger(__name__)


class Mesh:
    """
    A 3D mesh defined by vertices and triangles.

    Example:
        vertices = [(0,0,0), (1,0,0), (0,1,0)]  # 3 points
        triangles = [(0, 1, 2)]  # 1 triangle using all 3 vertices
    """

    def __init__(
        self,
        vertices: Sequence[Tuple[float, float, float]],
        triangles: Sequence[Tuple[int, int, int]],
        name: str = "mesh"
    ):
        """
        Initialize a mesh.

        Args:
            vertices: List of (x, y, z) coordinates
            triangles: List of (v0, v1, v2) vertex indices (0-indexed)
            name: Display name used in reports
        """
        self.vertices = vertices
        self.triangles = triangles
        self.name = name

    @classmethod
    def from_trimesh(cls, tmesh: trimesh.Trimesh, name: str = "mesh") -> "Mesh":
        """Wrap a trimesh.Trimesh (vertices and faces are copied to lists)."""
        return cls(
            vertices=[tuple(v) for v in tmesh.vertices.tolist()],
            triangles=[tuple(f) for f in tmesh.faces.tolist()],
            name=name
        )

    def index_buffer(self) -> np.ndarray:
        """Triangles flattened to (v0, v1, v2, v0, v1, v2, ...)."""
        if len(self.triangles) == 0:
            return np.zeros(0, dtype=np.int64)
        return np.asarray(self.triangles, dtype=np.int64).reshape(-1)

    def vertex(self, index: int) -> Optional[Tuple[float, float, float]]:
        """Vertex position, or None if the index is out of range."""
        if 0 <= index < len(self.vertices):
            x, y, z = self.vertices[index]
            return (float(x), float(y), float(z))
        return None

    def __repr__(self) -> str:
        return f"Mesh({self.name!r}, vertices={len(self.vertices)}, triangles={len(self.triangles)})"


def load_mesh(path: Union[str, Path]) -> Mesh:
    """
    Load a mesh file into a Mesh.

    Vertices are merged by position on load so formats that store every
    triangle separately (STL!) end up with shared edges - otherwise every
    edge of an STL would look like a boundary. Multi-object files (3MF, GLB
    scenes) are concatenated into one mesh.

    Args:
        path: Path to any mesh file trimesh understands

    Returns:
        Mesh named after the file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If trimesh can't read it, or it holds no triangles
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Mesh file not found: {path}")

    try:
        loaded = trimesh.load(str(path))
    except Exception as e:
        raise ValueError(f"Failed to load {path.name}: {e}") from e

    if isinstance(loaded, trimesh.Scene):
        meshes: List[trimesh.Trimesh] = [
            g for g in loaded.geometry.values() if isinstance(g, trimesh.Trimesh)
        ]
        if not meshes:
            raise ValueError(f"{path.name} contains no triangle meshes")
        logger.debug(f"{path.name}: concatenating {len(meshes)} meshes from scene")
        tmesh = trimesh.util.concatenate(meshes) if len(meshes) > 1 else meshes[0]
    elif isinstance(loaded, trimesh.Trimesh):
        tmesh = loaded
    else:
        raise ValueError(f"{path.name} is not a triangle mesh ({type(loaded).__name__})")

    mesh = Mesh.from_trimesh(tmesh, name=path.name)
    logger.debug(f"Loaded {mesh!r}")
    return mesh
