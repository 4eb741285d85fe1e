"""
Test helper utilities for creating test fixtures and sample data.

This module provides index buffers for a few well-known meshes (a closed
cube, an open box, non-manifold fans) and a writer for small OBJ files used
by the loader and CLI tests.
"""

from typing import List, Optional, Sequence, Tuple
import os
import tempfile


# Unit cube (0,0,0) to (1,1,1)
CUBE_VERTICES: List[Tuple[float, float, float]] = [
    (0.0, 0.0, 0.0),  # 0
    (1.0, 0.0, 0.0),  # 1
    (1.0, 1.0, 0.0),  # 2
    (0.0, 1.0, 0.0),  # 3
    (0.0, 0.0, 1.0),  # 4
    (1.0, 0.0, 1.0),  # 5
    (1.0, 1.0, 1.0),  # 6
    (0.0, 1.0, 1.0),  # 7
]

# Triangles with CCW winding for outward normals
CUBE_TRIANGLES: List[Tuple[int, int, int]] = [
    # Bottom face (z=0)
    (0, 2, 1), (0, 3, 2),
    # Top face (z=1)
    (4, 5, 6), (4, 6, 7),
    # Front face (y=0)
    (0, 1, 5), (0, 5, 4),
    # Back face (y=1)
    (2, 3, 7), (2, 7, 6),
    # Left face (x=0)
    (0, 4, 7), (0, 7, 3),
    # Right face (x=1)
    (1, 2, 6), (1, 6, 5),
]


def flatten(triangles: Sequence[Tuple[int, int, int]]) -> List[int]:
    """Flatten triangles into a flat index buffer."""
    return [index for tri in triangles for index in tri]


def create_closed_cube_indices() -> List[int]:
    """Watertight cube: 12 triangles, 36 indices, every edge shared by 2 faces."""
    return flatten(CUBE_TRIANGLES)


def create_open_box_indices() -> List[int]:
    """Cube with the top face removed - 4 boundary edges around the opening."""
    return flatten(CUBE_TRIANGLES[:2] + CUBE_TRIANGLES[4:])


def create_fan_indices(fan_size: int) -> List[int]:
    """
    `fan_size` triangles all sharing edge (0, 1).

    Triangle i is (0, 1, i + 2), so with 3 or more triangles edge (0, 1) is
    non-manifold and every other edge is a boundary.
    """
    return flatten([(0, 1, i + 2) for i in range(fan_size)])


def reverse_winding(indices: Sequence[int], faces: Optional[Sequence[int]] = None) -> List[int]:
    """
    Flip the winding of some (or all) triangles in a flat index buffer.

    Args:
        indices: Flat index buffer
        faces: Face indices to flip (all of them if None)
    """
    triangles = [tuple(indices[i:i + 3]) for i in range(0, len(indices), 3)]
    to_flip = set(range(len(triangles))) if faces is None else set(faces)
    flipped = [
        (tri[0], tri[2], tri[1]) if i in to_flip else tri
        for i, tri in enumerate(triangles)
    ]
    return flatten(flipped)


def write_obj(
    vertices: Sequence[Tuple[float, float, float]],
    triangles: Sequence[Tuple[int, int, int]],
    filepath: Optional[str] = None
) -> str:
    """
    Write a minimal Wavefront OBJ file.

    Args:
        vertices: List of (x, y, z) positions
        triangles: List of 0-indexed triangles (OBJ itself is 1-indexed)
        filepath: Optional path to write to (defaults to a temp file)

    Returns:
        Path to the written file
    """
    if filepath is None:
        fd, filepath = tempfile.mkstemp(suffix='.obj')
        os.close(fd)

    lines = [f"v {x} {y} {z}" for x, y, z in vertices]
    lines.extend(f"f {a + 1} {b + 1} {c + 1}" for a, b, c in triangles)

    with open(filepath, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines) + "\n")

    return filepath


def write_cube_obj(filepath: Optional[str] = None) -> str:
    """Write the closed unit cube as an OBJ file."""
    return write_obj(CUBE_VERTICES, CUBE_TRIANGLES, filepath)


def write_fan_obj(fan_size: int = 3, filepath: Optional[str] = None) -> str:
    """
    Write a non-manifold fan as an OBJ file.

    All fan tips sit at distinct positions so merging vertices on load
    keeps the topology intact.
    """
    vertices = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0)]
    vertices.extend((0.5, float(i + 1), float(i % 2)) for i in range(fan_size))
    triangles = [(0, 1, i + 2) for i in range(fan_size)]
    return write_obj(vertices, triangles, filepath)


def cleanup_test_file(filepath: str) -> None:
    """Remove a test file if it exists."""
    try:
        if os.path.exists(filepath):
            os.remove(filepath)
    except OSError:
        pass  # Best effort cleanup
