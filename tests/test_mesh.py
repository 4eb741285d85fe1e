"""
Unit tests for the mesh module.

Tests the Mesh container and loading mesh files through trimesh.
"""

import unittest
import sys
import os
import tempfile
from pathlib import Path

import numpy as np
import trimesh

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from mesh_topology.mesh import Mesh, load_mesh
from mesh_topology.non_manifold import check_non_manifold_from_indices
from mesh_topology.watertight import check_watertight_from_indices
from tests.helpers import (
    CUBE_TRIANGLES,
    CUBE_VERTICES,
    cleanup_test_file,
    write_cube_obj,
    write_fan_obj,
)


class TestMesh(unittest.TestCase):
    """Test the Mesh container."""

    def test_index_buffer(self):
        """Triangles flatten in order."""
        mesh = Mesh(vertices=CUBE_VERTICES, triangles=CUBE_TRIANGLES[:2])
        self.assertEqual(mesh.index_buffer().tolist(), [0, 2, 1, 0, 3, 2])

    def test_empty_index_buffer(self):
        """A mesh with no triangles has an empty buffer."""
        mesh = Mesh(vertices=[], triangles=[])
        buffer = mesh.index_buffer()
        self.assertEqual(buffer.size, 0)
        self.assertEqual(buffer.dtype.kind, 'i')

    def test_vertex_lookup(self):
        """vertex() returns floats, or None when out of range."""
        mesh = Mesh(vertices=CUBE_VERTICES, triangles=CUBE_TRIANGLES)
        self.assertEqual(mesh.vertex(6), (1.0, 1.0, 1.0))
        self.assertIsNone(mesh.vertex(8))
        self.assertIsNone(mesh.vertex(-1))

    def test_from_trimesh(self):
        """Wrapping a trimesh copies vertices and faces."""
        tmesh = trimesh.Trimesh(vertices=CUBE_VERTICES, faces=CUBE_TRIANGLES, process=False)
        mesh = Mesh.from_trimesh(tmesh, name="cube")
        self.assertEqual(len(mesh.vertices), 8)
        self.assertEqual(len(mesh.triangles), 12)
        self.assertEqual(mesh.name, "cube")
        np.testing.assert_array_equal(mesh.index_buffer(), np.asarray(CUBE_TRIANGLES).reshape(-1))

    def test_repr(self):
        """String representation shows name and counts."""
        mesh = Mesh(vertices=CUBE_VERTICES, triangles=CUBE_TRIANGLES, name="cube")
        self.assertEqual(repr(mesh), "Mesh('cube', vertices=8, triangles=12)")


class TestLoadMesh(unittest.TestCase):
    """Test loading mesh files."""

    def setUp(self):
        self.files = []

    def tearDown(self):
        for path in self.files:
            cleanup_test_file(path)

    def test_load_cube_obj(self):
        """A closed cube OBJ loads as a watertight, manifold mesh."""
        path = write_cube_obj()
        self.files.append(path)

        mesh = load_mesh(path)
        self.assertEqual(len(mesh.triangles), 12)
        self.assertEqual(mesh.name, Path(path).name)

        indices = mesh.index_buffer()
        self.assertFalse(check_non_manifold_from_indices(indices).has_non_manifold)
        self.assertTrue(check_watertight_from_indices(indices).is_watertight)

    def test_load_fan_obj(self):
        """A non-manifold fan keeps its shared edge through loading."""
        path = write_fan_obj(3)
        self.files.append(path)

        mesh = load_mesh(path)
        result = check_non_manifold_from_indices(mesh.index_buffer())
        self.assertTrue(result.has_non_manifold)
        self.assertEqual(result.non_manifold_edge_count, 1)

    def test_load_stl_merges_vertices(self):
        """STL triangle soups get shared edges after loading."""
        fd, path = tempfile.mkstemp(suffix='.stl')
        os.close(fd)
        self.files.append(path)
        trimesh.Trimesh(vertices=CUBE_VERTICES, faces=CUBE_TRIANGLES, process=False).export(path)

        mesh = load_mesh(path)
        self.assertEqual(len(mesh.vertices), 8)
        self.assertTrue(check_watertight_from_indices(mesh.index_buffer()).is_watertight)

    def test_missing_file(self):
        """Missing files raise FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_mesh("definitely_not_here.stl")

    def test_unreadable_file(self):
        """Garbage content raises ValueError."""
        fd, path = tempfile.mkstemp(suffix='.xyz123')
        os.close(fd)
        self.files.append(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write("not a mesh")

        with self.assertRaises(ValueError):
            load_mesh(path)


if __name__ == '__main__':
    unittest.main()
