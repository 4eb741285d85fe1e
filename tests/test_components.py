"""
Unit tests for the components module.

Tests connected component labelling and floater detection.
"""

import unittest
import sys
from pathlib import Path

# Add parent directory to path to import the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from mesh_topology.components import (
    find_connected_components,
    find_connected_components_from_indices,
    get_faces_in_component,
)
from mesh_topology.config import AnalysisConfig
from mesh_topology.edge_map import build_edge_map
from tests.helpers import create_closed_cube_indices, create_fan_indices


def offset_indices(indices, offset):
    """Shift every vertex index so meshes don't share vertices."""
    return [i + offset for i in indices]


class TestFindConnectedComponents(unittest.TestCase):
    """Test connected component detection."""

    def test_empty_mesh(self):
        """No faces, no components."""
        result = find_connected_components(build_edge_map([]))
        self.assertEqual(result.component_count, 0)
        self.assertEqual(result.main_component_index, -1)
        self.assertEqual(len(result.component_id_per_face), 0)
        self.assertEqual(result.floater_indices, [])

    def test_single_cube(self):
        """A cube is one component."""
        result = find_connected_components(build_edge_map(create_closed_cube_indices()))
        self.assertEqual(result.component_count, 1)
        self.assertEqual(result.component_sizes, [12])
        self.assertEqual(result.main_component_index, 0)
        self.assertTrue((result.component_id_per_face == 0).all())

    def test_two_cubes(self):
        """Two cubes with no shared vertices are two equal components."""
        indices = create_closed_cube_indices() + offset_indices(create_closed_cube_indices(), 8)
        result = find_connected_components_from_indices(indices)
        self.assertEqual(result.component_count, 2)
        self.assertEqual(result.component_sizes, [12, 12])
        # Tie goes to the first one found
        self.assertEqual(result.main_component_index, 0)
        self.assertEqual(result.floater_indices, [])

    def test_vertex_contact_is_not_connection(self):
        """Faces touching only at a vertex are separate components."""
        result = find_connected_components_from_indices([0, 1, 2, 0, 3, 4])
        self.assertEqual(result.component_count, 2)

    def test_fan_is_one_component(self):
        """Faces on a non-manifold edge are all connected."""
        result = find_connected_components_from_indices(create_fan_indices(5))
        self.assertEqual(result.component_count, 1)
        self.assertEqual(result.component_sizes, [5])

    def test_floater_detection(self):
        """A lone triangle next to a big mesh is a floater."""
        big = list(create_closed_cube_indices())
        for i in range(4):
            big += offset_indices(create_closed_cube_indices(), 8 * (i + 1))
        floater_start = 8 * 5
        indices = [floater_start, floater_start + 1, floater_start + 2] + big

        # 61 faces; 5% threshold -> components under ceil(3.05) = 4 faces
        result = find_connected_components_from_indices(indices, floater_threshold=5)
        self.assertEqual(result.component_count, 6)
        self.assertEqual(result.component_id_per_face[0], 0)
        self.assertEqual(result.component_sizes[0], 1)
        self.assertEqual(result.floater_indices, [0])
        self.assertEqual(result.floater_face_count, 1)
        self.assertNotEqual(result.main_component_index, 0)

    def test_threshold_from_config(self):
        """The config's floater threshold is used by default."""
        indices = create_closed_cube_indices() + [100, 101, 102]
        strict = find_connected_components_from_indices(indices, config=AnalysisConfig(floater_threshold=0))
        loose = find_connected_components_from_indices(indices, config=AnalysisConfig(floater_threshold=50))
        self.assertEqual(strict.floater_indices, [])
        self.assertEqual(loose.floater_indices, [1])

    def test_component_ids_are_contiguous(self):
        """IDs are 0..n-1 in order of each component's first face."""
        indices = [0, 1, 2, 10, 11, 12, 1, 2, 3, 20, 21, 22]
        result = find_connected_components_from_indices(indices)
        self.assertEqual(result.component_id_per_face.tolist(), [0, 1, 0, 2])

    def test_get_faces_in_component(self):
        """Faces for one component are returned in order."""
        indices = [0, 1, 2, 10, 11, 12, 1, 2, 3, 20, 21, 22]
        result = find_connected_components_from_indices(indices)
        self.assertEqual(get_faces_in_component(result.component_id_per_face, 0), [0, 2])
        self.assertEqual(get_faces_in_component(result.component_id_per_face, 2), [3])
        self.assertEqual(get_faces_in_component(result.component_id_per_face, 7), [])


if __name__ == '__main__':
    unittest.main()
