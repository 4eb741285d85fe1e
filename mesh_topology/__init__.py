"""
Mesh Topology Checker Package

Detect the topology defects that make a triangle mesh unprintable:
non-manifold edges, boundary edges (holes), disconnected floaters and
degenerate triangles - all computed from raw triangle connectivity.
"""

from .constants import __version__

# Core analysis: edge map -> non-manifold check
from .edge_map import EdgeInfo, EdgeMap, build_edge_map, build_edge_map_chunked, merge_edge_maps
from .non_manifold import NonManifoldResult, check_non_manifold, check_non_manifold_from_indices
from .errors import InvalidGeometry
from .config import AnalysisConfig

# Checks built on the same edge map
from .watertight import WatertightResult, check_watertight, check_watertight_from_indices
from .components import ComponentsResult, find_connected_components, find_connected_components_from_indices
from .topology_report import TopologyResult, analyze_topology, get_topology_report

from .mesh import Mesh, load_mesh
from .cli import main

__all__ = [
    "__version__",
    "EdgeInfo",
    "EdgeMap",
    "build_edge_map",
    "build_edge_map_chunked",
    "merge_edge_maps",
    "NonManifoldResult",
    "check_non_manifold",
    "check_non_manifold_from_indices",
    "InvalidGeometry",
    "AnalysisConfig",
    "WatertightResult",
    "check_watertight",
    "check_watertight_from_indices",
    "ComponentsResult",
    "find_connected_components",
    "find_connected_components_from_indices",
    "TopologyResult",
    "analyze_topology",
    "get_topology_report",
    "Mesh",
    "load_mesh",
    "main",
]
