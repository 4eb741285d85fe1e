"""
Watertightness check.

A watertight mesh has no boundary edges - every edge is shared by at least
two faces, so the surface closes up into a solid. Boundary edges (used by
exactly one face) mean there's a hole somewhere and the slicer has to guess
what's inside.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .config import AnalysisConfig
from .edge_map import EdgeMap, build_edge_map


@dataclass(frozen=True)
class WatertightResult:
    """
    Result of the watertightness check.

    Attributes:
        is_watertight: True if the mesh has no boundary edges
        boundary_edges: Flat (lo, hi, lo, hi, ...) pairs for overlay rendering
        boundary_edge_count: Number of boundary edges
    """

    is_watertight: bool
    boundary_edges: Tuple[int, ...]
    boundary_edge_count: int


def check_watertight(edge_map: EdgeMap) -> WatertightResult:
    """Find all boundary edges in a pre-computed edge map."""
    flat_edges = []
    for info in edge_map.boundary_edges():
        flat_edges.extend(info.vertices)

    return WatertightResult(
        is_watertight=not flat_edges,
        boundary_edges=tuple(flat_edges),
        boundary_edge_count=len(flat_edges) // 2
    )


def check_watertight_from_indices(
    indices: Sequence[int],
    config: Optional[AnalysisConfig] = None
) -> WatertightResult:
    """Build the edge map and run the watertight check in one call."""
    return check_watertight(build_edge_map(indices, config))
