"""
Non-manifold edge detection.

A non-manifold edge is shared by more than 2 faces. Slicers can't decide
which side of such an edge is "inside" the model, so these edges are one of
the most common reasons a model refuses to slice cleanly.

Typical causes:
- T-junctions where faces meet incorrectly
- Boolean operation artifacts
- Overlapping or duplicated geometry
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple
import logging

from .config import AnalysisConfig
from .edge_map import EdgeKey, EdgeMap, build_edge_map

# Set up logging for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NonManifoldResult:
    """
    Result of the non-manifold check.

    Immutable once built - every field is a tuple or a read-only mapping.

    Attributes:
        has_non_manifold: True if at least one edge has 3+ adjacent faces
        non_manifold_edge_count: Number of distinct non-manifold edges
        non_manifold_edges: Flat (lo, hi, lo, hi, ...) vertex pairs, one
            pair per non-manifold edge, ready for overlay rendering
        edge_face_counts: Incidence count for every edge in the mesh
            (boundary and manifold edges included) for diagnostics
        degenerate_faces: Faces with repeated vertex indices; only filled
            in when the degenerate policy is "flag"
    """

    has_non_manifold: bool
    non_manifold_edge_count: int
    non_manifold_edges: Tuple[int, ...]
    edge_face_counts: Mapping[EdgeKey, int] = field(default_factory=lambda: MappingProxyType({}))
    degenerate_faces: Tuple[int, ...] = ()

    def edge_pairs(self) -> Tuple[EdgeKey, ...]:
        """Non-manifold edges as (lo, hi) tuples."""
        flat = self.non_manifold_edges
        return tuple(zip(flat[0::2], flat[1::2]))


def check_non_manifold(edge_map: EdgeMap, config: Optional[AnalysisConfig] = None) -> NonManifoldResult:
    """
    Check an edge map for non-manifold edges.

    Every edge falls in one of three buckets by incidence count n:
    n == 1 is a boundary edge (not flagged here - see watertight.py),
    n == 2 is a normal manifold edge, and n >= 3 is non-manifold.

    Edges come out in the edge map's iteration order. Don't rely on the
    order across edges - only each pair's own (lo, hi) order is fixed.

    Args:
        edge_map: Pre-computed edge map from build_edge_map()
        config: Optional analysis config (controls degenerate flagging)

    Returns:
        NonManifoldResult describing every offending edge
    """
    config = config or AnalysisConfig()

    flat_edges = []
    for info in edge_map.non_manifold_edges():
        lo, hi = info.vertices
        flat_edges.extend((lo, hi))

    count = len(flat_edges) // 2
    if count:
        logger.debug(f"Found {count} non-manifold edges in {edge_map!r}")

    return NonManifoldResult(
        has_non_manifold=count > 0,
        non_manifold_edge_count=count,
        non_manifold_edges=tuple(flat_edges),
        edge_face_counts=MappingProxyType(edge_map.face_counts()),
        degenerate_faces=edge_map.degenerate_faces if config.flag_degenerates else ()
    )


def check_non_manifold_from_indices(
    indices: Sequence[int],
    config: Optional[AnalysisConfig] = None
) -> NonManifoldResult:
    """
    Build the edge map and check for non-manifold edges in one call.

    Gives exactly the same result as calling build_edge_map() and then
    check_non_manifold() yourself.

    Raises:
        InvalidGeometry: If the index buffer is malformed
    """
    edge_map = build_edge_map(indices, config)
    return check_non_manifold(edge_map, config)
