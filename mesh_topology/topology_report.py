"""
Topology summary for 3D printing readiness.

Runs every edge-based check (non-manifold edges, watertightness, connected
components, degenerate triangles) off a single edge map and gathers the
findings into one result with errors, warnings and statistics.

What counts as what:
- Non-manifold edges and boundary edges are errors - slicers can't produce a
  reliable solid from either.
- Floating components and flagged degenerate triangles are warnings - the
  model still slices, but probably not the way you wanted.
"""

from typing import Any, Dict, List, Optional, Sequence, Union
import logging

from .components import ComponentsResult, find_connected_components
from .config import AnalysisConfig
from .edge_map import EdgeMap, build_edge_map, format_edge_key
from .mesh import Mesh
from .non_manifold import NonManifoldResult, check_non_manifold
from .watertight import WatertightResult, check_watertight

# Set up logging for this module
logger = logging.getLogger(__name__)


class TopologyResult:
    """
    Result of a topology analysis: issues found plus statistics.

    The individual check results are kept alongside so callers that need the
    raw edge lists (overlay rendering, repair planning) don't have to run
    the analysis again.
    """

    def __init__(self, mesh_name: str = "mesh"):
        """Initialize an empty (valid) result."""
        self.mesh_name = mesh_name
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.stats: Dict[str, Any] = {}
        self.non_manifold: Optional[NonManifoldResult] = None
        self.watertight: Optional[WatertightResult] = None
        self.components: Optional[ComponentsResult] = None

    def add_error(self, message: str) -> None:
        """Add a critical error that makes the mesh unprintable."""
        self.is_valid = False
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        """Add a non-critical warning about mesh topology."""
        self.warnings.append(message)

    def add_stat(self, key: str, value: Any) -> None:
        """Add a statistic about the mesh."""
        self.stats[key] = value

    def __repr__(self) -> str:
        status = "VALID" if self.is_valid else "INVALID"
        return f"TopologyResult({status}, errors={len(self.errors)}, warnings={len(self.warnings)})"


def _describe_edge(lo: int, hi: int, count: int, mesh: Optional[Mesh]) -> str:
    """One line describing an edge, with coordinates when we have them."""
    if mesh is not None:
        p1, p2 = mesh.vertex(lo), mesh.vertex(hi)
        if p1 is not None and p2 is not None:
            return (
                f"Edge {lo}-{hi}: ({p1[0]:.3f},{p1[1]:.3f},{p1[2]:.3f}) -> "
                f"({p2[0]:.3f},{p2[1]:.3f},{p2[2]:.3f}) shared by {count} faces"
            )
    return f"Edge {lo}-{hi} shared by {count} faces"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" + ("" if count == 1 else "s")


def analyze_topology(
    source: Union[Mesh, Sequence[int]],
    config: Optional[AnalysisConfig] = None,
    mesh_name: Optional[str] = None
) -> TopologyResult:
    """
    Analyze the topology of a mesh or a raw triangle index buffer.

    The edge map is built once and shared by all checks.

    Args:
        source: A Mesh, or a flat triangle index buffer
        config: Optional analysis config
        mesh_name: Name for messages (defaults to the Mesh's name)

    Returns:
        TopologyResult with errors, warnings, stats and the raw check results

    Raises:
        InvalidGeometry: If the index buffer is malformed
    """
    config = config or AnalysisConfig()
    mesh = source if isinstance(source, Mesh) else None
    if mesh_name is None:
        mesh_name = mesh.name if mesh is not None else "mesh"

    indices = mesh.index_buffer() if mesh is not None else source
    edge_map = build_edge_map(indices, config)

    result = TopologyResult(mesh_name)
    result.non_manifold = check_non_manifold(edge_map, config)
    result.watertight = check_watertight(edge_map)
    result.components = find_connected_components(edge_map, config.floater_threshold)

    _collect_stats(result, edge_map, mesh)
    _collect_issues(result, edge_map, mesh, config)

    logger.debug(f"{mesh_name}: {result!r}")
    return result


def _collect_stats(result: TopologyResult, edge_map: EdgeMap, mesh: Optional[Mesh]) -> None:
    non_manifold = result.non_manifold
    watertight = result.watertight
    components = result.components

    if mesh is not None:
        result.add_stat("vertices", len(mesh.vertices))
    result.add_stat("triangles", edge_map.triangle_count)
    result.add_stat("edges", edge_map.edge_count)
    result.add_stat("boundary_edges", watertight.boundary_edge_count)
    result.add_stat("non_manifold_edges", non_manifold.non_manifold_edge_count)
    result.add_stat("watertight", watertight.is_watertight)
    result.add_stat("components", components.component_count)
    result.add_stat("floater_components", len(components.floater_indices))


def _collect_issues(
    result: TopologyResult,
    edge_map: EdgeMap,
    mesh: Optional[Mesh],
    config: AnalysisConfig
) -> None:
    name = result.mesh_name
    non_manifold = result.non_manifold
    watertight = result.watertight
    components = result.components

    if edge_map.triangle_count == 0:
        result.add_warning(f"{name} has no triangles")

    if non_manifold.has_non_manifold:
        count = non_manifold.non_manifold_edge_count
        result.add_error(f"{name} has {_plural(count, 'non-manifold edge')}")
        result.add_error("  These are edges shared by 3 or more faces (slicers cannot handle this)")
        pairs = non_manifold.edge_pairs()
        for lo, hi in pairs[:config.max_listed_edges]:
            face_count = non_manifold.edge_face_counts[(lo, hi)]
            result.add_error(f"    {_describe_edge(lo, hi, face_count, mesh)}")
        if len(pairs) > config.max_listed_edges:
            result.add_error(f"    ... and {len(pairs) - config.max_listed_edges} more")

    if not watertight.is_watertight:
        count = watertight.boundary_edge_count
        result.add_error(f"{name} is not watertight (has holes or open boundaries)")
        result.add_error(f"  Found {_plural(count, 'boundary edge')} (edges with only 1 adjacent face)")

    if components.floater_indices:
        result.add_warning(
            f"{name} has {_plural(len(components.floater_indices), 'small disconnected component')} "
            f"({_plural(components.floater_face_count, 'face')} total)"
        )

    if non_manifold.degenerate_faces:
        count = len(non_manifold.degenerate_faces)
        result.add_stat("degenerate_faces", count)
        result.add_warning(f"{name} has {_plural(count, 'degenerate triangle')} (repeated vertex index)")


def result_to_dict(result: TopologyResult) -> Dict[str, Any]:
    """
    Plain-dict form of a topology result, ready for json.dumps().

    Edge face counts are keyed by "lo-hi" strings since JSON keys must be
    strings; only edges that aren't plain manifold edges are included to
    keep the output readable.
    """
    data: Dict[str, Any] = {
        "mesh": result.mesh_name,
        "valid": result.is_valid,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
        "stats": dict(result.stats),
    }

    if result.non_manifold is not None:
        nm = result.non_manifold
        data["non_manifold"] = {
            "has_non_manifold": nm.has_non_manifold,
            "non_manifold_edge_count": nm.non_manifold_edge_count,
            "non_manifold_edges": list(nm.non_manifold_edges),
            "edge_face_counts": {
                format_edge_key(key): count
                for key, count in nm.edge_face_counts.items()
                if count != 2
            },
            "degenerate_faces": list(nm.degenerate_faces),
        }

    if result.watertight is not None:
        wt = result.watertight
        data["watertight"] = {
            "is_watertight": wt.is_watertight,
            "boundary_edge_count": wt.boundary_edge_count,
            "boundary_edges": list(wt.boundary_edges),
        }

    if result.components is not None:
        comp = result.components
        data["components"] = {
            "component_count": comp.component_count,
            "component_sizes": list(comp.component_sizes),
            "main_component_index": comp.main_component_index,
            "floater_indices": list(comp.floater_indices),
            "floater_face_count": comp.floater_face_count,
        }

    return data


def get_topology_report(result: TopologyResult) -> str:
    """
    Render a topology result as a human-readable text report.

    Args:
        result: Result from analyze_topology()

    Returns:
        Formatted report string
    """
    stats = result.stats
    lines = []
    lines.append(f"=== Topology Report: {result.mesh_name} ===")
    lines.append("")

    lines.append("Basic Statistics:")
    if "vertices" in stats:
        lines.append(f"  Vertices: {stats['vertices']:,}")
    lines.append(f"  Triangles: {stats.get('triangles', 0):,}")
    lines.append(f"  Edges: {stats.get('edges', 0):,}")
    lines.append(f"  Components: {stats.get('components', 0)}")
    lines.append("")

    lines.append("Topology Status:")
    if result.is_valid:
        lines.append("  ✅ VALID - Mesh passed all topology checks")
    else:
        lines.append("  ❌ INVALID - Mesh has topology errors")
    lines.append(f"  Watertight: {'✅ Yes' if stats.get('watertight') else '❌ No'}")
    lines.append(f"  Non-Manifold Edges: {stats.get('non_manifold_edges', 0)}")
    lines.append(f"  Boundary Edges: {stats.get('boundary_edges', 0)}")
    if "degenerate_faces" in stats:
        lines.append(f"  Degenerate Triangles: {stats['degenerate_faces']}")
    lines.append("")

    if result.errors:
        lines.append("Errors:")
        for error in result.errors:
            lines.append(f"  ❌ {error}")
        lines.append("")

    if result.warnings:
        lines.append("Warnings:")
        for warning in result.warnings:
            lines.append(f"  ⚠️ {warning}")
        lines.append("")

    return "\n".join(lines)
