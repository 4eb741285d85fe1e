"""
Edge map module for mesh topology analysis.

Builds a map from every edge of a triangle mesh to the faces that use it.
Everything else in this package (non-manifold detection, watertightness,
connected components) reads from this one structure, so it's worth getting
right!

The key trick is canonicalization: an edge is stored as (lo, hi) with the
smaller vertex index first. Two neighbouring triangles in a well-formed mesh
walk their shared edge in opposite directions - (3, 7) in one and (7, 3) in
the other - and sorting the endpoints collapses both onto the same key. 🔗

Edge incidence counts tell us everything we need:
- 1 face  -> boundary edge (the surface has a hole here)
- 2 faces -> manifold edge (normal closed surface)
- 3+      -> non-manifold edge (slicers choke on these)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
import logging

import numpy as np

from .config import AnalysisConfig
from .constants import BOUNDARY_FACE_COUNT, MANIFOLD_FACE_COUNT
from .errors import InvalidGeometry

# Set up logging for this module
logger = logging.getLogger(__name__)

EdgeKey = Tuple[int, int]


@dataclass
class EdgeInfo:
    """
    Everything we know about one canonical edge.

    Attributes:
        vertices: Canonical (lo, hi) vertex pair
        face_indices: Index of the incident face for every occurrence of
            the edge (a degenerate face can contribute twice)
        directed: The directed (a, b) pair as it appeared in each face,
            in the same order as face_indices
    """

    vertices: EdgeKey
    face_indices: List[int] = field(default_factory=list)
    directed: List[EdgeKey] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        """Incidence count - how many triangles use this edge."""
        return len(self.face_indices)

    @property
    def is_self_edge(self) -> bool:
        """True for the zero-length edge of a degenerate triangle."""
        return self.vertices[0] == self.vertices[1]

    @property
    def winding_consistent(self) -> bool:
        """
        True when no two faces walk this edge in the same direction.

        Neighbours with consistent (all-CCW or all-CW) winding traverse a
        shared edge in opposite directions, so a repeated directed pair
        means one of them is flipped.
        """
        return len(set(self.directed)) == len(self.directed)


@dataclass
class EdgeMap:
    """
    Edge adjacency index for one triangle buffer.

    Attributes:
        edges: Canonical edge -> EdgeInfo, one entry per distinct edge
        triangle_count: Number of triangles the map was built from
        degenerate_faces: Indices of faces that repeat a vertex index
    """

    edges: Dict[EdgeKey, EdgeInfo] = field(default_factory=dict)
    triangle_count: int = 0
    degenerate_faces: Tuple[int, ...] = ()

    @property
    def edge_count(self) -> int:
        """Total number of distinct edges."""
        return len(self.edges)

    def __iter__(self) -> Iterator[EdgeInfo]:
        return iter(self.edges.values())

    def __len__(self) -> int:
        return len(self.edges)

    def face_counts(self) -> Dict[EdgeKey, int]:
        """Incidence count for every edge, keyed by canonical pair."""
        return {key: info.face_count for key, info in self.edges.items()}

    def edges_with_face_count(self, count: int) -> List[EdgeInfo]:
        """All edges used by exactly `count` faces."""
        return [info for info in self.edges.values() if info.face_count == count]

    def boundary_edges(self) -> List[EdgeInfo]:
        """Edges with a single adjacent face (holes / open borders)."""
        return self.edges_with_face_count(BOUNDARY_FACE_COUNT)

    def manifold_edges(self) -> List[EdgeInfo]:
        """Edges shared by exactly two faces."""
        return self.edges_with_face_count(MANIFOLD_FACE_COUNT)

    def non_manifold_edges(self) -> List[EdgeInfo]:
        """Edges shared by three or more faces."""
        return [info for info in self.edges.values() if info.face_count > MANIFOLD_FACE_COUNT]

    def __repr__(self) -> str:
        return f"EdgeMap(edges={self.edge_count}, triangles={self.triangle_count})"


def create_edge_key(v1: int, v2: int) -> EdgeKey:
    """Canonical key for an undirected edge: smaller index first."""
    return (v1, v2) if v1 <= v2 else (v2, v1)


def format_edge_key(key: EdgeKey) -> str:
    """String form of an edge key, e.g. (3, 7) -> "3-7" (used for JSON)."""
    return f"{key[0]}-{key[1]}"


def parse_edge_key(key: str) -> EdgeKey:
    """
    Parse a "lo-hi" string back into a canonical edge key.

    Raises:
        ValueError: If the string isn't two non-negative integers joined by "-"
    """
    parts = key.split('-')
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Edge key must look like 'lo-hi', got {key!r}")
    return create_edge_key(int(parts[0]), int(parts[1]))


def as_index_array(indices: Any) -> np.ndarray:
    """
    Validate a triangle index buffer and return it as a flat numpy array.

    Accepts lists, tuples, and numpy arrays. A 2D (T, 3) array - the layout
    trimesh uses for faces - is flattened row by row. The empty buffer is a
    legal zero-triangle input.

    Args:
        indices: Flat sequence of vertex indices, 3 per triangle

    Returns:
        1D integer numpy array (length is a multiple of 3)

    Raises:
        InvalidGeometry: If the buffer is not flat, not integer, has a
            negative index, or its length isn't a multiple of 3
    """
    try:
        arr = np.asarray(indices)
    except (TypeError, ValueError) as e:
        raise InvalidGeometry(f"index buffer could not be read as an array: {e}") from e

    if arr.ndim == 2 and arr.shape[1] == 3:
        arr = arr.reshape(-1)
    elif arr.ndim != 1:
        raise InvalidGeometry(f"index buffer must be one-dimensional, got shape {arr.shape}", arr.size)

    if arr.size == 0:
        # np.asarray([]) is float64 - there's nothing to check, just normalize
        return np.zeros(0, dtype=np.int64)

    if arr.dtype.kind not in 'iu':
        raise InvalidGeometry(f"index buffer must hold integers, got dtype {arr.dtype}", arr.size)

    if arr.size % 3 != 0:
        raise InvalidGeometry("index buffer length must be a multiple of 3", arr.size)

    if arr.dtype.kind == 'i' and (arr < 0).any():
        first_bad = int(np.flatnonzero(arr < 0)[0])
        raise InvalidGeometry(
            f"vertex indices must be non-negative, found {int(arr[first_bad])} at position {first_bad}",
            arr.size
        )

    return arr


def _find_degenerate_faces(triangles: np.ndarray) -> np.ndarray:
    """Indices of rows that repeat a vertex index."""
    mask = (
        (triangles[:, 0] == triangles[:, 1])
        | (triangles[:, 1] == triangles[:, 2])
        | (triangles[:, 2] == triangles[:, 0])
    )
    return np.flatnonzero(mask)


def _accumulate(triangles: np.ndarray, config: AnalysisConfig, first_face: int = 0) -> EdgeMap:
    """
    Build an edge map from a (T, 3) triangle array.

    Face indices in the returned map are local (0..T-1); first_face only
    shifts the face numbers quoted in error messages.
    """
    degenerate = _find_degenerate_faces(triangles)
    if config.reject_degenerates and degenerate.size:
        face = int(degenerate[0])
        raise InvalidGeometry(
            f"triangle {first_face + face} is degenerate {tuple(triangles[face].tolist())}"
        )

    # Directed edges (a,b), (b,c), (c,a) for every triangle -> shape (T, 3, 2)
    directed = np.stack([triangles, np.roll(triangles, -1, axis=1)], axis=2)
    canonical = np.sort(directed, axis=2)

    edges: Dict[EdgeKey, EdgeInfo] = {}
    for face_index, (face_edges, face_directed) in enumerate(zip(canonical.tolist(), directed.tolist())):
        for (lo, hi), (a, b) in zip(face_edges, face_directed):
            key = (lo, hi)
            info = edges.get(key)
            if info is None:
                info = EdgeInfo(vertices=key)
                edges[key] = info
            info.face_indices.append(face_index)
            info.directed.append((a, b))

    return EdgeMap(
        edges=edges,
        triangle_count=len(triangles),
        degenerate_faces=tuple(degenerate.tolist())
    )


def build_edge_map(indices: Sequence[int], config: Optional[AnalysisConfig] = None) -> EdgeMap:
    """
    Build an edge map from a triangle index buffer.

    For each triangle (a, b, c) we take its three edges (a,b), (b,c), (c,a),
    sort the endpoints of each, and record which face used it. Degenerate
    triangles are counted like any other unless the config says to reject
    them - a triangle (4, 4, 9) contributes the self-edge (4, 4) and the
    edge (4, 9) twice.

    Runs in O(T) with a dict keyed by (lo, hi) tuples, so memory depends on
    the number of edges, never on how large the vertex indices are.

    Args:
        indices: Flat triangle index buffer (length must be a multiple of 3)
        config: Optional analysis config (degenerate policy)

    Returns:
        EdgeMap with every edge and its incident faces

    Raises:
        InvalidGeometry: If the buffer is malformed (see as_index_array), or
            contains a degenerate triangle under the "reject" policy
    """
    config = config or AnalysisConfig()
    arr = as_index_array(indices)
    edge_map = _accumulate(arr.reshape(-1, 3), config)

    logger.debug(f"Built edge map: {edge_map.edge_count} edges from {edge_map.triangle_count} triangles")
    if config.flag_degenerates and edge_map.degenerate_faces:
        logger.warning(f"Found {len(edge_map.degenerate_faces)} degenerate triangles")

    return edge_map


def merge_edge_maps(*edge_maps: EdgeMap) -> EdgeMap:
    """
    Merge edge maps built from consecutive slices of one index buffer.

    Face indices of each map are shifted by the triangle counts of the maps
    before it, so merging the maps of [0:k] and [k:n] gives the same result
    as building the map of [0:n] directly. Merging is associative, and the
    incidence counts don't depend on the order at all.
    """
    merged: Dict[EdgeKey, EdgeInfo] = {}
    degenerate: List[int] = []
    offset = 0

    for edge_map in edge_maps:
        for key, info in edge_map.edges.items():
            target = merged.get(key)
            if target is None:
                target = EdgeInfo(vertices=key)
                merged[key] = target
            target.face_indices.extend(face + offset for face in info.face_indices)
            target.directed.extend(info.directed)
        degenerate.extend(face + offset for face in edge_map.degenerate_faces)
        offset += edge_map.triangle_count

    return EdgeMap(edges=merged, triangle_count=offset, degenerate_faces=tuple(degenerate))


def build_edge_map_chunked(
    indices: Sequence[int],
    chunk_triangles: int,
    config: Optional[AnalysisConfig] = None
) -> EdgeMap:
    """
    Build an edge map in slices of `chunk_triangles` triangles.

    Produces the same edge map as build_edge_map(); useful for very large
    buffers where the per-slice numpy temporaries should stay small.

    Raises:
        ValueError: If chunk_triangles is not positive
        InvalidGeometry: Same conditions as build_edge_map()
    """
    if chunk_triangles <= 0:
        raise ValueError(f"chunk_triangles must be positive, got {chunk_triangles}")

    config = config or AnalysisConfig()
    triangles = as_index_array(indices).reshape(-1, 3)

    chunks = [
        _accumulate(triangles[start:start + chunk_triangles], config, first_face=start)
        for start in range(0, len(triangles), chunk_triangles)
    ]
    edge_map = merge_edge_maps(*chunks)

    logger.debug(
        f"Built edge map in {len(chunks)} chunks: {edge_map.edge_count} edges "
        f"from {edge_map.triangle_count} triangles"
    )
    if config.flag_degenerates and edge_map.degenerate_faces:
        logger.warning(f"Found {len(edge_map.degenerate_faces)} degenerate triangles")

    return edge_map
