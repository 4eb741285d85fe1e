"""
Connected component detection for triangle meshes.

Two faces belong to the same component when they share an edge. A model
that's supposed to be one solid but falls apart into several pieces usually
has "floaters" - tiny disconnected bits left over from modelling or a bad
export. Those print as loose spaghetti, so we want to find them.

Same idea as the paint bucket tool: start at one face and flood outward
across shared edges until there's nowhere left to go. 🪣
"""

from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging
import math

import numpy as np

from .config import AnalysisConfig
from .constants import FLOATER_THRESHOLD_PERCENT
from .edge_map import EdgeMap, build_edge_map

# Set up logging for this module
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComponentsResult:
    """
    Result of connected component detection.

    Attributes:
        component_count: Total number of connected components
        component_id_per_face: Component ID for each face (0-indexed,
            contiguous, numbered in order of each component's first face)
        component_sizes: Number of faces in each component
        main_component_index: Index of the largest component (-1 if empty)
        floater_indices: Components (other than the main one) smaller than
            the floater threshold
        floater_face_count: Total face count of all floaters
    """

    component_count: int
    component_id_per_face: np.ndarray
    component_sizes: List[int]
    main_component_index: int
    floater_indices: List[int]
    floater_face_count: int


def _face_neighbors(edge_map: EdgeMap) -> List[List[int]]:
    """
    Adjacency list of faces that share at least one edge.

    Faces on one edge are linked in a star around the first one, which is
    enough for connectivity without building every pair on non-manifold fans.
    """
    neighbors: List[List[int]] = [[] for _ in range(edge_map.triangle_count)]
    for info in edge_map:
        faces = info.face_indices
        first = faces[0]
        for other in faces[1:]:
            if other != first:
                neighbors[first].append(other)
                neighbors[other].append(first)
    return neighbors


def find_connected_components(
    edge_map: EdgeMap,
    floater_threshold: float = FLOATER_THRESHOLD_PERCENT
) -> ComponentsResult:
    """
    Find connected components of the faces in an edge map.

    Args:
        edge_map: Pre-computed edge map from build_edge_map()
        floater_threshold: Components below this percentage of all faces
            (other than the largest) count as floaters (0-100)

    Returns:
        ComponentsResult with the component of every face
    """
    face_count = edge_map.triangle_count
    if face_count == 0:
        return ComponentsResult(
            component_count=0,
            component_id_per_face=np.zeros(0, dtype=np.uint32),
            component_sizes=[],
            main_component_index=-1,
            floater_indices=[],
            floater_face_count=0
        )

    neighbors = _face_neighbors(edge_map)
    component_id_per_face = np.zeros(face_count, dtype=np.uint32)
    visited = [False] * face_count
    component_sizes: List[int] = []

    for start in range(face_count):
        if visited[start]:
            continue

        component_id = len(component_sizes)
        size = 0

        # Iterative BFS - a big mesh would blow through the recursion limit
        queue = deque([start])
        visited[start] = True
        while queue:
            face = queue.popleft()
            component_id_per_face[face] = component_id
            size += 1
            for other in neighbors[face]:
                if not visited[other]:
                    visited[other] = True
                    queue.append(other)

        component_sizes.append(size)

    # Largest component wins; ties go to the one found first
    main_component_index = max(range(len(component_sizes)), key=lambda i: (component_sizes[i], -i))

    threshold_faces = math.ceil((floater_threshold / 100) * face_count)
    floater_indices = [
        i for i, size in enumerate(component_sizes)
        if i != main_component_index and size < threshold_faces
    ]
    floater_face_count = sum(component_sizes[i] for i in floater_indices)

    logger.debug(
        f"Found {len(component_sizes)} components ({len(floater_indices)} floaters) "
        f"in {face_count} faces"
    )

    return ComponentsResult(
        component_count=len(component_sizes),
        component_id_per_face=component_id_per_face,
        component_sizes=component_sizes,
        main_component_index=main_component_index,
        floater_indices=floater_indices,
        floater_face_count=floater_face_count
    )


def find_connected_components_from_indices(
    indices: Sequence[int],
    floater_threshold: Optional[float] = None,
    config: Optional[AnalysisConfig] = None
) -> ComponentsResult:
    """
    Build the edge map and find connected components in one call.

    The threshold defaults to the config's floater_threshold.
    """
    config = config or AnalysisConfig()
    if floater_threshold is None:
        floater_threshold = config.floater_threshold
    return find_connected_components(build_edge_map(indices, config), floater_threshold)


def get_faces_in_component(component_id_per_face: np.ndarray, component_id: int) -> List[int]:
    """Face indices belonging to one component."""
    return np.flatnonzero(np.asarray(component_id_per_face) == component_id).tolist()
