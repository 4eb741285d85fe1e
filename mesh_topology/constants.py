"""
Configuration constants for mesh topology analysis.

All the tunable defaults live here. Change a value once and every check,
report and CLI run picks it up.
"""

__version__ = "0.1.0"

# ============================================================================
# Edge Classification
# ============================================================================

# Incidence counts that define each edge category.
# An edge used by a single triangle is a boundary (the surface is open there),
# an edge used by exactly two triangles is the normal closed-surface case,
# and anything above that is non-manifold.
BOUNDARY_FACE_COUNT = 1
MANIFOLD_FACE_COUNT = 2

# ============================================================================
# Degenerate Triangles
# ============================================================================

# What to do with triangles that reference the same vertex more than once:
# - "count":  count their edges like any other (self-edges included)
# - "flag":   count them, and also list the offending faces in the results
# - "reject": refuse the whole buffer with InvalidGeometry
DEGENERATE_POLICY = "count"
DEGENERATE_POLICIES = ("count", "flag", "reject")

# ============================================================================
# Connected Components
# ============================================================================

# Components smaller than this percentage of all faces (other than the
# largest one) are reported as floaters - little bits of loose geometry
# that usually print as spaghetti.
FLOATER_THRESHOLD_PERCENT = 5.0

# ============================================================================
# Reporting
# ============================================================================

# How many offending edges to spell out in the text report before
# summarising the rest as "... and N more".
MAX_LISTED_EDGES = 10

# Fields whose number arrays are kept on one line in JSON output
COMPACT_JSON_FIELDS = ["non_manifold_edges", "boundary_edges", "degenerate_faces", "component_sizes"]

# ============================================================================
# Mesh Files
# ============================================================================

# Formats trimesh can load that are useful for print checks
SUPPORTED_MESH_EXTENSIONS = {'.stl', '.obj', '.ply', '.off', '.3mf', '.glb', '.gltf'}
