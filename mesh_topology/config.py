"""
Configuration dataclass for mesh topology analysis.

This module defines the AnalysisConfig dataclass that holds the knobs for
the edge map builder, the checks built on top of it, and the text report.
Passing one object around keeps the function signatures short and lets us
add options later without touching every caller.
"""

from dataclasses import dataclass
from .constants import (
    DEGENERATE_POLICY,
    DEGENERATE_POLICIES,
    FLOATER_THRESHOLD_PERCENT,
    MAX_LISTED_EDGES,
)


@dataclass
class AnalysisConfig:
    """
    Configuration for topology analysis.

    Attributes:
        degenerate_policy: How to treat triangles with repeated vertex
            indices - "count" (default), "flag" or "reject"
        floater_threshold: Components below this percentage of all faces
            are reported as floaters (0-100)
        max_listed_edges: Maximum number of offending edges spelled out in
            the text report
    """

    degenerate_policy: str = DEGENERATE_POLICY
    floater_threshold: float = FLOATER_THRESHOLD_PERCENT
    max_listed_edges: int = MAX_LISTED_EDGES

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.degenerate_policy not in DEGENERATE_POLICIES:
            raise ValueError(
                f"degenerate_policy must be one of {DEGENERATE_POLICIES}, got {self.degenerate_policy}"
            )
        if not 0 <= self.floater_threshold <= 100:
            raise ValueError(f"floater_threshold must be between 0 and 100, got {self.floater_threshold}")
        if self.max_listed_edges < 0:
            raise ValueError(f"max_listed_edges must be non-negative, got {self.max_listed_edges}")

    @property
    def flag_degenerates(self) -> bool:
        """True when degenerate faces should be surfaced in results."""
        return self.degenerate_policy == "flag"

    @property
    def reject_degenerates(self) -> bool:
        """True when degenerate faces make the buffer invalid."""
        return self.degenerate_policy == "reject"
