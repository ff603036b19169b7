"""Algorithm subpackage: similarity strategies, matching and diffing.

Only the configuration types are re-exported here; import the matcher and
differ from their modules.
"""

from snapshot_diff.algorithm.config import AssignmentMode, DiffConfig, SimilarityStrategy

__all__ = ["AssignmentMode", "DiffConfig", "SimilarityStrategy"]
