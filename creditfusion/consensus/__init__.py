"""
Consensus engine: fuse several extractions of one resume into a single
record with a confidence score per field.
"""

from .builder import (
    ConsensusResult,
    InsufficientDataError,
    build_consensus,
    build_consensus_from_files,
)
from .matching import MatchGroup, group_records
from .resolver import ConsensusRecord, find_consensus_value, resolve_group
from .shapes import (
    ExtractionArtifact,
    RawRecord,
    Shape,
    UnrecognizedSchemaError,
    normalize_artifact,
)

__all__ = [
    "ConsensusRecord",
    "ConsensusResult",
    "ExtractionArtifact",
    "InsufficientDataError",
    "MatchGroup",
    "RawRecord",
    "Shape",
    "UnrecognizedSchemaError",
    "build_consensus",
    "build_consensus_from_files",
    "find_consensus_value",
    "group_records",
    "normalize_artifact",
    "resolve_group",
]
