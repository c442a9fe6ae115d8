"""
Category Aggregation.

Responsibilities:
- Re-group resolved credits under their category names (hierarchical
  inputs) or emit one credits list (flat inputs).
- Vote top-level flags across artifacts.
- Build the dotted/bracketed confidence map paths.

Non-Responsibilities:
- No title matching.
- No per-field voting.

Invariant:
A category appears in the output only if it resolves at least one credit,
and its id depends on its name alone.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..ids import consistent_id
from ..logger import get_logger
from .matching import SIMILARITY_THRESHOLD, group_records
from .resolver import ConsensusRecord, resolve_group
from .shapes import ExtractionArtifact, RawRecord, Shape, passthrough_fields

SHOW_YEARS_FIELD = "resume_show_years"


@dataclass
class CategoryConsensus:
    name: str
    id: str
    credits: List[ConsensusRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "category": self.name,
            "category_id": self.id,
            "credits": [c.to_dict() for c in self.credits],
        }


def dominant_shape(artifacts: Sequence[ExtractionArtifact]) -> Shape:
    """Shape shared by most artifacts; a tie goes to the hierarchical shape."""
    counts = Counter(a.shape for a in artifacts)
    if counts[Shape.FLAT] > counts[Shape.HIERARCHICAL]:
        return Shape.FLAT
    return Shape.HIERARCHICAL


def resolve_records(
    records: Sequence[RawRecord],
    shape: Shape,
    threshold: float = SIMILARITY_THRESHOLD,
) -> List[ConsensusRecord]:
    groups = group_records(records, threshold=threshold)
    get_logger().record_matching(records=sum(len(g) for g in groups), groups=len(groups))
    passthrough = passthrough_fields(shape)
    return [resolve_group(g, passthrough=passthrough) for g in groups]


def _credit_paths(prefix: str, credits: Sequence[ConsensusRecord]) -> Dict[str, float]:
    paths: Dict[str, float] = {}
    for index, credit in enumerate(credits):
        for name, value in credit.confidence.items():
            paths[f"{prefix}credits[{index}].{name}"] = value
    return paths


def union_categories(artifacts: Sequence[ExtractionArtifact]) -> List[str]:
    names: List[str] = []
    for artifact in artifacts:
        for name in artifact.categories:
            if name not in names:
                names.append(name)
    return names


def aggregate_categories(
    artifacts: Sequence[ExtractionArtifact],
    threshold: float = SIMILARITY_THRESHOLD,
) -> Tuple[List[CategoryConsensus], Dict[str, float]]:
    logger = get_logger()
    categories: List[CategoryConsensus] = []
    confidence: Dict[str, float] = {}

    for name in union_categories(artifacts):
        tagged = [
            record
            for artifact in artifacts
            for record in artifact.records
            if record.category == name
        ]
        credits = resolve_records(tagged, Shape.HIERARCHICAL, threshold=threshold)
        if not credits:
            logger.debug("Dropping empty category", category=name)
            continue

        categories.append(CategoryConsensus(name=name, id=consistent_id(name), credits=credits))
        confidence[f"{name}.category_id"] = 1.0
        confidence.update(_credit_paths(f"{name}.", credits))

    return categories, confidence


def aggregate_flat(
    artifacts: Sequence[ExtractionArtifact],
    threshold: float = SIMILARITY_THRESHOLD,
) -> Tuple[List[ConsensusRecord], Dict[str, float]]:
    records = [record for artifact in artifacts for record in artifact.records]
    credits = resolve_records(records, Shape.FLAT, threshold=threshold)
    return credits, _credit_paths("", credits)


def vote_show_years(artifacts: Sequence[ExtractionArtifact]) -> Tuple[Optional[bool], float]:
    """
    Majority vote on the display-years flag.

    Only artifacts that supplied a boolean vote. An exact tie resolves to True.
    Returns (None, 0.0) when no artifact voted.
    """
    votes = [a.show_years for a in artifacts if a.show_years is not None]
    if not votes:
        return None, 0.0

    true_count = sum(1 for v in votes if v)
    false_count = len(votes) - true_count
    return true_count >= false_count, max(true_count, false_count) / len(votes)
