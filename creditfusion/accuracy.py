"""
Accuracy scoring for a single extraction artifact.

Grades one artifact on its own terms, without any consensus baseline:
- Structural validity: share of credits that pass the credit schema
- Completeness: share of optional credit fields that are filled in
- Category assignment: share of credits tagged with a recognizable category
- Overall: weighted combination of the three (equal weights by default)

All scores are integer percentages 0-100. Scoring never raises; an artifact
of unknown shape scores zero everywhere.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .consensus.shapes import Shape, UnrecognizedSchemaError, category_name, detect_shape
from .schema import (
    EXPECTED_FIELDS,
    EXTRA_FLAT_FIELDS,
    is_filled,
    is_official_category,
    missing_required_fields,
    validate_credit,
)


@dataclass
class ScoreWeights:
    structural_validity: float = 1 / 3
    category_assignment: float = 1 / 3
    completeness: float = 1 / 3

    def __post_init__(self):
        total = self.structural_validity + self.category_assignment + self.completeness
        if total <= 0:
            raise ValueError("Score weights must sum to a positive value")


@dataclass
class AccuracyResult:
    overall: int = 0
    category_assignment: int = 0
    completeness: int = 0
    structural_validity: int = 0
    missing_fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "categoryAssignment": self.category_assignment,
            "completeness": self.completeness,
            "structuralValidity": self.structural_validity,
            "missingFields": list(self.missing_fields),
        }


def _percent(part: float, whole: float) -> int:
    if whole <= 0:
        return 0
    return round(part / whole * 100)


def _scored_credits(data: Dict[str, Any], shape: Shape) -> List[Tuple[Any, Optional[str]]]:
    """
    Every raw credit entry with its category tag, malformed ones included.

    Non-object credits are kept so they count against structure. Credits under
    a category entry without a usable name are kept with no tag.
    """
    if shape == Shape.FLAT:
        return [(credit, None) for credit in data["credits"]]

    scored: List[Tuple[Any, Optional[str]]] = []
    for entry in data["resume"]:
        if not isinstance(entry, dict):
            continue
        credits = entry.get("credits")
        if not isinstance(credits, list):
            continue
        name = category_name(entry)
        scored.extend((credit, name) for credit in credits)
    return scored


def _field(credit: Any, name: str) -> Any:
    return credit.get(name) if isinstance(credit, dict) else None


def score_artifact(data: Any, weights: Optional[ScoreWeights] = None) -> AccuracyResult:
    weights = weights or ScoreWeights()
    try:
        shape = detect_shape(data)
    except UnrecognizedSchemaError:
        return AccuracyResult()

    credits = _scored_credits(data, shape)
    result = AccuracyResult()
    if not credits:
        return result

    if shape == Shape.HIERARCHICAL:
        valid = sum(1 for credit, tag in credits if tag is not None and not validate_credit(credit))
    else:
        valid = sum(1 for credit, _ in credits if not validate_credit(credit))
    result.structural_validity = _percent(valid, len(credits))

    missing: List[str] = []
    for credit, _ in credits:
        for name in missing_required_fields(credit):
            if name not in missing:
                missing.append(name)
    result.missing_fields = missing

    expected = list(EXPECTED_FIELDS)
    if shape == Shape.FLAT:
        expected.append("type")
    total = 0
    filled = 0
    for credit, _ in credits:
        for name in expected:
            total += 1
            if is_filled(_field(credit, name)):
                filled += 1
        if shape == Shape.FLAT:
            extras = sum(1 for name in EXTRA_FLAT_FIELDS if is_filled(_field(credit, name)))
            total += extras
            filled += extras
    result.completeness = _percent(filled, total)

    if shape == Shape.HIERARCHICAL:
        tagged = sum(1 for _, tag in credits if is_official_category(tag))
    else:
        tagged = sum(1 for credit, _ in credits if is_official_category(_field(credit, "type")))
    result.category_assignment = _percent(tagged, len(credits))

    weight_total = weights.structural_validity + weights.category_assignment + weights.completeness
    result.overall = round(
        (
            result.structural_validity * weights.structural_validity
            + result.category_assignment * weights.category_assignment
            + result.completeness * weights.completeness
        )
        / weight_total
    )
    return result
