"""
Accuracy of one extraction measured against a stored consensus baseline.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .normalize import normalize_text, token_similarity

MATCH_THRESHOLD = 0.6
DEFAULT_FIELD_CONFIDENCE = 0.5
MAX_MISSING_FIELDS = 10
# Rough field count charged for a credit or category missing entirely
FIELDS_PER_CREDIT = 4

HIERARCHICAL_FIELDS = ["title", "role", "year", "director"]
FLAT_FIELDS = ["title", "role", "year", "director", "type"]


@dataclass
class BaselineAccuracyResult:
    overall: int = 0
    field_accuracy: int = 0
    structural_fidelity: int = 0
    completeness: int = 0
    missing_fields: List[str] = field(default_factory=list)
    consensus_source: str = "none"
    consensus_strength: float = 0.0
    compared_fields: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "fieldAccuracy": self.field_accuracy,
            "structuralFidelity": self.structural_fidelity,
            "completeness": self.completeness,
            "missingFields": list(self.missing_fields),
            "metadata": {
                "consensusSource": self.consensus_source,
                "consensusStrength": self.consensus_strength,
                "comparedFields": self.compared_fields,
            },
        }


def string_similarity(a: Any, b: Any) -> float:
    if not a or not b:
        return 0.0
    norm_a = normalize_text(str(a))
    norm_b = normalize_text(str(b))
    if norm_a == norm_b:
        return 1.0
    return token_similarity(norm_a, norm_b)


def field_similarity(a: Any, b: Any) -> float:
    if a == b:
        return 1.0
    if isinstance(a, str) and isinstance(b, str):
        return string_similarity(a, b)
    return 0.0


def find_matching_credit(credit: Dict[str, Any], candidates: Any) -> Optional[Dict[str, Any]]:
    """Exact title first, else the best title similarity above the match threshold."""
    if not isinstance(candidates, list):
        return None
    candidates = [c for c in candidates if isinstance(c, dict)]

    for candidate in candidates:
        if candidate.get("title") == credit.get("title"):
            return candidate

    best = None
    best_similarity = 0.0
    for candidate in candidates:
        if not candidate.get("title") or not credit.get("title"):
            continue
        similarity = string_similarity(candidate["title"], credit["title"])
        if similarity > best_similarity and similarity > MATCH_THRESHOLD:
            best = candidate
            best_similarity = similarity
    return best


def _count_ratio(a: int, b: int) -> float:
    if max(a, b) == 0:
        return 1.0
    return min(a, b) / max(a, b)


def _categories(tree: Dict[str, Any]) -> List[Dict[str, Any]]:
    return [c for c in tree.get("resume", []) if isinstance(c, dict)]


def _credits(entry: Dict[str, Any]) -> List[Any]:
    credits = entry.get("credits")
    return credits if isinstance(credits, list) else []


def structural_fidelity(data: Dict[str, Any], consensus: Dict[str, Any]) -> int:
    if isinstance(data.get("resume"), list) and isinstance(consensus.get("resume"), list):
        expected = [c.get("category") for c in _categories(consensus)]
        present = {c.get("category") for c in _categories(data)}
        expected_set = set(expected)
        category_score = len(expected_set & present) / len(expected_set) * 100 if expected_set else 0

        ratios = []
        for category in _categories(consensus):
            mine = next((c for c in _categories(data) if c.get("category") == category.get("category")), None)
            if mine is not None:
                ratios.append(_count_ratio(len(_credits(mine)), len(_credits(category))) * 100)
        credit_score = sum(ratios) / len(ratios) if ratios else 0

        return round(category_score * 0.6 + credit_score * 0.4)

    if isinstance(data.get("credits"), list) and isinstance(consensus.get("credits"), list):
        return round(_count_ratio(len(data["credits"]), len(consensus["credits"])) * 100)

    return 0


class _FieldTally:
    def __init__(self):
        self.compared = 0
        self.matched = 0.0
        self.expected = 0
        self.present = 0
        self.missing: List[str] = []

    def missing_credit(self, label: str):
        self.missing.append(label)
        self.expected += FIELDS_PER_CREDIT

    def compare(self, reference: Dict[str, Any], candidate: Dict[str, Any], fields: List[str], confidence_prefix: str, confidence: Dict[str, float]):
        for name in fields:
            self.expected += 1
            if not candidate.get(name):
                self.missing.append(f"{name} in {reference.get('title')}")
                continue
            self.present += 1
            self.compared += 1
            weight = confidence.get(f"{confidence_prefix}{name}", DEFAULT_FIELD_CONFIDENCE)
            self.matched += field_similarity(reference.get(name), candidate[name]) * weight


def field_accuracy(
    data: Dict[str, Any],
    consensus: Dict[str, Any],
    confidence: Dict[str, float],
) -> Tuple[int, int, List[str], int]:
    """
    Returns:
        (accuracy, completeness, missing field labels, compared field count)
    """
    tally = _FieldTally()

    if isinstance(data.get("resume"), list) and isinstance(consensus.get("resume"), list):
        for category in _categories(consensus):
            name = category.get("category")
            mine = next((c for c in _categories(data) if c.get("category") == name), None)
            if mine is None:
                tally.missing.append(f"Category: {name}")
                tally.expected += len(_credits(category)) * FIELDS_PER_CREDIT
                continue
            for index, credit in enumerate(_credits(category)):
                match = find_matching_credit(credit, _credits(mine))
                if match is None:
                    tally.missing_credit(f"Credit: {credit.get('title')} in {name}")
                    continue
                tally.compare(credit, match, HIERARCHICAL_FIELDS, f"{name}.credits[{index}].", confidence)

    elif isinstance(data.get("credits"), list) and isinstance(consensus.get("credits"), list):
        for index, credit in enumerate(consensus["credits"]):
            match = find_matching_credit(credit, data["credits"])
            if match is None:
                tally.missing_credit(f"Credit: {credit.get('title')}")
                continue
            tally.compare(credit, match, FLAT_FIELDS, f"credits[{index}].", confidence)

    accuracy = round(tally.matched / tally.compared * 100) if tally.compared else 0
    completeness = round(tally.present / tally.expected * 100) if tally.expected else 0

    unique: List[str] = []
    for label in tally.missing:
        if label not in unique:
            unique.append(label)
    return accuracy, completeness, unique[:MAX_MISSING_FIELDS], tally.compared


def score_against_baseline(data: Any, baseline: Optional[Dict[str, Any]]) -> BaselineAccuracyResult:
    """
    Grade an extraction against a stored consensus baseline.

    Args:
        data: Parsed extraction artifact
        baseline: Record from baselines.load_baseline (or None)

    Returns:
        BaselineAccuracyResult; all zeros when there is no baseline
    """
    result = BaselineAccuracyResult()
    if not baseline or not isinstance(data, dict):
        return result

    consensus = baseline.get("consensus") or {}
    confidence = baseline.get("confidence") or {}

    same_shape = (
        isinstance(data.get("resume"), list) and isinstance(consensus.get("resume"), list)
    ) or (
        isinstance(data.get("credits"), list) and isinstance(consensus.get("credits"), list)
    )
    if not same_shape:
        # Partial credit for having some structure
        result.structural_fidelity = 30
        result.overall = 30
        return result

    result.structural_fidelity = structural_fidelity(data, consensus)
    accuracy, completeness, missing, compared = field_accuracy(
        data, consensus, confidence.get("fields", {})
    )
    result.field_accuracy = accuracy
    result.completeness = completeness
    result.missing_fields = missing
    result.compared_fields = compared
    result.overall = round(
        result.structural_fidelity * 0.3 + result.field_accuracy * 0.4 + result.completeness * 0.3
    )
    result.consensus_source = baseline.get("document", "none")
    result.consensus_strength = confidence.get("overall", 0.0)
    return result
