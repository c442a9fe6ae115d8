"""
Field Consensus Resolution.

Responsibilities:
- Turn one match group into a single consensus credit.
- Majority-vote every tracked field and record the agreement ratio.

Non-Responsibilities:
- No clustering.
- No category or top-level assembly.

Invariant:
A resolved value is always one of the observed values (a synthesized id is
the only exception), and its confidence is majority count / non-empty count.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..ids import consistent_id
from ..normalize import is_empty, vote_key
from .matching import MatchGroup

TRACKED_FIELDS = ("title", "role", "year", "director", "id")
MEDIA_FIELD = "attached_media"


@dataclass
class ConsensusRecord:
    values: Dict[str, Any] = field(default_factory=dict)
    confidence: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.values)


def find_consensus_value(values: Sequence[Any]) -> Tuple[Optional[Any], float]:
    """
    Majority vote over non-empty values.

    Values are counted by their trimmed, lowercased text. Ties go to the key
    seen first. The returned value keeps the original casing of the first
    occurrence of the winning key.

    Returns:
        (value, confidence); (None, 0.0) when there is nothing to vote on
    """
    if not values:
        return None, 0.0

    counts: Dict[str, int] = {}
    for value in values:
        key = vote_key(value)
        counts[key] = counts.get(key, 0) + 1

    # dicts keep insertion order, so a strict > keeps the first-seen key on ties
    majority_key = None
    highest = 0
    for key, count in counts.items():
        if count > highest:
            majority_key = key
            highest = count

    original = next(v for v in values if vote_key(v) == majority_key)
    return original, highest / len(values)


def resolve_group(group: MatchGroup, passthrough: Sequence[str] = ()) -> ConsensusRecord:
    result = ConsensusRecord()
    fields: List[str] = list(TRACKED_FIELDS)
    fields.extend(f for f in passthrough if f not in fields)

    for name in fields:
        observed = [m.get(name) for m in group.members if not is_empty(m.get(name))]
        value, confidence = find_consensus_value(observed)

        if value is not None:
            result.values[name] = value
            result.confidence[name] = confidence
        elif name == "id":
            # Stable serialization of what has been resolved so far
            serialized = json.dumps(result.values, separators=(",", ":"), ensure_ascii=False)
            result.values[name] = consistent_id(serialized)
            result.confidence[name] = 1.0

    result.values[MEDIA_FIELD] = []
    result.confidence[MEDIA_FIELD] = 1.0
    return result
