"""
Confidence Aggregation.

Responsibilities:
- Roll the per-field confidence map into one overall score.

Invariant:
Fixed 1.0 entries (category ids, attached media, synthesized ids) are part
of the mean. An empty map scores 0.
"""

import re
from typing import Dict

_LEAF = re.compile(r"([^.\]]+)$")


def overall_confidence(fields: Dict[str, float]) -> float:
    if not fields:
        return 0.0
    return sum(fields.values()) / len(fields)


def leaf_name(path: str) -> str:
    """Last path component: 'Film.credits[2].role' -> 'role'."""
    match = _LEAF.search(path)
    return match.group(1) if match else path


def rollup(fields: Dict[str, float]) -> Dict[str, float]:
    """Mean confidence per leaf field name, in first-seen order."""
    totals: Dict[str, float] = {}
    counts: Dict[str, int] = {}
    for path, value in fields.items():
        name = leaf_name(path)
        totals[name] = totals.get(name, 0.0) + value
        counts[name] = counts.get(name, 0) + 1
    return {name: totals[name] / counts[name] for name in totals}
