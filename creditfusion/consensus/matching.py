"""
Record Matching.

Responsibilities:
- Cluster raw records from different artifacts that describe the same credit.
- Compare each record against the representative (first member) of every
  existing group, in creation order, and join the first close enough.

Non-Responsibilities:
- No field voting.
- No category handling.

Invariant:
Every titled record lands in exactly one group, and the grouping is
deterministic for a fixed input order.
"""

from dataclasses import dataclass, field
from typing import Iterable, List

from ..normalize import is_empty, normalize_title, token_similarity
from .shapes import RawRecord

SIMILARITY_THRESHOLD = 0.8


@dataclass
class MatchGroup:
    members: List[RawRecord] = field(default_factory=list)
    key: str = ""

    @property
    def representative(self) -> RawRecord:
        return self.members[0]

    def __len__(self) -> int:
        return len(self.members)


def has_title(record: RawRecord) -> bool:
    return not is_empty(record.title)


def group_records(
    records: Iterable[RawRecord],
    threshold: float = SIMILARITY_THRESHOLD,
) -> List[MatchGroup]:
    """
    Greedy single-pass clustering by title token overlap.

    A record joins the first group whose representative title has a Jaccard
    similarity strictly above `threshold`; otherwise it starts a new group.
    Records without a title are dropped.
    """
    groups: List[MatchGroup] = []

    for record in records:
        if not has_title(record):
            continue
        normalized = normalize_title(str(record.title))

        for group in groups:
            if token_similarity(normalized, group.key) > threshold:
                group.members.append(record)
                break
        else:
            groups.append(MatchGroup(members=[record], key=normalized))

    return groups
