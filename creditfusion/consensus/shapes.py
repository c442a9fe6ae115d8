"""
Shape Normalizer.

Responsibilities:
- Decide once, at load time, whether an artifact is hierarchical
  (named categories of credits) or flat (a single credits list).
- Expose every artifact as a flat list of raw records, each with an
  optional category tag.

Non-Responsibilities:
- No file access.
- No matching or voting.

Invariant:
An artifact is exactly one shape, or it is rejected.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class UnrecognizedSchemaError(ValueError):
    """Raised when an artifact matches neither the hierarchical nor the flat shape."""
    pass


class Shape(str, Enum):
    HIERARCHICAL = "hierarchical"
    FLAT = "flat"


FLAT_PASSTHROUGH_FIELDS = ("type",)


@dataclass
class RawRecord:
    fields: Dict[str, Any]
    category: Optional[str] = None
    source: Optional[str] = None

    @property
    def title(self) -> Any:
        return self.fields.get("title")

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


@dataclass
class ExtractionArtifact:
    shape: Shape
    records: List[RawRecord] = field(default_factory=list)
    categories: List[str] = field(default_factory=list)
    show_years: Optional[bool] = None
    source: Optional[str] = None


def passthrough_fields(shape: Shape) -> Tuple[str, ...]:
    """Fields voted on in addition to the common credit fields."""
    if shape == Shape.FLAT:
        return FLAT_PASSTHROUGH_FIELDS
    return ()


def category_name(entry: Dict[str, Any]) -> Optional[str]:
    """Category entry label: `category`, else `name`; None when neither is a usable string."""
    name = entry.get("category")
    if name is None:
        name = entry.get("name")
    if isinstance(name, str) and name.strip():
        return name
    return None


def detect_shape(data: Any) -> Shape:
    if not isinstance(data, dict):
        raise UnrecognizedSchemaError("Artifact must be a JSON object")

    has_resume = isinstance(data.get("resume"), list)
    has_credits = isinstance(data.get("credits"), list)

    if has_resume and has_credits:
        raise UnrecognizedSchemaError("Artifact has both 'resume' and 'credits' arrays")
    if has_resume:
        return Shape.HIERARCHICAL
    if has_credits:
        return Shape.FLAT
    raise UnrecognizedSchemaError("Artifact has neither a 'resume' nor a 'credits' array")


def normalize_artifact(data: Any, source: Optional[str] = None) -> ExtractionArtifact:
    """
    Classify a parsed artifact and flatten its credits.

    Args:
        data: Parsed JSON value of one extraction run
        source: Optional label (file name, provider) carried on every record

    Returns:
        ExtractionArtifact with records in input order

    Raises:
        UnrecognizedSchemaError: if the artifact is neither shape
    """
    shape = detect_shape(data)

    if shape == Shape.FLAT:
        records = [
            RawRecord(fields=dict(credit), source=source)
            for credit in data["credits"]
            if isinstance(credit, dict)
        ]
        return ExtractionArtifact(shape=shape, records=records, source=source)

    records: List[RawRecord] = []
    categories: List[str] = []
    for entry in data["resume"]:
        if not isinstance(entry, dict):
            continue
        name = category_name(entry)
        if name is None:
            continue
        if name not in categories:
            categories.append(name)
        credits = entry.get("credits")
        if not isinstance(credits, list):
            continue
        for credit in credits:
            if isinstance(credit, dict):
                records.append(RawRecord(fields=dict(credit), category=name, source=source))

    show_years = data.get("resume_show_years")
    if not isinstance(show_years, bool):
        show_years = None

    return ExtractionArtifact(
        shape=shape,
        records=records,
        categories=categories,
        show_years=show_years,
        source=source,
    )
