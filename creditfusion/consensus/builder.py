"""
Consensus Builder.

Responsibilities:
- Accept already-parsed artifacts (or paths it reads first), drop the ones
  that fail to load or match no known shape, and run the fusion pipeline.
- Assemble the resolved tree, the confidence map and run metadata.

Non-Responsibilities:
- No extraction, provider calls or report rendering.
- No environment access.

Invariant:
providerCount equals the number of artifacts that actually contributed.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from ..logger import get_logger
from ..storage import load_artifact
from .aggregate import (
    SHOW_YEARS_FIELD,
    aggregate_categories,
    aggregate_flat,
    dominant_shape,
    vote_show_years,
)
from .confidence import overall_confidence
from .matching import SIMILARITY_THRESHOLD
from .shapes import ExtractionArtifact, Shape, UnrecognizedSchemaError, normalize_artifact


class InsufficientDataError(ValueError):
    """Raised when no artifact survives loading and shape validation."""
    pass


@dataclass
class ConsensusResult:
    consensus: Dict[str, Any]
    fields: Dict[str, float]
    overall: float
    provider_count: int
    generated_at: str
    sources: List[str] = field(default_factory=list)

    @property
    def shape(self) -> Shape:
        return Shape.HIERARCHICAL if "resume" in self.consensus else Shape.FLAT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "consensus": self.consensus,
            "confidence": {
                "overall": self.overall,
                "fields": dict(self.fields),
            },
            "metadata": {
                "providerCount": self.provider_count,
                "consensusStrength": round(self.overall, 2),
                "generatedAt": self.generated_at,
                "sources": list(self.sources),
            },
        }


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_artifacts(
    artifacts: Sequence[Any],
    sources: Optional[Sequence[str]] = None,
) -> List[ExtractionArtifact]:
    """Classify each artifact, excluding (and logging) the unrecognized ones."""
    logger = get_logger()
    normalized: List[ExtractionArtifact] = []

    for index, data in enumerate(artifacts):
        source = sources[index] if sources and index < len(sources) else f"artifact[{index}]"
        try:
            artifact = normalize_artifact(data, source=source)
        except UnrecognizedSchemaError as e:
            logger.warning("Excluding artifact with unrecognized schema", source=source, error=str(e))
            logger.record_artifact_rejected("unrecognized_schema")
            continue
        logger.record_artifact_loaded()
        normalized.append(artifact)

    return normalized


def build_consensus(
    artifacts: Sequence[Any],
    sources: Optional[Sequence[str]] = None,
    threshold: float = SIMILARITY_THRESHOLD,
    rejected: int = 0,
) -> ConsensusResult:
    """
    Fuse parsed extraction artifacts into one consensus record.

    Args:
        artifacts: Parsed JSON values, one per extraction run
        sources: Optional labels parallel to `artifacts`
        threshold: Title similarity a record must exceed to join a group
        rejected: Artifacts already excluded upstream (for logging only)

    Returns:
        ConsensusResult

    Raises:
        InsufficientDataError: if no artifact has a recognized shape
    """
    logger = get_logger()
    logger.record_consensus_run()

    normalized = normalize_artifacts(artifacts, sources=sources)
    if not normalized:
        raise InsufficientDataError(
            f"No valid artifacts to build consensus from ({len(artifacts) + rejected} supplied)"
        )

    shape = dominant_shape(normalized)
    logger.info(
        "Building consensus",
        providers=len(normalized),
        rejected=len(artifacts) + rejected - len(normalized),
        shape=shape.value,
    )

    consensus: Dict[str, Any]
    fields: Dict[str, float] = {}

    if shape == Shape.HIERARCHICAL:
        consensus = {"resume": []}
        show_years, show_years_confidence = vote_show_years(normalized)
        if show_years is not None:
            consensus[SHOW_YEARS_FIELD] = show_years
            fields[SHOW_YEARS_FIELD] = show_years_confidence

        untagged = sum(1 for a in normalized if a.shape == Shape.FLAT)
        if untagged:
            logger.warning("Flat artifacts carry no categories and are not placed", count=untagged)

        categories, category_fields = aggregate_categories(normalized, threshold=threshold)
        consensus["resume"] = [c.to_dict() for c in categories]
        fields.update(category_fields)
    else:
        credits, credit_fields = aggregate_flat(normalized, threshold=threshold)
        consensus = {"credits": [c.to_dict() for c in credits]}
        fields.update(credit_fields)

    return ConsensusResult(
        consensus=consensus,
        fields=fields,
        overall=overall_confidence(fields),
        provider_count=len(normalized),
        generated_at=_now_iso(),
        sources=[a.source for a in normalized if a.source],
    )


def build_consensus_from_files(
    paths: Sequence[Union[str, Path]],
    threshold: float = SIMILARITY_THRESHOLD,
) -> ConsensusResult:
    """Read artifacts from disk, skipping unreadable files, then build consensus."""
    logger = get_logger()
    artifacts: List[Any] = []
    sources: List[str] = []
    failed = 0

    for raw_path in paths:
        path = Path(raw_path)
        try:
            artifacts.append(load_artifact(path))
        except (OSError, ValueError) as e:
            logger.warning("Excluding unreadable artifact", path=str(path), error=str(e))
            logger.record_artifact_rejected(type(e).__name__)
            failed += 1
            continue
        sources.append(path.name)

    return build_consensus(artifacts, sources=sources, threshold=threshold, rejected=failed)
