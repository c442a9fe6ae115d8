"""
Baseline store for consensus results.

A baseline is the consensus built for one source document, kept so later
single-provider extractions of the same document can be graded against it.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .consensus.builder import ConsensusResult
from .database import Baseline, init_database, get_session
from .logger import get_logger


def _as_dict(baseline: Baseline) -> Dict[str, Any]:
    return {
        "document": baseline.document,
        "consensus": baseline.consensus,
        "confidence": baseline.confidence,
        "providers": baseline.providers,
        "providerCount": baseline.provider_count,
        "overall": baseline.overall,
        "createdAt": baseline.created_at.isoformat() if baseline.created_at else None,
        "updatedAt": baseline.updated_at.isoformat() if baseline.updated_at else None,
    }


def save_baseline(
    db_path: Path,
    document: str,
    result: ConsensusResult,
    providers: Optional[List[str]] = None,
) -> Dict[str, str]:
    """
    Insert or update the baseline for a document.

    Returns:
        {"status": "new" | "updated" | "no-change"}
    """
    logger = get_logger()
    payload = result.to_dict()
    values = {
        "consensus": payload["consensus"],
        "confidence": payload["confidence"],
        "providers": list(providers if providers is not None else result.sources),
        "provider_count": result.provider_count,
        "overall": result.overall,
    }

    init_database(db_path)
    session = get_session(db_path)
    try:
        existing = session.query(Baseline).filter_by(document=document).first()
        if existing is None:
            session.add(Baseline(document=document, **values))
            status = "new"
        elif any(getattr(existing, k) != v for k, v in values.items()):
            for k, v in values.items():
                setattr(existing, k, v)
            status = "updated"
        else:
            # Rebuilt from the same inputs; still marks the baseline as fresh
            existing.updated_at = datetime.now()
            status = "no-change"
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    logger.info("Baseline saved", document=document, status=status, providers=result.provider_count)
    return {"status": status}


def load_baseline(db_path: Path, document: str) -> Optional[Dict[str, Any]]:
    if not db_path.exists():
        return None
    session = get_session(db_path)
    try:
        baseline = session.query(Baseline).filter_by(document=document).first()
        return _as_dict(baseline) if baseline is not None else None
    finally:
        session.close()


def list_baselines(db_path: Path) -> List[Dict[str, Any]]:
    if not db_path.exists():
        return []
    session = get_session(db_path)
    try:
        return [_as_dict(b) for b in session.query(Baseline).order_by(Baseline.document).all()]
    finally:
        session.close()


def is_baseline_current(db_path: Path, document: str, modified_at: datetime) -> bool:
    """True when a stored baseline is newer than the document's last modification."""
    baseline = load_baseline(db_path, document)
    if baseline is None or baseline["updatedAt"] is None:
        return False
    return datetime.fromisoformat(baseline["updatedAt"]) > modified_at
