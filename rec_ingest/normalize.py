from __future__ import annotations

"""
Normalization of parsed export rows into scored recommendation lists.

Each export row names one piece of content and up to five
"Recommendation N" columns.  The column position is the rank; the score
is assigned from the rank by the source kind's policy and is never read
from the row.  Keeping this logic here means both source pipelines and
the fallback data share exactly one scoring rule.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from .config import (
    CONTENT_ID_ALIASES,
    RECOMMENDATION_COLUMN_TEMPLATE,
    RECOMMENDATION_SLOTS,
    SCORE_DECIMALS,
    SCORE_POLICY,
    RecommendationEntry,
    RecommendationList,
    RecommendationMap,
    SourceKind,
)


# ---------------------------
# Scoring
# ---------------------------

def score_for_rank(rank: int, kind: SourceKind) -> float:
    """
    Score for the 1-based ``rank`` under ``kind``'s policy.

    collaborative: 5.0, 4.8, 4.6, 4.4, 4.2
    content-based: 0.95, 0.90, 0.85, 0.80, 0.75
    """
    top, step = SCORE_POLICY[SourceKind(kind)]
    return round(top - (rank - 1) * step, SCORE_DECIMALS)


def scored_entries(titles: Sequence[str], kind: SourceKind) -> RecommendationList:
    """Score an already-ordered sequence of identifiers by position."""
    return [
        RecommendationEntry(content_id=title, score=score_for_rank(i, kind))
        for i, title in enumerate(titles, 1)
    ]


# ---------------------------
# Row helpers
# ---------------------------

def recommendation_column(rank: int) -> str:
    return RECOMMENDATION_COLUMN_TEMPLATE.format(rank)


def _is_missing(value: Optional[str]) -> bool:
    # Only absent or empty counts; whitespace is a real value
    return value is None or value == ""


def extract_content_id(
    row: Mapping[str, str],
    aliases: Sequence[str] = CONTENT_ID_ALIASES,
) -> Optional[str]:
    """Return the first non-empty identifier among ``aliases``, or ``None``."""
    for alias in aliases:
        value = row.get(alias)
        if not _is_missing(value):
            return str(value)
    return None


def normalize_row(
    row: Mapping[str, str],
    kind: SourceKind,
) -> Optional[Tuple[str, RecommendationList]]:
    """
    Convert one parsed row into ``(content_id, recommendations)``.

    Returns ``None`` when the row has no identifier.  Empty or missing
    recommendation columns shorten the list, and the remaining entries
    keep the score of their original column.
    """
    content_id = extract_content_id(row)
    if content_id is None:
        return None

    entries: RecommendationList = []
    for rank in range(1, RECOMMENDATION_SLOTS + 1):
        value = row.get(recommendation_column(rank))
        if _is_missing(value):
            continue
        entries.append(RecommendationEntry(content_id=str(value), score=score_for_rank(rank, kind)))
    return content_id, entries


def normalize_rows(
    rows: Iterable[Mapping[str, str]],
    kind: SourceKind,
) -> Tuple[RecommendationMap, List[str]]:
    """
    Fold a parsed document into a recommendation map plus the identifiers
    it introduced, in first-seen order.  A repeated identifier keeps the
    list from its last row.
    """
    recs: Dict[str, RecommendationList] = {}
    skipped = 0
    checked_header = False

    for row in rows:
        if not checked_header:
            checked_header = True
            if not any(alias in row for alias in CONTENT_ID_ALIASES):
                logger.warning(
                    "{} export has no identifier column; expected one of {}",
                    SourceKind(kind).value,
                    list(CONTENT_ID_ALIASES),
                )
        normalized = normalize_row(row, kind)
        if normalized is None:
            skipped += 1
            continue
        content_id, entries = normalized
        recs[content_id] = entries

    if skipped:
        logger.info("Skipped {} {} rows without a content id", skipped, SourceKind(kind).value)
    logger.info("Normalized {} {} recommendation lists", len(recs), SourceKind(kind).value)
    return recs, list(recs)
