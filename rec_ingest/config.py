from __future__ import annotations
"""
Configuration for the recommendation ingestion pipeline.
"""

import os
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Paths
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = PROJECT_ROOT / "data"

# Sources
COLLABORATIVE_FILENAME = "collaborative_recommendations_cleaned.csv"
CONTENT_BASED_FILENAME = "content_recommendations_cleaned.csv"

# Base can be an http(s) URL or a local directory
REC_SOURCE_BASE = os.getenv("REC_SOURCE_BASE", str(DATA_DIR))


def _source_locator(filename: str) -> str:
    base = REC_SOURCE_BASE.rstrip("/")
    return f"{base}/{filename}"


COLLABORATIVE_SOURCE = os.getenv("COLLABORATIVE_SOURCE", _source_locator(COLLABORATIVE_FILENAME))
CONTENT_BASED_SOURCE = os.getenv("CONTENT_BASED_SOURCE", _source_locator(CONTENT_BASED_FILENAME))

# Whole-run timeout in seconds; unset means no limit
_timeout_env = os.getenv("INGEST_TIMEOUT")
INGEST_TIMEOUT: Optional[float] = float(_timeout_env) if _timeout_env else None

# HTTP hardening
HTTP_CONNECT_TIMEOUT = 3.0
HTTP_READ_TIMEOUT = 10.0
HTTP_MAX_REDIRECTS = 2
HTTP_MAX_BYTES = 20_000_000
HTTP_USER_AGENT = "rec-ingest/1.0"

# Columns
# Checked in priority order; first non-blank value wins.
CONTENT_ID_ALIASES: Tuple[str, ...] = ("content_id", "contentId", "itemId")
RECOMMENDATION_COLUMN_TEMPLATE = "Recommendation {}"
RECOMMENDATION_SLOTS = 5


class SourceKind(str, Enum):
    COLLABORATIVE = "collaborative"
    CONTENT_BASED = "content-based"


# (top score, step per rank) for each source kind
SCORE_POLICY: Dict[SourceKind, Tuple[float, float]] = {
    SourceKind.COLLABORATIVE: (5.0, 0.2),
    SourceKind.CONTENT_BASED: (0.95, 0.05),
}
SCORE_DECIMALS = 4


class IngestionState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    DEGRADED = "degraded"


# Pydantic schemas
class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class RecommendationEntry(_CamelModel):
    content_id: str = Field(alias="contentId")
    score: float


RecommendationList = List[RecommendationEntry]
RecommendationMap = Dict[str, RecommendationList]


class RecommendationSnapshot(_CamelModel):
    content_ids: List[str] = Field(default_factory=list, alias="contentIds")
    collaborative_recommendations: RecommendationMap = Field(
        default_factory=dict, alias="collaborativeRecommendations"
    )
    content_based_recommendations: RecommendationMap = Field(
        default_factory=dict, alias="contentBasedRecommendations"
    )
    loading: bool = False
    error: Optional[str] = None
    state: IngestionState = IngestionState.IDLE


class ContentRecommendations(_CamelModel):
    content_id: str = Field(alias="contentId")
    collaborative: RecommendationList = Field(default_factory=list)
    content_based: RecommendationList = Field(default_factory=list, alias="contentBased")


class HealthResponse(BaseModel):
    status: str
