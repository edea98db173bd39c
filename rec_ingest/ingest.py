from __future__ import annotations

"""
Ingestion orchestrator.

- Runs the collaborative and content-based pipelines (read -> parse ->
  normalize) concurrently and joins them; both must succeed for READY
- Any TransportError / ParseError from either side discards all partial
  results and swaps in the fallback catalogue (DEGRADED)
- The run's outcome is returned as a RecommendationSnapshot value, never
  written into ambient state
"""

import asyncio
import random
from typing import List, Optional, Tuple

import httpx
from loguru import logger

from .config import (
    COLLABORATIVE_SOURCE,
    CONTENT_BASED_SOURCE,
    INGEST_TIMEOUT,
    IngestionState,
    RecommendationMap,
    RecommendationSnapshot,
    SourceKind,
)
from .csv_rows import parse_rows
from .errors import IngestionError, TransportError
from .fallback import generate_fallback
from .normalize import normalize_rows
from .registry import build_registry
from .source_fetch import build_client, read_source

SourceResult = Tuple[RecommendationMap, List[str]]


async def load_source(
    locator: str,
    kind: SourceKind,
    client: httpx.AsyncClient | None = None,
) -> SourceResult:
    """One pipeline: the read is the only suspension point."""
    text = await read_source(locator, client=client)
    rows = parse_rows(text)
    logger.info("Loaded {} rows from {} source {}", len(rows), SourceKind(kind).value, locator)
    return normalize_rows(rows, kind)


async def _gather_sources(
    collaborative_source: str,
    content_based_source: str,
    client: httpx.AsyncClient,
) -> Tuple[SourceResult, SourceResult]:
    # Wait for both sides even when one fails so nothing is left running
    # against a client that is about to be closed.
    collaborative, content_based = await asyncio.gather(
        load_source(collaborative_source, SourceKind.COLLABORATIVE, client),
        load_source(content_based_source, SourceKind.CONTENT_BASED, client),
        return_exceptions=True,
    )
    for result in (collaborative, content_based):
        if isinstance(result, BaseException):
            raise result
    return collaborative, content_based


def loading_snapshot() -> RecommendationSnapshot:
    return RecommendationSnapshot(loading=True, state=IngestionState.LOADING)


def fallback_snapshot(error: str, rng: Optional[random.Random] = None) -> RecommendationSnapshot:
    data = generate_fallback(rng)
    return RecommendationSnapshot(
        content_ids=data.content_ids,
        collaborative_recommendations=data.collaborative,
        content_based_recommendations=data.content_based,
        loading=False,
        error=error,
        state=IngestionState.DEGRADED,
    )


async def run_ingestion(
    collaborative_source: str = COLLABORATIVE_SOURCE,
    content_based_source: str = CONTENT_BASED_SOURCE,
    *,
    client: httpx.AsyncClient | None = None,
    rng: Optional[random.Random] = None,
    timeout: Optional[float] = INGEST_TIMEOUT,
) -> RecommendationSnapshot:
    """
    Ingest both sources and return the terminal snapshot.

    Parameters
    ----------
    collaborative_source, content_based_source : str
        Locators understood by :func:`rec_ingest.source_fetch.read_source`.
    client : httpx.AsyncClient, optional
        Shared HTTP client; a hardened one is created when omitted.
    rng : random.Random, optional
        Randomness for the fallback shuffle.
    timeout : float, optional
        Limit for the whole join in seconds.  Expiry counts as a
        transport failure.

    Returns
    -------
    RecommendationSnapshot
        ``state`` is READY with ``error=None`` when both sources were
        ingested, otherwise DEGRADED with fallback data and the first
        failure's message.
    """
    logger.info("Starting ingestion: collaborative={} content_based={}", collaborative_source, content_based_source)
    own_client = client is None
    if own_client:
        client = build_client()

    try:
        try:
            (collab_map, collab_ids), (content_map, content_ids) = await asyncio.wait_for(
                _gather_sources(collaborative_source, content_based_source, client),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Ingestion timed out after {timeout}s") from e
    except IngestionError as e:
        logger.error("Error loading recommendations: {}", e)
        return fallback_snapshot(str(e) or "Failed to load recommendation data", rng)
    finally:
        if own_client:
            await client.aclose()

    registry = build_registry(collab_ids, content_ids)
    logger.info(
        "Ingestion ready: {} ids, {} collaborative, {} content-based",
        len(registry),
        len(collab_map),
        len(content_map),
    )
    return RecommendationSnapshot(
        content_ids=registry,
        collaborative_recommendations=collab_map,
        content_based_recommendations=content_map,
        loading=False,
        error=None,
        state=IngestionState.READY,
    )


class IngestionService:
    """
    Holds the process-wide snapshot served to consumers.

    IDLE until :meth:`start` is awaited, LOADING while the run is in
    flight, then the run's terminal snapshot replaces the previous value
    in one assignment.  Readers get a deep copy, so nothing they do
    changes the published snapshot.
    """

    def __init__(
        self,
        collaborative_source: str = COLLABORATIVE_SOURCE,
        content_based_source: str = CONTENT_BASED_SOURCE,
        *,
        client: httpx.AsyncClient | None = None,
        rng: Optional[random.Random] = None,
        timeout: Optional[float] = INGEST_TIMEOUT,
    ) -> None:
        self.collaborative_source = collaborative_source
        self.content_based_source = content_based_source
        self.client = client
        self.rng = rng
        self.timeout = timeout
        self._snapshot = RecommendationSnapshot()

    @property
    def snapshot(self) -> RecommendationSnapshot:
        return self._snapshot.model_copy(deep=True)

    @property
    def state(self) -> IngestionState:
        return self._snapshot.state

    @property
    def finished(self) -> bool:
        return self.state in (IngestionState.READY, IngestionState.DEGRADED)

    async def start(self) -> RecommendationSnapshot:
        if self.state is not IngestionState.IDLE:
            logger.warning("Ingestion already {}; not starting again", self.state.value)
            return self.snapshot
        self._snapshot = loading_snapshot()
        self._snapshot = await run_ingestion(
            self.collaborative_source,
            self.content_based_source,
            client=self.client,
            rng=self.rng,
            timeout=self.timeout,
        )
        return self.snapshot
