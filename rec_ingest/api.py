from __future__ import annotations

"""
FastAPI application serving the ingested recommendations.

- Ingestion runs once at startup; there is no re-ingestion endpoint
- /recommendations returns the whole snapshot (camelCase field names)
- /recommendations/{content_id} looks one id up in both maps
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from .config import ContentRecommendations, HealthResponse
from .ingest import IngestionService

app = FastAPI(title="Recommendation Ingestion API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

service = IngestionService()


@app.on_event("startup")
async def startup_event() -> None:
    logger.info("Starting recommendation ingestion...")
    snapshot = await service.start()
    if snapshot.error:
        logger.warning("Serving fallback recommendations: {}", snapshot.error)
    logger.info("Ingestion finished in state {}", snapshot.state.value)


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.get("/recommendations")
def recommendations():
    return service.snapshot.model_dump(mode="json", by_alias=True)


@app.get("/recommendations/{content_id:path}")
def recommendations_for(content_id: str):
    if not service.finished:
        raise HTTPException(status_code=503, detail="Recommendations are still loading")
    snapshot = service.snapshot
    if content_id not in snapshot.content_ids:
        raise HTTPException(status_code=404, detail=f"Unknown content id: {content_id}")
    # An id known to one source only gets an empty list from the other
    result = ContentRecommendations(
        content_id=content_id,
        collaborative=snapshot.collaborative_recommendations.get(content_id, []),
        content_based=snapshot.content_based_recommendations.get(content_id, []),
    )
    return result.model_dump(mode="json", by_alias=True)
