from __future__ import annotations

"""
Synthetic recommendation data used when the real exports cannot be
ingested.

The catalogue is a fixed set of three sample articles with five titles
each.  Collaborative lists keep the titles in catalogue order; the
content-based lists hold the same titles in a random order, so the two
panels visibly disagree.  Pass a seeded ``random.Random`` to get a
reproducible shuffle.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from .config import RecommendationMap, SourceKind
from .normalize import scored_entries


@dataclass(frozen=True)
class SampleContent:
    content_id: str
    recommendations: Tuple[str, ...]


SAMPLE_CATALOGUE: Tuple[SampleContent, ...] = (
    SampleContent(
        content_id="-9.19255E+18",
        recommendations=(
            "Elastic Stack 5.0.0 Released",
            "Microsoft lança Teams, nova plataforma de chat concorrente do Slack",
            "Hello, a nova rede social do Orkut, está liberada no Brasil",
            "A Googler analyzed a billion files to settle the programming dispute",
            "You SHOULD Learn Vanilla JavaScript Before JS Frameworks",
        ),
    ),
    SampleContent(
        content_id="-9.18966E+18",
        recommendations=(
            "Clean Coder Blog",
            "Pull request first - Practical Blend",
            "Beyond Progressive Web Apps Part 1",
            "Eat, sleep, code, repeat is such bullshit",
            "Most Interesting APIs in 2016: Cognitive Computing",
        ),
    ),
    SampleContent(
        content_id="-9.17614E+18",
        recommendations=(
            "Top 10 Insurtech Trends for 2017",
            "Governo brasileiro cria manual para contratação de cloud",
            "The barbell effect of machine learning",
            "Microsoft's Open Source Love Affair Reaches New Heights",
            "Facebook Workplace officially launches on the web and iOS",
        ),
    ),
)


@dataclass(frozen=True)
class FallbackData:
    content_ids: List[str]
    collaborative: RecommendationMap
    content_based: RecommendationMap


def generate_fallback(rng: Optional[random.Random] = None) -> FallbackData:
    """Build both recommendation maps from :data:`SAMPLE_CATALOGUE`."""
    rng = rng or random.Random()
    logger.info("Loading sample data as fallback...")

    collaborative: RecommendationMap = {}
    content_based: RecommendationMap = {}
    ids: List[str] = []

    for item in SAMPLE_CATALOGUE:
        ids.append(item.content_id)
        collaborative[item.content_id] = scored_entries(item.recommendations, SourceKind.COLLABORATIVE)

        shuffled = list(item.recommendations)
        rng.shuffle(shuffled)
        content_based[item.content_id] = scored_entries(shuffled, SourceKind.CONTENT_BASED)

    return FallbackData(content_ids=ids, collaborative=collaborative, content_based=content_based)
