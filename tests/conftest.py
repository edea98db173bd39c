from typing import Callable, Dict, Optional

import httpx
import pytest

HEADER = "content_id,Recommendation 1,Recommendation 2,Recommendation 3,Recommendation 4,Recommendation 5"

COLLAB_URL = "http://exports.test/collaborative_recommendations_cleaned.csv"
CONTENT_URL = "http://exports.test/content_recommendations_cleaned.csv"


def export_csv(*rows: str, header: str = HEADER) -> str:
    return "\n".join((header,) + rows) + "\n"


def routed_client(routes: Dict[str, object], recorder: Optional[Callable] = None) -> httpx.AsyncClient:
    """
    AsyncClient whose responses come from ``routes`` keyed by URL.

    A route value may be CSV text (200), an int status code, or an
    exception instance to raise.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if recorder is not None:
            recorder(request)
        outcome = routes.get(str(request.url), 404)
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, int):
            return httpx.Response(outcome, text="")
        return httpx.Response(200, text=outcome)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def collab_text() -> str:
    return export_csv("p,a,b,c,d,e")


@pytest.fixture
def content_text() -> str:
    return export_csv("q,v,w,x,y,z")
