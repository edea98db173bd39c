import pytest

from rec_ingest.config import SourceKind
from rec_ingest.normalize import extract_content_id, normalize_row, normalize_rows, score_for_rank

FULL_ROW = {
    "content_id": "x",
    "Recommendation 1": "a",
    "Recommendation 2": "b",
    "Recommendation 3": "c",
    "Recommendation 4": "d",
    "Recommendation 5": "e",
}


def _pairs(entries):
    return [(e.content_id, e.score) for e in entries]


def test_collaborative_scores_by_position():
    content_id, entries = normalize_row(FULL_ROW, SourceKind.COLLABORATIVE)
    assert content_id == "x"
    assert _pairs(entries) == [("a", 5.0), ("b", 4.8), ("c", 4.6), ("d", 4.4), ("e", 4.2)]


def test_content_based_scores_by_position():
    _, entries = normalize_row(FULL_ROW, SourceKind.CONTENT_BASED)
    assert _pairs(entries) == [("a", 0.95), ("b", 0.9), ("c", 0.85), ("d", 0.8), ("e", 0.75)]


def test_sparse_row_keeps_original_column_scores():
    row = {"content_id": "x", "Recommendation 1": "a", "Recommendation 2": "", "Recommendation 3": "c"}
    _, entries = normalize_row(row, SourceKind.COLLABORATIVE)
    assert _pairs(entries) == [("a", 5.0), ("c", 4.6)]


def test_row_without_recommendations_gives_empty_list():
    assert normalize_row({"content_id": "x"}, SourceKind.CONTENT_BASED) == ("x", [])


@pytest.mark.parametrize("missing", ["", None])
def test_missing_identifier_skips_row(missing):
    row = dict(FULL_ROW, content_id=missing)
    assert normalize_row(row, SourceKind.COLLABORATIVE) is None


def test_whitespace_identifier_is_kept_verbatim():
    row = dict(FULL_ROW, content_id=" ")
    content_id, entries = normalize_row(row, SourceKind.COLLABORATIVE)
    assert content_id == " "
    assert len(entries) == 5


def test_whitespace_recommendation_keeps_its_slot():
    row = {"content_id": "x", "Recommendation 1": " ", "Recommendation 2": "b"}
    _, entries = normalize_row(row, SourceKind.COLLABORATIVE)
    assert _pairs(entries) == [(" ", 5.0), ("b", 4.8)]


def test_identifier_aliases_checked_in_priority_order():
    assert extract_content_id({"contentId": "y", "itemId": "z"}) == "y"
    assert extract_content_id({"content_id": "", "itemId": "z"}) == "z"
    assert extract_content_id({"itemId": "z", "content_id": "x"}) == "x"
    assert extract_content_id({"other": "w"}) is None


def test_score_ignores_similarity_columns():
    row = dict(FULL_ROW, score="0.1", similarity="0.2", predicted_rating="1.0")
    _, entries = normalize_row(row, SourceKind.COLLABORATIVE)
    assert entries[0].score == 5.0


def test_score_for_rank_accepts_plain_strings():
    assert score_for_rank(2, "content-based") == 0.9


def test_normalize_rows_skips_blank_ids_everywhere():
    rows = [FULL_ROW, dict(FULL_ROW, content_id="")]
    recs, ids = normalize_rows(rows, SourceKind.COLLABORATIVE)
    assert list(recs) == ["x"]
    assert ids == ["x"]


def test_normalize_rows_last_duplicate_wins_first_seen_order():
    rows = [
        {"content_id": "x", "Recommendation 1": "old"},
        {"content_id": "y", "Recommendation 1": "b"},
        {"content_id": "x", "Recommendation 1": "new"},
    ]
    recs, ids = normalize_rows(rows, SourceKind.CONTENT_BASED)
    assert ids == ["x", "y"]
    assert _pairs(recs["x"]) == [("new", 0.95)]


def test_normalize_rows_without_identifier_column():
    recs, ids = normalize_rows([{"Recommendation 1": "a"}], SourceKind.COLLABORATIVE)
    assert recs == {}
    assert ids == []
