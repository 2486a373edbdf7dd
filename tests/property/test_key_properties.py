"""Property tests for cache keys and member paths."""

from __future__ import annotations

from urllib.parse import unquote

from hypothesis import given, settings, strategies as st

from etl_dashboard import keys


# --- Strategies ---

resource_ids = st.text(
    alphabet=st.characters(min_codepoint=32, max_codepoint=126), min_size=1, max_size=20
)
pages = st.integers(min_value=1, max_value=500)
limits = st.integers(min_value=1, max_value=100)
collections = st.sampled_from(
    [keys.DATA_SOURCES, keys.PROCESSING_JOBS, keys.DATA_ERRORS, keys.CORRECTION_RULES, keys.ANOMALIES, keys.ANOMALY_RULES]
)


@settings(max_examples=200)
@given(collection=collections, resource_id=resource_ids)
def test_member_id_is_one_encoded_segment(collection: str, resource_id: str) -> None:
    """Any id becomes exactly one path segment that decodes back to it."""
    path = keys.member(collection, resource_id)

    assert path.startswith(collection + "/")
    segment = path[len(collection) + 1:]
    assert "/" not in segment
    assert "?" not in segment
    assert unquote(segment) == resource_id


@settings(max_examples=100)
@given(page=pages, limit=limits)
def test_error_page_keys_are_covered_by_their_path(page: int, limit: int) -> None:
    key = keys.data_errors_key(page, limit)

    assert key == f"/api/errors?page={page}&limit={limit}"
    assert keys.key_matches(key, keys.DATA_ERRORS)
    assert not keys.key_matches(key, keys.CORRECTION_RULES)


@settings(max_examples=100)
@given(first=st.tuples(pages, limits), second=st.tuples(pages, limits))
def test_distinct_parameters_give_distinct_keys(first: tuple[int, int], second: tuple[int, int]) -> None:
    same_key = keys.data_errors_key(*first) == keys.data_errors_key(*second)

    assert same_key == (first == second)
