import pytest

from wikipedia_mcp.domain.models.page import PageRequest, RangedFetchResult, StatusKind
from wikipedia_mcp.domain.services.pagination import continuation_notice, has_more_content, paginate


def _partial(body: str, total):
    return RangedFetchResult(StatusKind.PARTIAL, body, total, len(body.encode("utf-8")))


def test_first_window_of_larger_document_points_to_next_offset():
    chunk = paginate(_partial("a" * 5000, 12000), start=0)

    assert chunk.range_start == 0
    assert chunk.range_end == 4999
    assert chunk.has_more is True
    assert chunk.next_start == 5000
    assert chunk.text.startswith("a" * 5000)
    assert "0-4999 of 12000" in chunk.text
    assert "request starting from 5000" in chunk.text


def test_last_window_reports_final_range_without_continuation():
    chunk = paginate(_partial("b" * 2000, 12000), start=10000)

    assert chunk.range_end == 11999
    assert chunk.has_more is False
    assert chunk.next_start is None
    assert "10000-11999 of 12000" in chunk.text
    assert "End of article" in chunk.text
    assert "request starting from" not in chunk.text


def test_full_response_at_start_zero_is_returned_verbatim():
    result = RangedFetchResult(StatusKind.FULL, "<p>whole article</p>")

    chunk = paginate(result, start=0)

    assert chunk.text == "<p>whole article</p>"
    assert chunk.has_more is False
    assert chunk.total_length is None


def test_full_response_past_start_gets_unknown_total_annotation():
    chunk = paginate(RangedFetchResult(StatusKind.FULL, "xyz"), start=100)

    assert chunk.has_more is False
    assert chunk.text.startswith("xyz")
    assert "100-102 (total length unknown)" in chunk.text


def test_empty_body_yields_end_before_start():
    chunk = paginate(_partial("", 12000), start=12000)

    assert chunk.range_start == 12000
    assert chunk.range_end == 11999
    assert chunk.has_more is False


def test_range_math_uses_byte_length_not_characters():
    # Two-byte characters: 3 characters, 6 bytes
    body = "ééé"
    chunk = paginate(_partial(body, 100), start=0)

    assert chunk.range_end == 5
    assert "request starting from 6" in chunk.text


@pytest.mark.parametrize("start,length,total,expect_more", [
    (0, 10, 10, False),
    (0, 10, 25, True),
    (40, 7, 50, True),
    (43, 7, 50, False),
])
def test_has_more_matches_total_for_known_lengths(start, length, total, expect_more):
    returned = min(length, total - start)
    chunk = paginate(_partial("z" * returned, total), start=start)

    assert chunk.has_more is (start + returned < total)
    assert chunk.has_more is expect_more
    if expect_more:
        assert chunk.next_start == start + returned


def test_unknown_total_never_signals_more():
    assert has_more_content(10, None) is False
    assert has_more_content(10, 12) is True
    assert has_more_content(11, 12) is False


def test_paginate_is_deterministic():
    result = _partial("c" * 5000, 12000)

    assert paginate(result, 0) == paginate(result, 0)


def test_continuation_notice_is_separated_from_content():
    notice = continuation_notice(0, 4999, 12000, True)

    assert notice.startswith("\n\n---\n")


def test_page_request_range_header_is_inclusive():
    request = PageRequest(title="Cat", start=10000, length=5000)

    assert request.end == 14999
    assert request.range_header() == "bytes=10000-14999"


@pytest.mark.parametrize("kwargs", [
    {"title": "", "start": 0, "length": 10},
    {"title": "Cat", "start": -1, "length": 10},
    {"title": "Cat", "start": 0, "length": 0},
])
def test_page_request_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        PageRequest(**kwargs)


def test_full_response_never_signals_more_even_with_larger_total():
    result = RangedFetchResult(StatusKind.FULL, "x" * 100, 12000, 100)

    chunk = paginate(result, start=0)

    assert chunk.has_more is False
    assert chunk.next_start is None
    assert "request starting from" not in chunk.text


def test_page_request_accepts_whole_number_floats():
    request = PageRequest(title="Cat", start=5000.0, length=100.0)

    assert request.start == 5000
    assert isinstance(request.start, int)
    assert request.range_header() == "bytes=5000-5099"


@pytest.mark.parametrize("kwargs", [
    {"title": "Cat", "start": 1.5},
    {"title": "Cat", "start": True},
    {"title": "Cat", "length": "100"},
])
def test_page_request_rejects_non_integer_offsets(kwargs):
    with pytest.raises(ValueError):
        PageRequest(**kwargs)
