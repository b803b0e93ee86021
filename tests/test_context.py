"""Tests for FetchMetadata."""

from starlette.datastructures import Headers

from secfetch import FetchMetadata


def test_defaults():
    m = FetchMetadata()
    assert m.site == ""
    assert m.mode == ""
    assert m.method == "GET"
    assert m.dest == ""
    assert m.user == ""


def test_from_headers_missing_reads_empty():
    m = FetchMetadata.from_headers({}, "POST")
    assert m == FetchMetadata(method="POST")


def test_from_headers_case_insensitive():
    m = FetchMetadata.from_headers(
        {
            "Sec-Fetch-Site": "cross-site",
            "SEC-FETCH-MODE": "cors",
            "sec-fetch-dest": "empty",
            "Sec-Fetch-User": "?1",
        },
        "POST",
    )
    assert m.site == "cross-site"
    assert m.mode == "cors"
    assert m.dest == "empty"
    assert m.user == "?1"
    assert m.method == "POST"


def test_from_starlette_headers():
    headers = Headers(raw=[(b"sec-fetch-site", b"same-origin")])
    assert FetchMetadata.from_headers(headers, "GET").site == "same-origin"


def test_method_kept_verbatim():
    assert FetchMetadata.from_headers({}, "get").method == "get"


def test_from_http_scope():
    scope = {
        "type": "http",
        "method": "DELETE",
        "headers": [(b"sec-fetch-site", b"cross-site"), (b"sec-fetch-mode", b"cors")],
    }
    m = FetchMetadata.from_scope(scope)
    assert (m.site, m.mode, m.method) == ("cross-site", "cors", "DELETE")


def test_from_websocket_scope_is_get():
    scope = {
        "type": "websocket",
        "headers": [(b"sec-fetch-site", b"cross-site"), (b"sec-fetch-mode", b"websocket")],
    }
    m = FetchMetadata.from_scope(scope)
    assert m.method == "GET"
    assert m.mode == "websocket"


def test_frozen():
    m = FetchMetadata()
    try:
        m.site = "cross-site"  # type: ignore[misc]
        raise AssertionError("Should have raised")
    except AttributeError:
        pass
