"""Tests for response rendering."""

from pathlib import Path

import pytest

from minicurl.models import RequestConfig
from minicurl.render import (
    BINARY_PLACEHOLDER,
    JSON_ANNOUNCEMENT,
    TEXT_ANNOUNCEMENT,
    LineKind,
    OutputMode,
    header_value_text,
    render_json,
    render_response,
)


def _texts(rendering) -> list[str]:
    return [line.text for line in rendering.lines]


class TestRenderJSON:
    def test_keys_sorted_with_trailing_commas(self):
        assert render_json({"z": 1, "a": 2}) == '{\n  "a": 2,\n  "z": 1\n}'

    def test_sort_is_by_literal_text(self):
        rendered = render_json({"b": 1, "B": 2, "a": 3, "_": 4, "10": 5, "9": 6})
        keys = [line.split(":")[0].strip() for line in rendered.splitlines()[1:-1]]
        assert keys == ['"10"', '"9"', '"B"', '"_"', '"a"', '"b"']

    def test_nested_values_not_resorted(self):
        rendered = render_json({"outer": {"y": 1, "x": [3, 1]}})
        assert rendered == '{\n  "outer": {"y":1,"x":[3,1]}\n}'

    def test_empty_object(self):
        assert render_json({}) == "{\n}"

    def test_top_level_array(self):
        assert render_json([{"b": 1, "a": 2}]) == '[\n  {\n    "b": 1,\n    "a": 2\n  }\n]'

    def test_scalar(self):
        assert render_json("hello") == '"hello"'

    def test_unicode_kept(self):
        assert render_json({"name": "Zoë"}) == '{\n  "name": "Zoë"\n}'


class TestHeaderValues:
    def test_text_value(self):
        assert header_value_text(b"text/html; charset=utf-8") == "text/html; charset=utf-8"

    @pytest.mark.parametrize("value", [b"\xff\xfe", "café".encode("utf-8"), b"a\x01b"])
    def test_binary_value(self, value):
        assert header_value_text(value) == BINARY_PLACEHOLDER


class TestRenderResponse:
    def test_head_only_prints_headers_in_order(self, make_response):
        response = make_response(
            status_code=200,
            headers=[("Server", b"test"), ("Set-Cookie", b"a=1"), ("Set-Cookie", b"b=2")],
            body=b"ignored",
        )
        rendering = render_response(response, RequestConfig(head_only=True))

        assert rendering.mode is OutputMode.HEADERS
        assert _texts(rendering) == ["Server: test", "Set-Cookie: a=1", "Set-Cookie: b=2"]
        assert not rendering.failed

    def test_head_only_ignores_error_status(self, make_response):
        response = make_response(status_code=404, headers=[("X-Bin", b"\x80")])
        rendering = render_response(response, RequestConfig(head_only=True))

        assert rendering.mode is OutputMode.HEADERS
        assert _texts(rendering) == ["X-Bin: <binary>"]
        assert not rendering.failed

    @pytest.mark.parametrize("status", [199, 301, 404, 500])
    def test_error_status(self, make_response, status):
        rendering = render_response(
            make_response(status_code=status, body=b'{"a":1}'),
            RequestConfig(out_file=Path("never.bin")),
        )

        assert rendering.mode is OutputMode.STATUS_ERROR
        assert rendering.failed
        assert rendering.file_path is None
        assert [(line.text, line.kind) for line in rendering.lines] == [
            (f"Request failed with status code: {status}.", LineKind.ERROR)
        ]

    def test_file_mode(self, make_response):
        body = bytes(range(256))
        rendering = render_response(
            make_response(body=body), RequestConfig(out_file=Path("out.bin"))
        )

        assert rendering.mode is OutputMode.FILE
        assert rendering.file_path == Path("out.bin")
        assert rendering.file_bytes == body
        assert rendering.lines == ()
        assert [line.text for line in rendering.after_write] == ["Response body saved to out.bin"]

    def test_file_mode_silent(self, make_response):
        rendering = render_response(
            make_response(body=b"x"), RequestConfig(out_file=Path("out.bin"), silent=True)
        )
        assert rendering.after_write == ()

    def test_json_body(self, make_response):
        rendering = render_response(make_response(body=b'{"z":1,"a":2}'), RequestConfig())

        assert rendering.mode is OutputMode.JSON
        assert _texts(rendering) == [JSON_ANNOUNCEMENT, '{\n  "a": 2,\n  "z": 1\n}']
        assert rendering.lines[0].kind is LineKind.NARRATION
        assert rendering.lines[1].kind is LineKind.PAYLOAD

    def test_json_body_silent(self, make_response):
        rendering = render_response(make_response(body=b"[1]"), RequestConfig(silent=True))
        assert _texts(rendering) == ["[\n  1\n]"]

    def test_text_body(self, make_response):
        rendering = render_response(make_response(body=b"<h1>Hi</h1>\n\tok"), RequestConfig())

        assert rendering.mode is OutputMode.TEXT
        assert _texts(rendering) == [TEXT_ANNOUNCEMENT, "<h1>Hi</h1>\n\tok"]

    def test_nan_is_not_json(self, make_response):
        rendering = render_response(make_response(body=b"NaN"), RequestConfig())
        assert rendering.mode is OutputMode.TEXT

    def test_unpaired_surrogate_falls_back_to_text(self, make_response):
        body = b'{"a":"\\ud800"}'
        rendering = render_response(make_response(body=body), RequestConfig())

        assert rendering.mode is OutputMode.TEXT
        assert _texts(rendering) == [TEXT_ANNOUNCEMENT, body.decode("ascii")]

    def test_declared_charset(self, make_response):
        response = make_response(
            body="café".encode("latin-1"),
            headers=[("Content-Type", b"text/plain; charset=ISO-8859-1")],
        )
        rendering = render_response(response, RequestConfig(silent=True))
        assert _texts(rendering) == ["café"]

    def test_rendering_is_deterministic(self, make_response):
        response = make_response(body=b'{"b": [1, 2], "a": {"c": null}}')
        config = RequestConfig()
        assert render_response(response, config) == render_response(response, config)
