"""Tests for asset loading and photo decoding."""

from __future__ import annotations

import base64

import httpx
import pytest

from inspectdocs.core.assets import decode_photo, is_url, load_asset, sniff_image_format


class TestDecodePhoto:
    def test_data_uri(self, png_base64, png_bytes):
        assert decode_photo(png_base64) == png_bytes

    def test_bare_base64(self, png_bytes):
        assert decode_photo(base64.b64encode(png_bytes).decode("ascii")) == png_bytes

    def test_wrapped_base64(self, png_bytes):
        text = base64.encodebytes(png_bytes).decode("ascii")
        assert decode_photo(text) == png_bytes

    def test_missing_payload(self):
        assert decode_photo(None) is None
        assert decode_photo("") is None

    def test_invalid_base64(self):
        assert decode_photo("data:image/png;base64,***not base64***") is None

    def test_not_an_image(self):
        assert decode_photo(base64.b64encode(b"hello world").decode("ascii")) is None


class TestSniff:
    def test_formats(self, png_bytes):
        assert sniff_image_format(png_bytes) == "PNG"
        assert sniff_image_format(b"\xff\xd8\xff\xe0rest") == "JPEG"
        assert sniff_image_format(b"GIF89a") is None


class TestLoadAsset:
    def test_is_url(self):
        assert is_url("https://example.com/logo.png")
        assert is_url("HTTP://example.com/logo.png")
        assert not is_url("/tmp/logo.png")

    def test_local_file(self, tmp_path, png_bytes):
        path = tmp_path / "logo.png"
        path.write_bytes(png_bytes)
        assert load_asset(str(path)) == png_bytes

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_asset(str(tmp_path / "nope.png"))

    def test_download(self, monkeypatch, png_bytes):
        url = "https://example.com/logo.png"

        def fake_get(source, **kwargs):
            return httpx.Response(200, content=png_bytes, request=httpx.Request("GET", source))

        monkeypatch.setattr(httpx, "get", fake_get)
        assert load_asset(url) == png_bytes

    def test_download_error_is_oserror(self, monkeypatch):
        def fake_get(source, **kwargs):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(httpx, "get", fake_get)
        with pytest.raises(OSError, match="Could not download"):
            load_asset("https://example.com/logo.png")

    def test_http_status_error_is_oserror(self, monkeypatch):
        def fake_get(source, **kwargs):
            return httpx.Response(404, request=httpx.Request("GET", source))

        monkeypatch.setattr(httpx, "get", fake_get)
        with pytest.raises(OSError):
            load_asset("https://example.com/logo.png")
