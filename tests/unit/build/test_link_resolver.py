"""Tests for external link resolution."""

from unittest.mock import Mock, patch

import pytest
import requests

from docmerge.build.link_resolver import LinkResolver, LinkResolverError, ResolvedLink
from docmerge.cache import Cache

URL = "https://docs.oracle.com/en/java/javase/21/docs/api/"


@pytest.fixture
def cache(tmp_path, monkeypatch):
    monkeypatch.delenv("DOCMERGE_CACHE_DIR", raising=False)
    return Cache(tmp_path)


def ok_response(text):
    response = Mock()
    response.text = text
    response.raise_for_status = Mock()
    return response


class TestLinkResolver:
    """Test element-list download and caching."""

    def test_downloads_element_list(self, cache):
        with patch("docmerge.build.link_resolver.requests.get", return_value=ok_response("java.base\n")) as get:
            link = LinkResolver(cache).resolve(URL)

        get.assert_called_once_with(f"{URL}element-list", timeout=10)
        assert link.offline_dir == cache.get_links_dir(URL)
        assert (link.offline_dir / "element-list").read_text() == "java.base\n"
        assert link.to_arguments() == ["-linkoffline", URL, str(link.offline_dir)]

    def test_falls_back_to_package_list(self, cache):
        responses = [requests.HTTPError("404"), ok_response("java.lang\n")]

        def fake_get(url, timeout):
            result = responses.pop(0)
            if isinstance(result, Exception):
                raise result
            return result

        with patch("docmerge.build.link_resolver.requests.get", side_effect=fake_get):
            link = LinkResolver(cache).resolve(URL.rstrip("/"))

        assert (link.offline_dir / "package-list").read_text() == "java.lang\n"

    def test_uses_cached_list(self, cache):
        link_dir = cache.get_links_dir(URL)
        link_dir.mkdir(parents=True)
        (link_dir / "element-list").write_text("java.base\n")

        with patch("docmerge.build.link_resolver.requests.get") as get:
            link = LinkResolver(cache).resolve(URL)

        get.assert_not_called()
        assert link.offline_dir == link_dir

    def test_online_fallback(self, cache):
        with patch(
            "docmerge.build.link_resolver.requests.get",
            side_effect=requests.ConnectionError("offline"),
        ):
            link = LinkResolver(cache).resolve(URL)

        assert link == ResolvedLink(url=URL)
        assert link.to_arguments() == ["-link", URL]

    def test_strict_mode(self, cache):
        with patch(
            "docmerge.build.link_resolver.requests.get",
            side_effect=requests.ConnectionError("offline"),
        ):
            with pytest.raises(LinkResolverError, match="offline"):
                LinkResolver(cache, strict=True).resolve(URL)

    def test_resolve_all(self, cache):
        with patch("docmerge.build.link_resolver.requests.get", return_value=ok_response("x\n")):
            links = LinkResolver(cache).resolve_all([URL, "https://example.org/api"])
        assert [link.url for link in links] == [URL, "https://example.org/api"]
