"""Tests for rerouter.rewrite.pattern — host/path matchers and targets."""

import pytest

from rerouter.rewrite.pattern import MatchKind, compile_host, compile_path, compile_target


class TestHostPattern:
    def test_exact_is_case_insensitive(self) -> None:
        pattern = compile_host("Blog.SpringSource.org")
        assert pattern.matches("blog.springsource.org")
        assert pattern.matches("BLOG.springsource.ORG")
        assert not pattern.matches("www.springsource.org")

    def test_port_is_ignored(self) -> None:
        assert compile_host("springframework.io").matches("springframework.io:8080")

    def test_missing_host_never_matches(self) -> None:
        assert not compile_host("www.*").matches(None)
        assert not compile_host("example.com").matches("")

    def test_trailing_wildcard(self) -> None:
        pattern = compile_host("www.*")
        assert pattern.matches("www.springsource.org")
        assert pattern.matches("www.example.com")
        assert not pattern.matches("blog.springsource.org")
        assert not pattern.matches("springframework.io")

    def test_leading_wildcard(self) -> None:
        pattern = compile_host("*.springsource.org")
        assert pattern.matches("blog.springsource.org")
        assert not pattern.matches("springsource.org")

    def test_dots_are_literal(self) -> None:
        assert not compile_host("www.example.com").matches("wwwxexample.com")
        assert not compile_host("*.example.com").matches("fooxexample.com")

    @pytest.mark.parametrize("source", ["", "   ", 42, None, "example.com/path", "bad host"])
    def test_invalid(self, source: object) -> None:
        with pytest.raises(ValueError):
            compile_host(source)


class TestPathPattern:
    def test_default_kind_is_exact(self) -> None:
        pattern = compile_path("/videos")
        assert pattern.kind is MatchKind.EXACT
        assert pattern.match("/videos") == ("/videos",)
        assert pattern.match("/videos/") is None
        assert pattern.match("/videos/x") is None

    def test_caret_means_regex(self) -> None:
        assert compile_path("^/a/(.*)$").kind is MatchKind.REGEX

    def test_prefix_captures_remainder(self) -> None:
        pattern = compile_path("/wp-content/", "prefix")
        assert pattern.groups == 1
        assert pattern.match("/wp-content/uploads/a.zip") == (
            "/wp-content/uploads/a.zip",
            "uploads/a.zip",
        )
        assert pattern.match("/other") is None

    def test_prefix_root_captures_path_without_slash(self) -> None:
        assert compile_path("/", "prefix").match("/something") == ("/something", "something")

    def test_regex_must_match_whole_path(self) -> None:
        pattern = compile_path("/projects/([^/]+)", "regex")
        assert pattern.match("/projects/spring-data") == ("/projects/spring-data", "spring-data")
        assert pattern.match("/projects/spring-data/extra") is None
        assert pattern.match("/old/projects/spring-data") is None

    def test_regex_unmatched_optional_group_is_empty(self) -> None:
        pattern = compile_path("^/a(/b)?$")
        assert pattern.match("/a") == ("/a", "")

    def test_listing_ignores_trailing_slash(self) -> None:
        pattern = compile_path("/guides/gs", "listing")
        assert pattern.match("/guides/gs") is not None
        assert pattern.match("/guides/gs/") is not None
        assert pattern.match("/guides/gs/guide-name") is None

    def test_listing_declared_with_slash(self) -> None:
        pattern = compile_path("/guides/gs/", "listing")
        assert pattern.match("/guides/gs") is not None

    def test_kind_is_case_insensitive(self) -> None:
        assert compile_path("/a", "PREFIX").kind is MatchKind.PREFIX

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="unknown match kind"):
            compile_path("/a", "glob")

    def test_bad_regex(self) -> None:
        with pytest.raises(ValueError, match="invalid path regex"):
            compile_path("^/a/(unclosed$")

    def test_literal_must_be_absolute(self) -> None:
        with pytest.raises(ValueError, match="must start with '/'"):
            compile_path("videos")

    @pytest.mark.parametrize("source", ["", None, 3])
    def test_empty_or_wrong_type(self, source: object) -> None:
        with pytest.raises(ValueError):
            compile_path(source)


class TestTargetTemplate:
    def test_literal(self) -> None:
        target = compile_target("http://www.youtube.com/springsourcedev")
        assert target.max_group == -1
        assert target.render(("/videos",)) == "http://www.youtube.com/springsourcedev"

    def test_placeholders(self) -> None:
        target = compile_target("http://example.com/$2/$1?from=$0")
        assert target.max_group == 2
        assert target.render(("/a/b", "a", "b")) == "http://example.com/b/a?from=/a/b"

    def test_escaped_dollar(self) -> None:
        target = compile_target("/price/$$$1")
        assert target.render(("/x", "5")) == "/price/$5"

    def test_fragment_is_kept(self) -> None:
        assert compile_target("/guides#gs").render(("/guides/gs",)) == "/guides#gs"

    @pytest.mark.parametrize("source", ["/a/$", "/a/$x", "/$/b"])
    def test_dangling_dollar(self, source: str) -> None:
        with pytest.raises(ValueError, match="dangling"):
            compile_target(source)

    def test_empty(self) -> None:
        with pytest.raises(ValueError):
            compile_target("")
