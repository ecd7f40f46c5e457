"""Tests for RelativeUrl."""

from __future__ import annotations

from docrest_representations.urls import RelativeUrl


def test_parameters_are_sorted_and_encoded() -> None:
    url = RelativeUrl.from_string(
        "/colors?page[size]=10&page[number]=1&fields=name,hex"
    )
    assert str(url) == "/colors?fields=name%2Chex&page%5Bnumber%5D=1&page%5Bsize%5D=10"


def test_equivalent_urls_serialize_identically() -> None:
    a = RelativeUrl.from_string("/a?y=2&x=1")
    b = RelativeUrl.from_string("/a?x=1&y=2")
    assert str(a) == str(b) == "/a?x=1&y=2"


def test_repeated_names_keep_their_order() -> None:
    url = RelativeUrl.from_string("/a?b=2&a=1&b=1")
    assert str(url) == "/a?a=1&b=2&b=1"


def test_form_encoding() -> None:
    url = RelativeUrl().set_param("q", "a b~c*d/e")
    assert str(url) == "/?q=a+b%7Ec*d%2Fe"


def test_leading_slash_and_fragment() -> None:
    url = RelativeUrl.from_string("colors#top")
    assert url.path == "/colors"
    assert str(url) == "/colors#top"
    assert str(RelativeUrl.from_string("")) == "/"


def test_blank_values_are_kept() -> None:
    url = RelativeUrl.from_string("/a?fields=")
    assert url.get_param("fields") == ""
    assert str(url) == "/a?fields="


class TestParams:
    url = RelativeUrl.from_string("/cats?a=1&b=2&a=3")

    def test_get_param_returns_first(self) -> None:
        assert self.url.get_param("a") == "1"
        assert self.url.get_param("c") is None

    def test_set_param_replaces_all_occurrences(self) -> None:
        assert self.url.set_param("a", 9).params == (("a", "9"), ("b", "2"))

    def test_set_param_appends(self) -> None:
        assert self.url.set_param("c", "x").get_param("c") == "x"

    def test_remove_param(self) -> None:
        assert self.url.remove_param("a").params == (("b", "2"),)

    def test_only_keep_params(self) -> None:
        assert self.url.only_keep_params(["b"]).params == (("b", "2"),)

    def test_clear_params(self) -> None:
        assert str(self.url.clear_params()) == "/cats"

    def test_instances_are_immutable(self) -> None:
        self.url.set_param("a", 0)
        assert self.url.get_param("a") == "1"


def test_append_path_quotes_segment() -> None:
    url = RelativeUrl.from_string("/cats?fields=name").clear_params()
    assert str(url.append_path("a b/c")) == "/cats/a%20b%2Fc"
    assert str(url.append_path(12)) == "/cats/12"


def test_from_string_accepts_instances() -> None:
    url = RelativeUrl.from_string("/x")
    assert RelativeUrl.from_string(url) is url
