"""Tests for embedded resources."""

from __future__ import annotations

import pytest

from halforms.client.errors import (
    AmbiguousNameError,
    MonovaluedEmbeddedError,
    MultivaluedEmbeddedError,
)
from halforms.hal.parser import parse_hal


@pytest.fixture
def resource(client):
    return parse_hal("https://hal.test/", {
        "_links": {"self": {"href": "/shop/"}},
        "_embedded": {
            "owner": {
                "_links": {"self": {"href": "people/1", "name": "alice"}},
                "name": "Alice",
            },
            "item": [
                {"_links": {"self": {"href": "items/1", "name": "pen"}}, "price": 1},
                {"_links": {"self": {"href": "items/2", "name": "ink"}}, "price": 2},
                {"_links": {"self": {"href": "items/3", "name": "ink"}}, "price": 3},
                {"price": 4},
            ],
            "single": [{"_links": {"self": {"href": "items/9"}}}],
            "none": [],
        },
    }, client)


class TestEmbedded:
    def test_single(self, resource):
        owner = resource.embedded("owner")
        assert owner.rel == "owner"
        assert owner.content == {"name": "Alice"}
        assert owner.self_href() == "https://hal.test/shop/people/1"

    def test_array(self, resource):
        items = resource.embeddeds("item")
        assert [item.content["price"] for item in items] == [1, 2, 3, 4]
        assert all(item.rel == "item" for item in items)

    def test_embedded_without_self_uses_parent_url(self, resource):
        assert resource.embeddeds("item")[3].self_href() == "https://hal.test/shop/"

    def test_cardinality(self, resource):
        with pytest.raises(MultivaluedEmbeddedError, match="Embedded item is multivalued"):
            resource.embedded("item")
        with pytest.raises(MultivaluedEmbeddedError):
            resource.embedded("single")
        with pytest.raises(MonovaluedEmbeddedError, match="Embedded owner is monovalued"):
            resource.embeddeds("owner")

    def test_unknown_and_empty(self, resource):
        assert resource.embedded("nope") is None
        assert resource.embeddeds("nope") is None
        assert resource.embeddeds("none") is None

    def test_all_embedded(self, resource):
        assert len(resource.embeddeds()) == 6

    def test_no_embedded(self, client):
        resource = parse_hal("https://hal.test/", {"a": 1}, client)
        assert resource.embeddeds() is None
        assert resource.embedded("a") is None


class TestEmbeddedNames:
    def test_named_after_self_link(self, resource):
        assert resource.embedded("item", "pen").content == {"price": 1}
        assert resource.embedded("owner", "alice").content == {"name": "Alice"}
        assert resource.embedded("owner", "bob") is None

    def test_filter_by_name(self, resource):
        inks = resource.embeddeds("item", "ink")
        assert [ink.content["price"] for ink in inks] == [2, 3]
        assert resource.embeddeds("item", "nope") is None

    def test_ambiguous_name(self, resource):
        with pytest.raises(AmbiguousNameError):
            resource.embedded("item", "ink")


class TestNesting:
    def test_deeply_nested(self, client):
        resource = parse_hal("https://hal.test/", {
            "_links": {"self": {"href": "/a/"}},
            "_embedded": {
                "b": {
                    "_links": {"self": {"href": "b/"}},
                    "_embedded": {
                        "c": {
                            "_links": {"self": {"href": "c"}, "next": {"href": "d"}},
                            "depth": 3,
                        },
                    },
                },
            },
        }, client)
        c = resource.embedded("b").embedded("c")
        assert c.rel == "c"
        assert c.content == {"depth": 3}
        assert c.self_href() == "https://hal.test/a/b/c"
        assert c.link("next").expand() == "https://hal.test/a/b/d"

    def test_non_object_embedded(self, client):
        resource = parse_hal("https://hal.test/", {"_embedded": {"tags": ["a", "b"]}}, client)
        tags = resource.embeddeds("tags")
        assert [tag.content for tag in tags] == ["a", "b"]
