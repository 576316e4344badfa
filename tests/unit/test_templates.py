"""Tests for templates and their properties."""

from __future__ import annotations

import json
import logging

import httpx
import pytest
import respx

from halforms.client.errors import MissingClientError
from halforms.client.hal_client import HalClient
from halforms.hal.parser import parse_hal
from halforms.hal.template import Property, Template


def _with_templates(templates, links=None):
    return {
        "_links": links or {"self": {"href": "/orders/"}},
        "_templates": templates,
    }


class TestTemplateParsing:
    def test_defaults(self, client):
        resource = parse_hal("https://hal.test/", _with_templates({"default": {}}), client)
        template = resource.template("default")
        assert template.key == "default"
        assert template.rel == "default"
        assert template.method == "GET"
        assert template.content_type == "application/json"
        assert template.target is None
        assert template.title is None
        assert template.properties == ()
        assert template.resolved_url == "https://hal.test/orders/"

    def test_all_attributes(self, client):
        resource = parse_hal("https://hal.test/", _with_templates({
            "create": {
                "title": "Create an order",
                "method": "POST",
                "contentType": "application/x-www-form-urlencoded",
                "target": "/orders/new",
            },
        }), client)
        template = resource.template("create")
        assert template.title == "Create an order"
        assert template.method == "POST"
        assert template.content_type == "application/x-www-form-urlencoded"
        assert template.target == "/orders/new"
        assert template.resolved_url == "https://hal.test/orders/new"

    def test_target_naming_a_link(self, client):
        resource = parse_hal("https://hal.test/", _with_templates(
            {"edit": {"target": "edit-form"}},
            links={"self": {"href": "/orders/"}, "edit-form": {"href": "42/edit"}},
        ), client)
        template = resource.template("edit")
        assert template.target == "edit-form"
        assert template.resolved_url == "https://hal.test/orders/42/edit"

    def test_target_naming_an_array_link(self, client):
        resource = parse_hal("https://hal.test/", _with_templates(
            {"edit": {"target": "item"}},
            links={"self": {"href": "/orders/"}, "item": [{"href": "1"}, {"href": "2"}]},
        ), client)
        assert resource.template("edit").resolved_url == "https://hal.test/orders/1"

    def test_relative_target(self, client):
        resource = parse_hal("https://hal.test/", _with_templates({"t": {"target": "search"}}), client)
        assert resource.template("t").resolved_url == "https://hal.test/orders/search"

    def test_templates_of_embedded_resource(self, client):
        resource = parse_hal("https://hal.test/", {
            "_links": {"self": {"href": "/orders/"}},
            "_embedded": {
                "order": {
                    "_links": {"self": {"href": "42"}},
                    "_templates": {"default": {"method": "DELETE"}},
                },
            },
        }, client)
        template = resource.embedded("order").template("default")
        assert template.method == "DELETE"
        assert template.resolved_url == "https://hal.test/orders/42"
        assert resource.templates() is None

    def test_templates_listing(self, client):
        resource = parse_hal("https://hal.test/", _with_templates({
            "default": {},
            "delete": {"method": "DELETE"},
            "skipped": None,
        }), client)
        assert [t.key for t in resource.templates()] == ["default", "delete"]
        assert resource.template("skipped") is None
        assert resource.template("nope") is None


class TestProperties:
    def test_defaults(self):
        prop = Property.model_validate({"name": "title"})
        assert prop.name == "title"
        assert prop.prompt == "title"
        assert prop.type == "text"
        assert prop.read_only is False
        assert prop.required is False
        assert prop.templated is False
        assert prop.regex is None
        assert prop.value is None

    def test_all_attributes(self):
        prop = Property.model_validate({
            "name": "email",
            "prompt": "Your e-mail",
            "type": "email",
            "readOnly": True,
            "required": "true",
            "templated": True,
            "regex": "^.+@.+$",
            "value": "me@hal.test",
        })
        assert prop.prompt == "Your e-mail"
        assert prop.type == "email"
        assert prop.read_only is True
        assert prop.required is True
        assert prop.templated is True
        assert prop.regex.match("a@b")
        assert not prop.regex.match("ab")
        assert prop.value == "me@hal.test"

    @pytest.mark.parametrize("raw, expected", [
        (True, True),
        ("true", True),
        ("false", False),
        (False, False),
        (0, False),
        (1, False),
        ("yes", False),
    ])
    def test_required_flag(self, raw, expected):
        assert Property.model_validate({"name": "p", "required": raw}).required is expected

    @pytest.mark.parametrize("raw, expected", [
        ("number", "number"),
        ("DATETIME-LOCAL", "datetime-local"),
        ("checkbox", "text"),
        (42, "text"),
    ])
    def test_type(self, raw, expected):
        assert Property.model_validate({"name": "p", "type": raw}).type == expected

    def test_invalid_regex_is_dropped(self, caplog):
        with caplog.at_level(logging.WARNING, logger="halforms.hal.template"):
            prop = Property.model_validate({"name": "p", "regex": "(unclosed"})
        assert prop.regex is None
        assert "Ignoring regex of property p" in caplog.text

    def test_parsed_from_template(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="halforms.hal.parser"):
            resource = parse_hal("https://hal.test/", _with_templates({
                "default": {
                    "properties": [
                        {"name": "title", "required": True},
                        {"prompt": "nameless"},
                        {"name": "title", "prompt": "Second title"},
                        {"name": "size", "type": "number", "value": None},
                    ],
                },
            }), client)
        template = resource.template("default")
        assert [p.name for p in template.properties] == ["title", "title", "size"]
        assert template.property("title").required is True
        assert template.property("title").prompt == "title"
        assert template.property("size").type == "number"
        assert template.property("nope") is None
        assert "Ignoring property of template default since it has no name" in caplog.text


class TestInvoke:
    @respx.mock
    def test_default_get(self, client):
        route = respx.get("https://hal.test/orders/").mock(
            return_value=httpx.Response(200, json={"ok": True})
        )
        resource = parse_hal("https://hal.test/", _with_templates({"default": {}}), client)
        response = resource.template("default").invoke()
        assert response.status_code == 200
        request = route.calls.last.request
        assert request.headers["content-type"] == "application/json"
        assert request.content == b""

    @respx.mock
    def test_json_body(self, client):
        route = respx.post("https://hal.test/orders/").mock(
            return_value=httpx.Response(201, json={"id": 1})
        )
        resource = parse_hal("https://hal.test/", _with_templates({
            "create": {"method": "POST"},
        }), client)
        resource.template("create").invoke({"total": 10})
        request = route.calls.last.request
        assert request.method == "POST"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"total": 10}

    @respx.mock
    def test_form_body(self, client):
        route = respx.put("https://hal.test/orders/").mock(return_value=httpx.Response(204))
        resource = parse_hal("https://hal.test/", _with_templates({
            "update": {"method": "PUT", "contentType": "application/x-www-form-urlencoded"},
        }), client)
        response = resource.template("update").invoke({"status": "shipped"})
        request = route.calls.last.request
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert request.content == b"status=shipped"
        assert response.hal().content is None

    @respx.mock
    def test_raw_body(self, client):
        route = respx.post("https://hal.test/orders/").mock(return_value=httpx.Response(200, json={}))
        resource = parse_hal("https://hal.test/", _with_templates({
            "upload": {"method": "POST", "contentType": "text/plain"},
        }), client)
        resource.template("upload").invoke("hello")
        request = route.calls.last.request
        assert request.headers["content-type"] == "text/plain"
        assert request.content == b"hello"

    @respx.mock
    def test_multipart_lets_httpx_set_boundary(self, client):
        route = respx.post("https://hal.test/orders/").mock(return_value=httpx.Response(200, json={}))
        resource = parse_hal("https://hal.test/", _with_templates({
            "attach": {"method": "POST", "contentType": "multipart/form-data"},
        }), client)
        resource.template("attach").invoke({"file": ("a.txt", b"content", "text/plain")})
        request = route.calls.last.request
        assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
        assert b"content" in request.content

    @respx.mock
    def test_accept_header_is_sent(self, client):
        route = respx.post("https://hal.test/orders/").mock(return_value=httpx.Response(200, json={}))
        resource = parse_hal("https://hal.test/", _with_templates({"c": {"method": "POST"}}), client)
        resource.template("c").invoke({})
        assert route.calls.last.request.headers["accept"] == (
            "application/prs.hal-forms+json;q=1, application/hal+json;q=0.9"
        )

    @respx.mock
    def test_invoke_with_other_client(self, client):
        respx.post("https://hal.test/orders/").mock(return_value=httpx.Response(200, json={}))
        seen = []

        def record(params):
            seen.append(params.request.method)
            return params.next(params.request)

        resource = parse_hal("https://hal.test/", _with_templates({"c": {"method": "POST"}}), client)
        with HalClient("https://other.test/") as other:
            other.append_filter(record)
            resource.template("c").invoke({}, client=other)
        assert seen == ["POST"]

    def test_invoke_without_client(self):
        template = Template(rel="default", resolved_url="https://hal.test/")
        with pytest.raises(MissingClientError, match="template default"):
            template.invoke()


class TestNonStringMetadata:
    def test_numeric_metadata_keeps_template_and_property(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="halforms.hal.parser"):
            resource = parse_hal("https://hal.test/", _with_templates({
                "default": {
                    "method": "POST",
                    "target": 5,
                    "title": 7,
                    "properties": [{"name": "qty", "prompt": 3}],
                },
            }), client)
        template = resource.template("default")
        assert template is not None
        assert template.target == "5"
        assert template.title == "7"
        assert template.resolved_url == "https://hal.test/orders/"
        assert template.property("qty").prompt == "3"
        assert "Ignoring" not in caplog.text
