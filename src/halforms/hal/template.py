"""HAL-FORMS templates and their properties."""

from __future__ import annotations

import logging
import re
import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
    model_validator,
)

from halforms.config.constants import DEFAULT_CONTENT_TYPE, DEFAULT_METHOD
from halforms.hal.link import bound_client, truthy_flag

if TYPE_CHECKING:
    from halforms.client.hal_client import HalClient
    from halforms.client.response import HalResponse

logger = logging.getLogger(__name__)

PropertyType = Literal[
    "hidden",
    "text",
    "textarea",
    "search",
    "tel",
    "url",
    "email",
    "password",
    "date",
    "month",
    "week",
    "time",
    "datetime-local",
    "number",
    "range",
    "color",
]

PROPERTY_TYPES: tuple[str, ...] = get_args(PropertyType)


class Property(BaseModel):
    """A parameter of a template, with the metadata needed to render a form field.

    Constraints (``required``, ``regex``, ...) are exposed as-is; nothing here
    checks submitted values against them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    name: str
    type: PropertyType = "text"
    prompt: str
    read_only: bool = Field(default=False, alias="readOnly")
    required: bool = False
    templated: bool = False
    regex: re.Pattern[str] | None = None
    value: Any = None

    @model_validator(mode="before")
    @classmethod
    def default_prompt(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("prompt") is None:
            data = {**data, "prompt": data.get("name")}
        return data

    @field_validator("type", mode="before")
    @classmethod
    def known_type(cls, v: Any) -> str:
        if isinstance(v, str) and v.lower() in PROPERTY_TYPES:
            return v.lower()
        return "text"

    @field_validator("read_only", "required", "templated", mode="before")
    @classmethod
    def coerce_flag(cls, v: Any) -> bool:
        return truthy_flag(v)

    @field_validator("regex", mode="before")
    @classmethod
    def compile_regex(cls, v: Any, info: ValidationInfo) -> re.Pattern[str] | None:
        if v is None or isinstance(v, re.Pattern):
            return v
        try:
            return re.compile(v)
        except (re.error, TypeError) as exc:
            logger.warning(
                "Ignoring regex of property %s: %r is not a valid pattern (%s)",
                info.data.get("name"),
                v,
                exc,
            )
            return None


class Template(BaseModel):
    """An action (method, content type, target, properties) bound to a resource.

    ``resolved_url`` is the absolute URL the template is invoked against,
    computed when the document was parsed. ``target`` keeps the raw value
    from the document, which may name one of the resource links or be a URI.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)

    rel: str
    resolved_url: str
    content_type: str = Field(default=DEFAULT_CONTENT_TYPE, alias="contentType")
    method: str = DEFAULT_METHOD
    target: str | None = None
    title: str | None = None
    properties: tuple[Property, ...] = ()

    _client_ref: Any = PrivateAttr(default=None)

    def model_post_init(self, context: Any) -> None:
        client = context.get("client") if isinstance(context, dict) else None
        if client is not None:
            self._client_ref = weakref.ref(client)

    @property
    def key(self) -> str:
        """Key of the template in ``_templates``, same as ``rel``."""
        return self.rel

    def property(self, name: str) -> Property | None:
        """Return the first property called *name*."""
        return next((p for p in self.properties if p.name == name), None)

    def invoke(
        self,
        payload: Any = None,
        client: HalClient | None = None,
    ) -> HalResponse:
        """Send *payload* to ``resolved_url`` using this template's method.

        The ``Content-Type`` header is set from ``content_type`` except for
        multipart requests, whose boundary is generated by httpx.
        """
        client = bound_client(self._client_ref, client, f"template {self.key}")
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        multipart = media_type.startswith("multipart/")
        headers = {} if multipart else {"content-type": self.content_type}
        body: dict[str, Any] = {}
        if payload is None:
            pass
        elif multipart and isinstance(payload, Mapping):
            body["files"] = payload
        elif media_type == "application/json" and isinstance(payload, (dict, list)):
            body["json"] = payload
        elif media_type == "application/x-www-form-urlencoded" and isinstance(payload, Mapping):
            body["data"] = payload
        else:
            body["content"] = payload
        return client.fetch(self.resolved_url, method=self.method, headers=headers, **body)
