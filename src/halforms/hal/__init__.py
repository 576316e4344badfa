"""HAL-FORMS document model."""

from halforms.hal.cardinality import Many, One
from halforms.hal.link import Link
from halforms.hal.parser import empty_resource, parse_hal
from halforms.hal.resource import Resource
from halforms.hal.template import Property, PropertyType, Template

__all__ = [
    "Link",
    "Many",
    "One",
    "Property",
    "PropertyType",
    "Resource",
    "Template",
    "empty_resource",
    "parse_hal",
]
