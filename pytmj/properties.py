"""
Copyright (C) 2012-2023, Leif Theden <leif.theden@gmail.com>

This file is part of pytmj.

pytmj is free software: you can redistribute it and/or modify
it under the terms of the GNU Lesser General Public License as
published by the Free Software Foundation, either version 3 of the
License, or (at your option) any later version.

pytmj is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with pytmj.  If not, see <https://www.gnu.org/licenses/>.

"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .color import Color
from .utils import REQUIRED, as_str, getdefault

__all__ = (
    "PropertyType",
    "Property",
    "HasProperties",
    "resolve_property_value",
    "parse_properties",
)

logger = logging.getLogger(__name__)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

PropertyValue = Union[str, int, float, bool, Color]


class PropertyType(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    COLOR = "color"
    FILE = "file"

    def __str__(self) -> str:
        return self.value


def resolve_property_value(raw: Any, declared_type: str) -> Tuple[PropertyType, Any]:
    """Reconcile a JSON property value with its declared type name.

    JSON typing alone is ambiguous: ``5`` may be a float property, and a
    string may be a file name or a color.  Every input maps to a value;
    mistyped author data degrades instead of failing the load.

    Args:
        raw (Any): value as decoded from JSON.
        declared_type (str): the property's "type" field.

    Returns:
        Tuple[PropertyType, Any]: the resolved tag and value.

    """
    # bool first: it is a subclass of int
    if isinstance(raw, bool):
        return PropertyType.BOOL, raw

    if isinstance(raw, Color):
        return PropertyType.COLOR, raw

    if isinstance(raw, int):
        if declared_type == PropertyType.FLOAT.value:
            return PropertyType.FLOAT, float(raw)
        if INT32_MIN <= raw <= INT32_MAX:
            return PropertyType.INT, raw
        return PropertyType.FLOAT, float(raw)

    if isinstance(raw, float):
        return PropertyType.FLOAT, raw

    if isinstance(raw, str):
        if declared_type == PropertyType.STRING.value:
            return PropertyType.STRING, raw
        if declared_type == PropertyType.FILE.value:
            return PropertyType.FILE, raw
        if declared_type != PropertyType.COLOR.value:
            logger.info(
                "Type %s Not a built-in string type. Reading as color.", declared_type
            )
        return PropertyType.COLOR, Color.from_hex(raw)

    logger.info("Property value %r cannot be typed. Storing as string.", raw)
    return PropertyType.STRING, json.dumps(raw)


@dataclass(frozen=True)
class Property:
    """A named, typed value attached to a map, layer, tileset, tile or object."""

    name: str
    type: PropertyType
    value: PropertyValue

    def type_as_string(self) -> str:
        return self.type.value

    def _get(self, kind: PropertyType) -> Optional[PropertyValue]:
        if self.type is kind:
            return self.value
        return None

    def get_string(self) -> Optional[str]:
        return self._get(PropertyType.STRING)

    def get_int(self) -> Optional[int]:
        return self._get(PropertyType.INT)

    def get_float(self) -> Optional[float]:
        return self._get(PropertyType.FLOAT)

    def get_bool(self) -> Optional[bool]:
        return self._get(PropertyType.BOOL)

    def get_color(self) -> Optional[Color]:
        return self._get(PropertyType.COLOR)

    def get_file(self) -> Optional[str]:
        return self._get(PropertyType.FILE)


class HasProperties:
    """Property lookups for anything with a ``properties`` list."""

    properties: List[Property]

    def get_property(self, name: str) -> Optional[Property]:
        """Find a property by name.

        Args:
            name (str): The property's name. Case-sensitive!

        Returns:
            Optional[Property]: The first property with that name, or None.

        """
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def get_property_value(self, name: str) -> Optional[PropertyValue]:
        prop = self.get_property(name)
        if prop is None:
            return None
        return prop.value

    def properties_as_dict(self) -> Dict[str, PropertyValue]:
        return {prop.name: prop.value for prop in self.properties}


def parse_properties(items: Optional[List[Dict]]) -> List[Property]:
    """Build the property list of an element.

    Args:
        items (Optional[List[Dict]]): the element's "properties" array.

    Returns:
        List[Property]: resolved properties, in document order.

    """
    properties = list()
    for item in items or ():
        get = getdefault(item, "property")
        name = get("name", as_str, REQUIRED)
        declared_type = get("type", as_str, PropertyType.STRING.value)
        kind, value = resolve_property_value(get("value", None, REQUIRED), declared_type)
        properties.append(Property(name, kind, value))
    return properties
