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
from typing import Optional

__all__ = (
    "PyTMJException",
    "MalformedDocument",
    "UnknownLayerType",
    "DecodeError",
    "InvalidEncoding",
    "UnsupportedCompression",
    "CorruptData",
    "SizeMismatch",
)


class PyTMJException(Exception):
    """Base class for every error raised while loading a map."""


class MalformedDocument(PyTMJException):
    """The document is not JSON, or a required field is missing or mistyped."""


class UnknownLayerType(PyTMJException):
    """A layer declared a ``type`` that is not one of the four layer shapes."""

    def __init__(self, declared_type: str, id: Optional[int], name: str) -> None:
        self.declared_type = declared_type
        self.id = id
        self.name = name
        super().__init__(
            "invalid layer type {} (id: {}, name: {})".format(
                declared_type, "nil" if id is None else id, name
            )
        )


class DecodeError(PyTMJException):
    """Tile layer data could not be decoded.

    Carries the name and, if the layer has one, the id of the layer
    that owns the data.

    """

    reason = "cannot decode tile data"

    def __init__(self, layer_name: str, layer_id: Optional[int] = None) -> None:
        self.layer_name = layer_name
        self.layer_id = layer_id
        super().__init__(self._message())

    def _message(self) -> str:
        if self.layer_id is None:
            return '{} of tilelayer named: "{}"'.format(self.reason, self.layer_name)
        return '{} of tilelayer named: "{}" (id: {})'.format(
            self.reason, self.layer_name, self.layer_id
        )


class InvalidEncoding(DecodeError):
    reason = "cannot decode base64 string"


class UnsupportedCompression(DecodeError):
    def __init__(
        self, layer_name: str, scheme: str, layer_id: Optional[int] = None
    ) -> None:
        self.scheme = scheme
        self.reason = "unsupported compression {}".format(scheme)
        super().__init__(layer_name, layer_id)


class CorruptData(DecodeError):
    reason = "invalid compressed data"


class SizeMismatch(DecodeError):
    def __init__(
        self,
        layer_name: str,
        expected: int,
        actual: int,
        layer_id: Optional[int] = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        self.reason = "corrupted data ({} bytes, expected {})".format(actual, expected)
        super().__init__(layer_name, layer_id)
