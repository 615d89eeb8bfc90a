"""Data types and type expressions used by webrpc schemas."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class SchemaError(ValueError):
    """Raised when a schema or one of its type expressions is invalid."""


class DataType(Enum):
    """Core data types a schema field or argument can have."""

    UNKNOWN = 0
    NULL = 1
    ANY = 2
    BYTE = 3
    BOOL = 4
    UINT = 5
    UINT8 = 6
    UINT16 = 7
    UINT32 = 8
    UINT64 = 9
    INT = 10
    INT8 = 11
    INT16 = 12
    INT32 = 13
    INT64 = 14
    FLOAT32 = 15
    FLOAT64 = 16
    STRING = 17
    TIMESTAMP = 18
    LIST = 19
    MAP = 20
    PRIMITIVE = 21
    STRUCT = 22

    def __str__(self) -> str:
        return _TYPE_NAMES.get(self, "")

    @classmethod
    def from_string(cls, name: str) -> "DataType":
        """Return the data type spelled ``name``, or UNKNOWN if there is none."""
        return _TYPES_BY_NAME.get(name, cls.UNKNOWN)


_TYPE_NAMES: dict[DataType, str] = {
    DataType.NULL: "null",
    DataType.ANY: "any",
    DataType.BYTE: "byte",
    DataType.BOOL: "bool",
    DataType.UINT: "uint",
    DataType.UINT8: "uint8",
    DataType.UINT16: "uint16",
    DataType.UINT32: "uint32",
    DataType.UINT64: "uint64",
    DataType.INT: "int",
    DataType.INT8: "int8",
    DataType.INT16: "int16",
    DataType.INT32: "int32",
    DataType.INT64: "int64",
    DataType.FLOAT32: "float32",
    DataType.FLOAT64: "float64",
    DataType.STRING: "string",
    DataType.TIMESTAMP: "timestamp",
    DataType.MAP: "map",
    DataType.LIST: "[]",
}

_TYPES_BY_NAME: dict[str, DataType] = {name: dt for dt, name in _TYPE_NAMES.items()}

VAR_INTEGER_DATA_TYPES: tuple[DataType, ...] = (
    DataType.UINT,
    DataType.UINT8,
    DataType.UINT16,
    DataType.UINT32,
    DataType.UINT64,
    DataType.INT,
    DataType.INT8,
    DataType.INT16,
    DataType.INT32,
    DataType.INT64,
)

VAR_KEY_DATA_TYPES: tuple[DataType, ...] = (DataType.STRING,) + VAR_INTEGER_DATA_TYPES

_LIST_PREFIX = "[]"
_MAP_KEYWORD = "map"

_NAME_PATTERN = re.compile(r"[a-zA-Z]+[a-zA-Z0-9_]*")


@dataclass
class VarListType:
    """Element type of a list."""

    elem: "VarType"


@dataclass
class VarMapType:
    """Key and value types of a map."""

    key: DataType
    value: "VarType"


@dataclass
class VarStructType:
    """Reference to a message defined in the schema."""

    name: str
    message: Any = None


@dataclass
class VarType:
    """A parsed type expression such as ``[]map<string,User>``."""

    expr: str = ""
    type: DataType = DataType.UNKNOWN
    list: Optional[VarListType] = None
    map: Optional[VarMapType] = None
    struct: Optional[VarStructType] = None

    def __str__(self) -> str:
        return self.expr

    def parse(self, schema: Any) -> None:
        """Resolve the expression against ``schema`` and normalise it."""
        if not self.expr:
            raise SchemaError("schema error: type expr cannot be empty")
        parsed = parse_var_type_expr(schema, self.expr)
        self.type = parsed.type
        self.list = parsed.list
        self.map = parsed.map
        self.struct = parsed.struct
        self.expr = _build_expr(self)

    def to_json(self) -> str:
        """Return the JSON form of the type, its expression string."""
        return self.expr

    @classmethod
    def from_json(cls, value: Any) -> "VarType":
        """Build an unparsed type from its JSON string form."""
        if not isinstance(value, str):
            raise SchemaError("json error: string value is expected")
        if not value:
            raise SchemaError("json error: type cannot be empty")
        return cls(expr=value)


def parse_var_type_expr(schema: Any, expr: str) -> VarType:
    """Parse a type expression, resolving message names through ``schema``."""
    vt = VarType(expr=expr)
    if not expr:
        return vt

    data_type = DataType.from_string(expr)
    if data_type is DataType.UNKNOWN:
        if _is_list_expr(expr):
            data_type = DataType.LIST
        elif _is_map_expr(expr):
            data_type = DataType.MAP
    vt.type = data_type

    if data_type is DataType.LIST:
        vt.list = VarListType(elem=parse_var_type_expr(schema, expr[len(_LIST_PREFIX):]))
    elif data_type is DataType.MAP:
        key, value = _parse_map_expr(expr)
        key_type = DataType.from_string(key)
        if key_type is DataType.UNKNOWN:
            raise SchemaError(
                f"schema error: invalid map key type '{key}' for expr '{expr}'"
            )
        vt.map = VarMapType(key=key_type, value=parse_var_type_expr(schema, value))
    elif data_type is DataType.UNKNOWN:
        message = _find_message(schema, expr)
        if message is None:
            raise SchemaError(f"schema error: invalid struct/message type '{expr}'")
        vt.type = DataType.STRUCT
        vt.struct = VarStructType(name=expr, message=message)

    return vt


def _parse_map_expr(expr: str) -> tuple[str, str]:
    if not _is_map_expr(expr):
        raise SchemaError(f"schema error: invalid map expr for '{expr}'")

    body = expr[len(_MAP_KEYWORD):]
    if not body.startswith("<") or not body.endswith(">"):
        raise SchemaError(f"schema error: invalid map syntax for '{body}'")
    body = body[1:-1]

    key, sep, value = body.partition(",")
    if not sep:
        raise SchemaError(f"schema error: invalid map syntax for '{body}'")
    if not is_valid_var_type(key, VAR_KEY_DATA_TYPES):
        raise SchemaError(f"schema error: invalid map key '{key}' for '{body}'")
    return key, value


def _build_expr(vt: VarType) -> str:
    if vt.type is DataType.UNKNOWN:
        return "<unknown>"
    if vt.type is DataType.LIST:
        return "[]" + _build_expr(vt.list.elem)
    if vt.type is DataType.MAP:
        return f"map<{vt.map.key},{_build_expr(vt.map.value)}>"
    if vt.type is DataType.STRUCT:
        return vt.struct.name
    return str(vt.type)


def _is_list_expr(expr: str) -> bool:
    return expr.startswith(_LIST_PREFIX)


def _is_map_expr(expr: str) -> bool:
    return expr.startswith(_MAP_KEYWORD + "<")


def _find_message(schema: Any, name: str) -> Any:
    for message in getattr(schema, "messages", None) or ():
        if str(message.name) == name:
            return message
    return None


def is_valid_arg_name(name: str) -> bool:
    """Tell whether ``name`` may be used as a field or argument name."""
    return _NAME_PATTERN.fullmatch(name) is not None


def is_valid_var_type(name: str, allowed: Iterable[DataType]) -> bool:
    """Tell whether ``name`` spells one of the ``allowed`` data types."""
    data_type = DataType.from_string(name)
    if data_type is DataType.UNKNOWN:
        return False
    return data_type in tuple(allowed)


def title_downcase(name: str) -> str:
    """Lower-case the first letter: ``FirstName`` becomes ``firstName``."""
    return name[:1].lower() + name[1:]


def title_upcase(name: str) -> str:
    """Upper-case the first letter: ``firstName`` becomes ``FirstName``."""
    return name[:1].upper() + name[1:]