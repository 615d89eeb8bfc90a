"""Template helpers for generating JavaScript client and server code."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from ..schema import MESSAGE_TYPE_ENUM, MESSAGE_TYPE_STRUCT, MessageField, MethodArgument
from ..types import DataType, VarType
from .registry import TargetOptions

_FIELD_TYPES: dict[DataType, str] = {
    DataType.UINT: "number",
    DataType.UINT8: "number",
    DataType.UINT16: "number",
    DataType.UINT32: "number",
    DataType.UINT64: "number",
    DataType.INT: "number",
    DataType.INT8: "number",
    DataType.INT16: "number",
    DataType.INT32: "number",
    DataType.INT64: "number",
    DataType.FLOAT32: "number",
    DataType.FLOAT64: "number",
    DataType.STRING: "string",
    DataType.TIMESTAMP: "string",
    DataType.NULL: "null",
    DataType.ANY: "any",
    DataType.BYTE: "string",
    DataType.BOOL: "boolean",
}


def field_concrete_type(var_type: VarType) -> str:
    """Class name for a struct type, otherwise an empty string."""
    if var_type.type is DataType.STRUCT:
        return var_type.struct.name
    return ""


def const_path_prefix(name: str) -> str:
    """Name of the path prefix constant of a service."""
    return name + "PathPrefix"


def method_name(name: Any) -> str:
    """Method name with its first letter lower-cased; empty for a non-string."""
    try:
        return downcase_name(name)
    except TypeError:
        return ""


def method_input_name(arg: MethodArgument) -> str:
    """Name of an argument, falling back to its type expression."""
    if arg.name:
        return arg.name
    if arg.type is not None:
        return str(arg.type)
    return ""


def method_inputs(args: Sequence[MethodArgument]) -> str:
    """Parameter list of a client method."""
    inputs = ["args"] if args else []
    inputs.append("headers")
    return ", ".join(inputs)


def is_struct(message_type: str) -> bool:
    """Tell whether a message type is a struct."""
    return message_type == MESSAGE_TYPE_STRUCT


def is_enum(message_type: str) -> bool:
    """Tell whether a message type is an enum."""
    return message_type == MESSAGE_TYPE_ENUM


def exported_field(name: str) -> str:
    """Name with its first letter upper-cased."""
    return name[:1].upper() + name[1:]


def exported_json_field(field: MessageField) -> str:
    """JSON name of a field: its ``json`` meta up to the first comma, else its name."""
    for entry in field.meta or ():
        if "json" in entry:
            value = entry["json"]
            return str(value).split(",")[0]
    return field.name


def downcase_name(name: Any) -> str:
    """Lower-case the first letter of a name."""
    if not isinstance(name, str):
        raise TypeError("downcaseFieldName, unknown arg type")
    return name[:1].lower() + name[1:]


def list_comma(item: int, count: int) -> str:
    """Separator after item ``item`` of ``count``: a comma unless it is the last."""
    return ", " if item + 1 < count else ""


def new_output_arg_response(arg: MethodArgument) -> str:
    """Line building an output argument from the response data."""
    concrete = field_concrete_type(arg.type)
    constructor = f"new {concrete}" if arg.type.type is DataType.STRUCT else ""
    return f"{arg.name}: {constructor}(_data.{arg.name})"


def export_keyword(opts: TargetOptions) -> Callable[[], str]:
    """Return a helper giving ``export `` unless exports are switched off."""

    def keyword() -> str:
        return "" if opts.extra == "noexports" else "export "

    return keyword


def server_service_name(name: str) -> str:
    """Name of the server type of a service."""
    return name[:1].lower() + name[1:] + "Server"


def js_field_type(var_type: VarType) -> str:
    """JavaScript type name of a parsed schema type."""
    if var_type.type is DataType.MAP:
        return "object"
    if var_type.type is DataType.STRUCT:
        return var_type.struct.name
    mapped = _FIELD_TYPES.get(var_type.type)
    if mapped:
        return mapped
    raise ValueError(f"could not represent type: {var_type!r}")


def service_interface_name(name: str) -> str:
    """Interface name of a service."""
    return name


def template_func_map(opts: TargetOptions) -> dict[str, Callable[..., Any]]:
    """Helpers made available to JavaScript templates, by template name."""
    return {
        "constPathPrefix": const_path_prefix,
        "methodName": method_name,
        "methodInputs": method_inputs,
        "isStruct": is_struct,
        "isEnum": is_enum,
        "listComma": list_comma,
        "exportedField": exported_field,
        "exportedJSONField": exported_json_field,
        "newOutputArgResponse": new_output_arg_response,
        "exportKeyword": export_keyword(opts),
        "serverServiceName": server_service_name,
        "jsFieldType": js_field_type,
        "serviceInterfaceName": service_interface_name,
    }