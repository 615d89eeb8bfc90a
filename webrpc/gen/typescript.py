"""Template helpers for generating TypeScript client and server code."""

from __future__ import annotations

from typing import Any, Callable

from ..schema import (
    MESSAGE_TYPE_ENUM,
    MESSAGE_TYPE_STRUCT,
    Method,
    MessageField,
    MethodArgument,
)
from ..types import DataType, VarType

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


def _mapped_type(var_type: VarType) -> str:
    mapped = _FIELD_TYPES.get(var_type.type)
    if mapped:
        return mapped
    raise ValueError(f"could not represent type: {var_type!r}")


def js_field_type(var_type: VarType) -> str:
    """Loose TypeScript type name, with maps as ``object``."""
    if var_type.type is DataType.MAP:
        return "object"
    if var_type.type is DataType.LIST:
        return field_type(var_type.list.elem) + "[]"
    if var_type.type is DataType.STRUCT:
        return var_type.struct.name
    return _mapped_type(var_type)


def field_type(var_type: VarType) -> str:
    """TypeScript type spelling of a parsed schema type."""
    if var_type.type is DataType.MAP:
        key = _FIELD_TYPES.get(var_type.map.key)
        if key is None:
            raise ValueError(f"unknown type mapping {var_type.map.key}")
        return f"{{[key: {key}]: {field_type(var_type.map.value)}}}"
    if var_type.type is DataType.LIST:
        return "Array<" + field_type(var_type.list.elem) + ">"
    if var_type.type is DataType.STRUCT:
        return var_type.struct.name
    return _mapped_type(var_type)


def const_path_prefix(name: str) -> str:
    """Name of the path prefix constant of a service."""
    return name + "PathPrefix"


def method_input_name(arg: MethodArgument) -> str:
    """Name of an argument, falling back to its type expression."""
    if arg.name:
        return arg.name
    if arg.type is not None:
        return str(arg.type)
    return ""


def method_input_type(arg: MethodArgument) -> str:
    """TypeScript type of an argument, empty when it cannot be represented."""
    try:
        return field_type(arg.type)
    except ValueError:
        return ""


def _interface_name(method: Method, suffix: str) -> str:
    services = method.service.schema.services or []
    if len(services) == 1:
        return f"{method.name}{suffix}"
    return f"{method.service.name}{method.name}{suffix}"


def method_argument_input_interface_name(method: Method) -> str:
    """Interface name of a method's arguments, prefixed by the service if several."""
    return _interface_name(method, "Args")


def method_argument_output_interface_name(method: Method) -> str:
    """Interface name of a method's results, prefixed by the service if several."""
    return _interface_name(method, "Return")


def method_inputs(method: Method) -> str:
    """Parameter list of a client method."""
    inputs = []
    if method.inputs:
        inputs.append(f"args: {method_argument_input_interface_name(method)}")
    inputs.append("headers?: object")
    return ", ".join(inputs)


def method_outputs(method: Method) -> str:
    """Return type of a client method."""
    return f"Promise<{method_argument_output_interface_name(method)}>"


def method_name(name: Any) -> str:
    """Method name with its first letter lower-cased; empty for a non-string."""
    try:
        return downcase_name(name)
    except TypeError:
        return ""


def is_struct(message_type: str) -> bool:
    """Tell whether a message type is a struct."""
    return message_type == MESSAGE_TYPE_STRUCT


def is_enum(message_type: str) -> bool:
    """Tell whether a message type is an enum."""
    return message_type == MESSAGE_TYPE_ENUM


def _plain_name(name: Any) -> str:
    return str(name)


def exported_field(name: str) -> str:
    """Exported name of a field, spelled as written in the schema."""
    return _plain_name(name)


def exportable_field(field: MessageField) -> bool:
    """Tell whether a field is serialised, i.e. its ``json`` meta is not ``-``."""
    return not any(
        entry.get("json") == "-" for entry in field.meta or () if "json" in entry
    )


def exported_json_field(field: MessageField) -> str:
    """JSON name of a field: its ``json`` meta up to the first comma, else its name."""
    for entry in field.meta or ():
        if "json" in entry:
            return str(entry["json"]).split(",")[0]
    return field.name


def interface_name(name: str) -> str:
    """Interface name of a message, spelled as written in the schema."""
    return _plain_name(name)


def downcase_name(name: Any) -> str:
    """Lower-case the first letter of a name."""
    if not isinstance(name, str):
        raise TypeError("downcaseFieldName, unknown arg type")
    return name[:1].lower() + name[1:]


def list_comma(item: int, count: int) -> str:
    """Separator after item ``item`` of ``count``: a comma unless it is the last."""
    remaining = count - item - 1
    if remaining > 0:
        return ", "
    return ""


def service_interface_name(name: str) -> str:
    """Interface name of a service, spelled as written in the schema."""
    return _plain_name(name)


def new_output_arg_response(arg: MethodArgument) -> str:
    """Line casting an output argument from the response data."""
    spelled = field_type(arg.type)
    return f"{arg.name}: <{spelled}>(_data.{arg.name})"


def server_service_name(name: str) -> str:
    """Name of the server type of a service."""
    return name[:1].lower() + name[1:] + "Server"


def method_arg_type(arg: MethodArgument) -> str:
    """Type of an argument, prefixed with ``*`` when optional and scalar."""
    spelled = field_type(arg.type)
    prefix = "*" if arg.optional else ""
    if arg.type.type in (DataType.STRUCT, DataType.LIST, DataType.MAP):
        prefix = ""
    return prefix + spelled


def template_func_map() -> dict[str, Callable[..., Any]]:
    """Helpers made available to TypeScript templates, by template name."""
    return {
        "fieldType": field_type,
        "constPathPrefix": const_path_prefix,
        "interfaceName": interface_name,
        "methodName": method_name,
        "methodInputs": method_inputs,
        "methodOutputs": method_outputs,
        "methodArgumentInputInterfaceName": method_argument_input_interface_name,
        "methodArgumentOutputInterfaceName": method_argument_output_interface_name,
        "isStruct": is_struct,
        "isEnum": is_enum,
        "listComma": list_comma,
        "serviceInterfaceName": service_interface_name,
        "exportableField": exportable_field,
        "exportedField": exported_field,
        "exportedJSONField": exported_json_field,
        "newOutputArgResponse": new_output_arg_response,
        "downcaseName": downcase_name,
        "serverServiceName": server_service_name,
        "methodArgType": method_arg_type,
        "jsFieldType": js_field_type,
    }