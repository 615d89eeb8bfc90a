"""Schema model of a webrpc API: messages, services, validation and JSON form."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar, Union

from .types import (
    VAR_INTEGER_DATA_TYPES,
    DataType,
    SchemaError,
    VarType,
    is_valid_arg_name,
    is_valid_var_type,
)

VERSION = "v1"

MESSAGE_TYPE_ENUM = "enum"
MESSAGE_TYPE_STRUCT = "struct"

_T = TypeVar("_T")


def _parse_type(var_type: Optional[VarType], schema: "WebRPCSchema") -> None:
    if var_type is None:
        raise SchemaError("schema error: type expr cannot be empty")
    var_type.parse(schema)


def _type_json(var_type: Optional[VarType]) -> Optional[str]:
    return None if var_type is None else var_type.to_json()


@dataclass
class MessageField:
    """One field of a message; enum fields carry a value."""

    name: str = ""
    type: Optional[VarType] = None
    optional: bool = False
    value: str = ""
    meta: Optional[list[dict[str, Any]]] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": _type_json(self.type),
            "optional": self.optional,
            "value": self.value,
            "meta": None if self.meta is None else [dict(m) for m in self.meta],
        }


@dataclass
class Message:
    """A struct or enum definition."""

    name: str = ""
    type: str = ""
    fields: Optional[list[MessageField]] = None
    enum_type: Optional[VarType] = field(default=None, repr=False, compare=False)

    def parse(self, schema: "WebRPCSchema") -> None:
        """Validate the message against ``schema`` and resolve its field types."""
        msg_name = self.name
        if not msg_name:
            raise SchemaError("schema error: message name cannot be empty")

        lowered = msg_name.lower()
        for other in schema.messages or ():
            if other is not self and other.name.lower() == lowered:
                raise SchemaError(
                    f"schema error: duplicate message type detected, '{msg_name}'"
                )

        if self.type not in (MESSAGE_TYPE_ENUM, MESSAGE_TYPE_STRUCT):
            raise SchemaError(
                f"schema error: message type must be 'enum' or 'struct' for '{msg_name}'"
            )

        fields = self.fields or []
        seen: set[str] = set()
        for f in fields:
            if not f.name:
                raise SchemaError(
                    f"schema error: detected empty field name in message '{msg_name}"
                )
            if not is_valid_arg_name(f.name):
                raise SchemaError(
                    f"schema error: invalid field name of '{f.name}' in message '{msg_name}'"
                )
            key = f.name.lower()
            if key in seen:
                raise SchemaError(
                    f"schema error: detected duplicate field name of '{f.name}' "
                    f"in message '{msg_name}'"
                )
            seen.add(key)

        for f in fields:
            _parse_type(f.type, schema)

        if self.type == MESSAGE_TYPE_ENUM:
            exprs: set[str] = set()
            for f in fields:
                exprs.add(f.type.expr)
                if not f.value:
                    raise SchemaError(
                        f"schema error: enum message '{msg_name}' with field "
                        f"'{f.name}' is missing value"
                    )
            if len(exprs) > 1:
                raise SchemaError(
                    f"schema error: enum message '{msg_name}' must all have the same field type"
                )
            if not fields:
                raise SchemaError(
                    f"schema error: enum message '{msg_name}' must contain at least one field"
                )
            enum_type = fields[0].type
            if not is_valid_var_type(str(enum_type), VAR_INTEGER_DATA_TYPES):
                raise SchemaError(
                    f"schema error: enum message '{msg_name}' field '{enum_type}' "
                    "is invalid. must be an integer type."
                )
            self.enum_type = enum_type

        if self.type == MESSAGE_TYPE_STRUCT:
            for f in fields:
                if f.value:
                    raise SchemaError(
                        f"schema error: struct message '{msg_name}' with field "
                        f"'{f.name}' cannot contain value field - please remove it"
                    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "fields": None if self.fields is None else [f.to_dict() for f in self.fields],
        }


@dataclass
class MethodArgument:
    """An input or output argument of a service method."""

    name: str = ""
    type: Optional[VarType] = None
    optional: bool = False
    input_arg: bool = field(default=False, compare=False)
    output_arg: bool = field(default=False, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": _type_json(self.type),
            "optional": self.optional,
        }


@dataclass
class Method:
    """A remote procedure of a service."""

    name: str = ""
    stream_input: bool = False
    stream_output: bool = False
    proxy: bool = False
    inputs: Optional[list[MethodArgument]] = None
    outputs: Optional[list[MethodArgument]] = None
    service: Optional["Service"] = field(default=None, repr=False, compare=False)

    def parse(self, schema: "WebRPCSchema", service: Optional["Service"]) -> None:
        """Validate the method's arguments and resolve their types."""
        if service is None:
            raise SchemaError("parse error, service arg cannot be nil")
        self.service = service
        service_name = service.name

        for arg in self.inputs or ():
            arg.input_arg = True
            if not arg.name:
                raise SchemaError(
                    f"schema error: detected empty input argument name for method "
                    f"'{self.name}' in service '{service_name}'"
                )
            _parse_type(arg.type, schema)

        for arg in self.outputs or ():
            arg.output_arg = True
            if not arg.name:
                raise SchemaError(
                    f"schema error: detected empty output name for method "
                    f"'{self.name}' in service '{service_name}'"
                )
            _parse_type(arg.type, schema)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.stream_input:
            data["streamInput"] = True
        if self.stream_output:
            data["streamOutput"] = True
        data["inputs"] = None if self.inputs is None else [a.to_dict() for a in self.inputs]
        data["outputs"] = None if self.outputs is None else [a.to_dict() for a in self.outputs]
        return data


@dataclass
class Service:
    """A named group of methods."""

    name: str = ""
    methods: Optional[list[Method]] = None
    schema: Optional["WebRPCSchema"] = field(default=None, repr=False, compare=False)

    def parse(self, schema: "WebRPCSchema") -> None:
        """Validate the service and every one of its methods."""
        self.schema = schema
        service_name = self.name
        if not service_name:
            raise SchemaError("schema error: service name cannot be empty")

        lowered = service_name.lower()
        for other in schema.services or ():
            if other is not self and other.name.lower() == lowered:
                raise SchemaError(
                    f"schema error: duplicate service name detected in service '{service_name}'"
                )

        methods = self.methods or []
        if not methods:
            raise SchemaError(
                f"schema error: methods cannot be empty for service '{service_name}'"
            )

        seen: set[str] = set()
        for method in methods:
            if not method.name:
                raise SchemaError(
                    f"schema error: detected empty method name in service '{service_name}"
                )
            key = method.name.lower()
            if key in seen:
                raise SchemaError(
                    f"schema error: detected duplicate method name of '{method.name}' "
                    f"in service '{service_name}'"
                )
            seen.add(key)

        for method in methods:
            method.parse(schema, self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "methods": None if self.methods is None else [m.to_dict() for m in self.methods],
        }


@dataclass
class Import:
    """A schema file imported by another, optionally limited to some members."""

    path: str = ""
    members: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "members": None if self.members is None else list(self.members),
        }


@dataclass
class WebRPCSchema:
    """A whole webrpc schema document."""

    webrpc_version: str = ""
    name: str = ""
    schema_version: str = ""
    imports: Optional[list[Import]] = None
    messages: Optional[list[Message]] = None
    services: Optional[list[Service]] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WebRPCSchema":
        """Build an unvalidated schema from its decoded JSON form."""
        data = _object(data)
        return cls(
            webrpc_version=_string(data, "webrpc"),
            name=_string(data, "name"),
            schema_version=_string(data, "version"),
            imports=_objects(data, "imports", _import_from_dict),
            messages=_objects(data, "messages", _message_from_dict),
            services=_objects(data, "services", _service_from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the schema, keys in document order."""
        return {
            "webrpc": self.webrpc_version,
            "name": self.name,
            "version": self.schema_version,
            "imports": None if self.imports is None else [i.to_dict() for i in self.imports],
            "messages": None if self.messages is None else [m.to_dict() for m in self.messages],
            "services": None if self.services is None else [s.to_dict() for s in self.services],
        }

    def validate(self) -> None:
        """Check the whole schema, resolving every type; raise SchemaError if invalid."""
        if self.webrpc_version != VERSION:
            raise SchemaError(
                f"webrpc schema version, '{self.webrpc_version}' is invalid, try '{VERSION}'"
            )
        for message in self.messages or ():
            message.parse(self)
        for service in self.services or ():
            service.parse(self)

    def schema_hash(self) -> str:
        """Return the SHA-1 hex digest of the compact JSON form."""
        return hashlib.sha1(self.to_json(False).encode("utf-8")).hexdigest()

    def to_json(self, indent: bool = False) -> str:
        """Encode the schema as JSON, newline-terminated, optionally indented."""
        if indent:
            text = json.dumps(self.to_dict(), indent=1, ensure_ascii=False)
        else:
            text = json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
        return text + "\n"

    def get_message_by_name(self, name: str) -> Optional[Message]:
        """Find a message by name, ignoring case."""
        lowered = name.lower()
        return next(
            (m for m in self.messages or () if m.name.lower() == lowered), None
        )

    def get_service_by_name(self, name: str) -> Optional[Service]:
        """Find a service by name, ignoring case."""
        lowered = name.lower()
        return next(
            (s for s in self.services or () if s.name.lower() == lowered), None
        )

    def has_field_type(self, field_type: str) -> bool:
        """Tell whether any field or argument has the given core data type."""
        field_type = field_type.lower()
        if DataType.from_string(field_type) is DataType.UNKNOWN:
            raise SchemaError(f"webrpc: invalid data type '{field_type}'")

        def matches(var_type: Optional[VarType]) -> bool:
            return var_type is not None and str(var_type.type) == field_type

        for message in self.messages or ():
            if any(matches(f.type) for f in message.fields or ()):
                return True
        for service in self.services or ():
            for method in service.methods or ():
                if any(matches(a.type) for a in method.inputs or ()):
                    return True
                if any(matches(a.type) for a in method.outputs or ()):
                    return True
        return False


def parse_schema_json(data: Union[str, bytes]) -> WebRPCSchema:
    """Decode and validate a schema from its JSON text."""
    if isinstance(data, (bytes, bytearray)):
        data = data.decode("utf-8")
    try:
        decoded = json.loads(data)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"json error: {exc}") from exc
    schema = WebRPCSchema.from_dict(decoded)
    schema.validate()
    return schema


def _get(data: dict[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    lowered = key.lower()
    for k, v in data.items():
        if isinstance(k, str) and k.lower() == lowered:
            return v
    return None


def _object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError("json error: object value is expected")
    return value


def _string(data: dict[str, Any], key: str) -> str:
    value = _get(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaError(f"json error: '{key}' must be a string")
    return value


def _boolean(data: dict[str, Any], key: str) -> bool:
    value = _get(data, key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise SchemaError(f"json error: '{key}' must be a boolean")
    return value


def _list(data: dict[str, Any], key: str) -> Optional[list[Any]]:
    value = _get(data, key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise SchemaError(f"json error: '{key}' must be a list")
    return value


def _objects(
    data: dict[str, Any], key: str, build: Callable[[dict[str, Any]], _T]
) -> Optional[list[_T]]:
    items = _list(data, key)
    if items is None:
        return None
    return [build(_object(item)) for item in items]


def _var_type(data: dict[str, Any]) -> Optional[VarType]:
    value = _get(data, "type")
    return None if value is None else VarType.from_json(value)


def _import_from_dict(data: dict[str, Any]) -> Import:
    members = _list(data, "members")
    if members is not None and not all(isinstance(m, str) for m in members):
        raise SchemaError("json error: import members must be strings")
    return Import(path=_string(data, "path"), members=members)


def _field_from_dict(data: dict[str, Any]) -> MessageField:
    meta = _list(data, "meta")
    if meta is not None:
        meta = [dict(_object(m)) for m in meta]
    return MessageField(
        name=_string(data, "name"),
        type=_var_type(data),
        optional=_boolean(data, "optional"),
        value=_string(data, "value"),
        meta=meta,
    )


def _message_from_dict(data: dict[str, Any]) -> Message:
    return Message(
        name=_string(data, "name"),
        type=_string(data, "type"),
        fields=_objects(data, "fields", _field_from_dict),
    )


def _argument_from_dict(data: dict[str, Any]) -> MethodArgument:
    return MethodArgument(
        name=_string(data, "name"),
        type=_var_type(data),
        optional=_boolean(data, "optional"),
    )


def _method_from_dict(data: dict[str, Any]) -> Method:
    return Method(
        name=_string(data, "name"),
        stream_input=_boolean(data, "streamInput"),
        stream_output=_boolean(data, "streamOutput"),
        inputs=_objects(data, "inputs", _argument_from_dict),
        outputs=_objects(data, "outputs", _argument_from_dict),
    )


def _service_from_dict(data: dict[str, Any]) -> Service:
    return Service(
        name=_string(data, "name"),
        methods=_objects(data, "methods", _method_from_dict),
    )