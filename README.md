# webrpc

Building blocks for working with webrpc service schemas in Python:

- `webrpc.schema`: a schema model that loads, validates and serialises
  webrpc JSON schemas with their messages, enums, services and methods;
- `webrpc.types`: data types and type expressions such as `[]string`,
  `map<string,uint64>` or references to messages in the schema;
- `webrpc.ridl.lexer`: a lexer for the RIDL schema language;
- `webrpc.gen.javascript` and `webrpc.gen.typescript`: helpers that spell
  schema elements as JavaScript and TypeScript fragments, for use from
  code templates;
- `webrpc.gen.registry`: a registry where code generators can be recorded
  under a target name.

## Installation

```
pip install .
```

## Loading a schema

```python
from webrpc.schema import parse_schema_json

schema = parse_schema_json("""
{
  "webrpc": "v1",
  "name": "example",
  "version": "v0.0.1",
  "messages": [
    {"name": "User", "type": "struct",
     "fields": [{"name": "ID", "type": "uint64"}]}
  ],
  "services": [
    {"name": "ExampleService",
     "methods": [{"name": "GetUser",
                  "inputs": [{"name": "id", "type": "uint64"}],
                  "outputs": [{"name": "user", "type": "User"}]}]}
  ]
}
""")

print(schema.to_json(indent=True))
print(schema.schema_hash())          # SHA-1 of the compact JSON form
print(schema.has_field_type("uint64"))  # True
```

`parse_schema_json` accepts text or bytes and raises `SchemaError` (a
`ValueError`) when the JSON cannot be decoded or the schema is invalid: a
`webrpc` version other than `v1`, duplicate message, service, method or
field names, invalid field names, unknown types, enums without values or
with non-integer types, struct fields carrying a value, services without
methods and so on.

A schema can also be built from a decoded dictionary with
`WebRPCSchema.from_dict` and checked with `validate()`; `to_dict()` gives
the JSON-ready form back. Messages and services are looked up, ignoring
case, with `get_message_by_name` and `get_service_by_name`.

## Type expressions

```python
from webrpc.types import DataType, is_valid_arg_name, parse_var_type_expr

var_type = parse_var_type_expr(schema, "map<string,[]User>")
print(var_type.type is DataType.MAP)  # True
print(var_type.map.value.list.elem.struct.name)  # User
print(is_valid_arg_name("a1"))        # True
print(is_valid_arg_name("1a"))        # False
```

Map keys must be `string` or an integer type; a name that is neither a
built-in type nor a message of the schema raises `SchemaError`.

## Tokenising RIDL

```python
from webrpc.ridl.lexer import tokenize, unescape_string

for token in tokenize("webrpc = v1\nname = example\n"):
    print(token.type, repr(token.value), token.line, token.col)

print(unescape_string('a\\tb'))  # "a<TAB>b"
```

`tokenize` returns every token but the final EOF; `lex` yields them lazily,
EOF included. Each `Token` records its line and column.

## JavaScript and TypeScript helpers

```python
from webrpc.gen import javascript, typescript
from webrpc.gen.registry import TargetOptions

user = schema.get_message_by_name("User")
print(typescript.field_type(user.fields[0].type))    # number
print(javascript.js_field_type(user.fields[0].type)) # number

method = schema.get_service_by_name("ExampleService").methods[0]
print(typescript.method_inputs(method))   # args: GetUserArgs, headers?: object
print(typescript.method_outputs(method))  # Promise<GetUserReturn>

export = javascript.export_keyword(TargetOptions(extra="noexports"))
print(repr(export()))  # ''
```

Both modules offer `template_func_map`, a dictionary of their helpers keyed
by the names templates refer to them by.

## What this package does not do

There is no command-line tool, no RIDL parser beyond the lexer (so `.ridl`
files cannot be loaded into a schema), and no complete code generators: no
templates ship with the package and the generator registry starts empty.
The helpers above produce fragments for templates you provide.

## Running the tests

```
pip install .[test]
pytest
```