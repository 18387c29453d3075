# apekit

apekit turns API component definitions written in TOML into typed
component models: props, objects, routes, requests, responses and message
bodies. It can also read the component schemas of an OpenAPI document and
turn them into props.

Each component gets a dotted identifier. A root component is named
`[category.]<type plural>.<name>`, for example `objects.User` or
`auth.objects.User`; a child is named after its parent, for example
`objects.User.username`. `apekit.components.generate_component_id` builds
these identifiers from a `ComponentMetadata` and raises `ValueError` when
the metadata lacks what is needed.

## Compiling a definition file

`Compiler().file(path, data)` runs four stages over one file and returns a
dictionary mapping the component id to the assembled component.

```python
from pathlib import Path

from apekit.compiler import Compiler

path = Path("definitions/objects/User.toml")
components = Compiler().file(str(path), path.read_bytes())

for component_id, component in components.items():
    print(component_id, component)
```

A file such as

```toml
name = "User"
category = "auth"
description = "A registered user"

[props.username]
type = "text"
min_length = 3
```

compiles into a single `Object` stored under the id `auth.objects.User`,
whose prop `username` has the id `auth.objects.User.username` and
`PropConstraintsText` constraints.

The path must contain `props`, `objects` or `routes`, or compilation
fails. Whatever the path says, `Compiler.file` always parses and assembles
the contents as an object. Anything that cannot be read, parsed or
assembled raises `CompileError`.

The stages are also available on their own:

- `apekit.preprocessor.Preprocessor.file(path, data)` returns a
  `RawComponent` tagged with the type found in the path.
- `apekit.scanner.Scanner.scan_component(raw)` decodes the TOML into a
  `ScannedComponent`.
- `apekit.parser.Parser` has `parse_prop`, `parse_object` and
  `parse_route`; these raise `apekit.parse_common.ParseError`.
- `apekit.assembler.Assembler` has `assemble_prop`, `assemble_object` and
  `assemble_route`; these raise `apekit.constraints.AssemblyError`.

Prop types are matched case-insensitively: `int`, `uint`, `float`,
`text`, `bool`, `blob`, `map` and `ref`. Constraints can be assembled for
`ref` (needs `target`), `int`, `uint` (`size`, `min`, `max`), `float`
(`precision`, `min`, `max`), `text` (`min_length`, `max_length`, `regex`,
`alpha`, `num`, `alnum`) and `blob`; other types raise `AssemblyError`
at assembly.

## Validating components

```python
from apekit.components import ComponentMetadata, Object
from apekit.validator import ValidationError, Validator

user = Object(
    ComponentMetadata(
        component_type="OBJECT",
        component_id="objects.User",
        name="User",
        is_root=True,
    )
)

Validator().validate_component(user)  # passes

try:
    Validator().validate_component(Object(ComponentMetadata()))
except ValidationError as err:
    print(err)  # error validating component metadata: component id empty
```

The validator checks that the id, name and type are present, that the
type matches the kind of component, that each prop's type is known and
agrees with its constraints, and that props are stored under their own
names.

## Importing OpenAPI schemas

```python
from apekit.openapi import unmarshal

components = unmarshal("openapi.yaml")
```

`unmarshal` reads the YAML document, resolves local `$ref` references
under `components`, checks the schemas and converts
`components.schemas`. Integer, number, string and boolean schemas become
props with matching constraints: an integer with a non-negative minimum
becomes `UINT`, a string with the `binary` format becomes `BLOB`. Array
schemas produce an empty `Prop`; object schemas are not supported and
raise `OpenApiError`, as does any other problem with the document.

## Working with files

`apekit.filehandler.FileHandler` reads files into `RawFile` values,
writes bytes to disk with mode 0644 and maps every directory under a root
(as a path relative to it, `.` for the root itself) to the files it holds:

```python
from apekit.filehandler import FileHandler

handler = FileHandler()
for directory, files in handler.get_dir_map("definitions").items():
    print(directory, files)
```

## Serialising

`apekit.components.to_jsonable` converts any component into plain
dictionaries and lists ready for `json.dumps`.
`apekit.devtools.pretty_print` prints a value as JSON indented by two
spaces and returns the text; `apekit.devtools.SPLASH` holds the banner.

## What apekit does not do

apekit is a library only. It has no command-line program, runs no HTTP
server, and does not store components anywhere: compiled components are
returned to the caller and kept nowhere else.