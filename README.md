# spectrum

A library for working with API specifications in the OpenAPI 3 and
Swagger 2.0 formats. OpenAPI 3 specifications are handled as plain
`dict`s; Swagger 2.0 specifications are loaded into dataclasses.

With it you can:

- read OpenAPI 3 specifications from JSON or YAML files, bytes or a URL
- check that an OpenAPI 3 specification has an `info.version`
- walk every operation in a specification
- count operations, tags and schemas, and report which parameters and
  schema properties have no description
- merge several specification files into one, with a choice of what
  happens when two files define the same component
- export a separate specification for each tag
- build operation tables and write them as CSV
- read, copy, merge and count Swagger 2.0 specifications

## OpenAPI 3

```python
from spectrum.openapi3.read import read_file
from spectrum.openapi3.spec_more import SpecMore

spec = read_file("petstore.yaml", False)
sm = SpecMore(spec)

print(sm.operations_count())
print(sm.tags(True, True))
print(sm.operation_ids())
```

`read_file(path, True)` parses the file (JSON first, then YAML) and raises
`SpecValidationError` if `info.version` is missing or blank. No further
checks against the OpenAPI schema are made. `parse` reads bytes or text,
and `read_url` fetches and parses a specification from a URL.

`SpecMore` also offers lookups such as `operation_by_id`,
`operation_by_path_method`, `schema_ref` and `server_url`, edits such as
`set_operation` and `schema_ref_set`, and output through `marshal_json`,
`marshal_yaml`, `write_file_json` and `write_file_yaml`.
`status_codes_histogram` returns path → method → response status → count.

### Walking operations

```python
from spectrum.openapi3.visit import iter_operations

for path, method, op in iter_operations(spec):
    print(method, path, op.get("operationId"))
```

### Path-method identifiers

```python
from spectrum.openapi3.common import PathMethodSet, path_method

path_method("/pets", "get")        # "/pets GET"

pms = PathMethodSet()
pms.add("/pets GET", "/pets/{id} DELETE")
pms.exists("/pets", "get")         # True
```

`parse_path_method` raises `PathMethodInvalidError` if a string is not of
the form `"<path> <METHOD>"`.

### Schema pointers

```python
from spectrum.openapi3.schemas import schema_pointer_expand

schema_pointer_expand("", "FooBar")           # "#/components/schemas/FooBar"
schema_pointer_expand("spec.json", "FooBar")  # "spec.json#/components/schemas/FooBar"
```

### Merging

```python
from spectrum.openapi3.merge import merge_files
from spectrum.openapi3.merge_options import new_merge_options_skip

merged = merge_files(["users.yaml", "orders.yaml"], new_merge_options_skip())
```

Files are merged in sorted order. With no options, a component parameter
or response that two files define differently raises `MergeError`, while
a differing component schema keeps the first file's definition. Two
different operations at the same path and method, or two different
request bodies of the same name, always raise `MergeError`.
`new_merge_options_skip()` keeps the first definition of parameters,
responses and schemas. A `MergeOptions` with
`collision_check_result=CollisionCheckResult.OVERWRITE` takes the later
definition of parameters and schemas instead.

`merge_directory` merges every non-empty `.json`, `.yaml` or `.yml` file
in a directory, and `write_file_dir_merge` writes the result as JSON.
`spectrum.openapi3.spec_meta` records which files of a set pass
`read_file(..., True)` and can merge only those.

### Description coverage

```python
from spectrum.openapi3.descriptions import (
    operation_parameters_description_status_counts,
    schema_properties_description_status_counts,
)

with_desc, without_desc, total = schema_properties_description_status_counts(spec)
```

`schema_properties_without_descriptions_write_file` and
`operation_parameters_without_descriptions_write_file` write a text report
of the items that have no description.

### Tables and exports

```python
from spectrum.openapi3.tables import op_table_columns_default, operations_table
from spectrum.openapi3.export import export_by_tags

table = operations_table(spec, op_table_columns_default(False), None)
table.write_csv("operations.csv")

per_tag = export_by_tags(spec)   # {tag: spec holding that tag's operations}
```

Each exported specification carries the referenced component parameters
and schemas, including schemas they in turn reference.

## Swagger 2.0

```python
from spectrum.openapi2.read import read_openapi2_spec_file
from spectrum.openapi2.count import endpoint_count
from spectrum.openapi2.copy import copy_endpoints_by_tag
from spectrum.openapi2.specification import Specification

swag = read_openapi2_spec_file("legacy.json")
print(endpoint_count(swag))

users_only = copy_endpoints_by_tag("Users", swag, Specification())
```

`Specification.from_dict` and `to_dict` convert to and from JSON data.
`spectrum.openapi2.merge` provides `merge_filepaths`, `merge_directory` and
`write_file_dir_merge` to combine Swagger 2.0 JSON files.
`spectrum.openapi2.count` provides `count_endpoints_by_tag` and
`write_endpoint_count_csv`.

## What it does not do

- It has no command-line tools; everything is used from Python.
- It does not convert Swagger 2.0 specifications to OpenAPI 3.
- It does not produce Postman collections, HTML pages or spreadsheet
  (XLSX) files; tables are written as CSV only.
- It does not lint specifications against a rule policy, and its
  validation checks only `info.version`.