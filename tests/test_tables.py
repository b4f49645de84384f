import csv

from spectrum.openapi3.tables import (
    Column,
    ColumnSet,
    Table,
    op_table_columns_default,
    op_table_columns_extended,
    operations_table,
    write_file_csv,
)


def _spec():
    return {
        "openapi": "3.0.3",
        "info": {"title": "Pet API", "version": "1"},
        "paths": {
            "/pets": {
                "get": {
                    "operationId": "listPets",
                    "summary": "List pets",
                    "tags": ["pets", "animals"],
                    "security": [{"oauth": ["read", "write"]}],
                    "x-throttling-group": "Light",
                    "externalDocs": {"url": "https://docs.example.com/pets"},
                }
            }
        },
    }


def test_default_columns_display_texts():
    assert op_table_columns_default(False).display_texts() == [
        "Tags", "Method", "Path", "OperationID", "Summary", "SecurityScopes", "XThrottlingGroup",
    ]
    assert op_table_columns_default(True).display_texts()[-1] == "DocsURL"


def test_extended_columns_add_four():
    extended = op_table_columns_extended()
    assert len(extended.columns) == len(op_table_columns_default(False).columns) + 4
    assert extended.columns[-1].slug == "x-user-permission"


def test_operations_table_row():
    table = operations_table(_spec(), None, None)
    assert table.name == "Pet API"
    assert table.rows == [
        ["pets, animals", "GET", "/pets", "listPets", "List pets", "read, write", "Light"]
    ]


def test_operations_table_docs_url_and_custom_extension():
    spec = _spec()
    spec["paths"]["/pets"]["get"]["x-app-permission"] = "ReadAccounts"
    columns = ColumnSet([Column("Docs", "docsURL"), Column("Perm", "x-app-permission")])
    table = operations_table(spec, columns, None)
    assert table.columns == ["Docs", "Perm"]
    assert table.rows == [["https://docs.example.com/pets", "ReadAccounts"]]


def test_operations_table_filter_excludes():
    table = operations_table(_spec(), None, lambda path, method, op: method != "GET")
    assert table.rows == []


def test_to_documents_pairs_columns_with_values():
    table = Table(name="t", columns=["A", "B"], rows=[["1", "2"], ["3", "4"]])
    assert table.to_documents() == [{"A": "1", "B": "2"}, {"A": "3", "B": "4"}]


def test_write_file_csv_round_trip(tmp_path):
    out = tmp_path / "ops.csv"
    write_file_csv(_spec(), str(out))
    with open(out, newline="", encoding="utf-8") as fh:
        rows = list(csv.reader(fh))
    table = operations_table(_spec(), None, None)
    assert rows == [table.columns, *table.rows]