from sortcheck.schema import generate_json_schema, generate_schema_doc, write_schema_doc


def test_json_schema_covers_suite_format():
    schema = generate_json_schema()
    assert schema["$schema"].endswith("2020-12/schema")
    assert set(schema["properties"]) == {"subjects", "checks"}
    assert list(schema["$defs"]) == sorted(schema["$defs"])
    assert "EntrySpec" in schema["$defs"]


def test_schema_doc_lists_every_assertion_type():
    doc = generate_schema_doc()
    for type_key in ("first_key", "last_key", "first_element", "last_element"):
        assert f"- `{type_key}`: any scalar" in doc
    assert "- `first_entry`: { key, value }" in doc
    assert "- `last_entry`: { key, value }" in doc


def test_write_schema_doc_creates_parent(tmp_path):
    path = tmp_path / "docs" / "schema.md"
    write_schema_doc(path)
    assert path.read_text().startswith("# sortcheck YAML Schema")
