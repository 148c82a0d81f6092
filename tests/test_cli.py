import json
from pathlib import Path

from typer.testing import CliRunner

from clidax.cli import app, load_schemas
from clidax.schema import WILDCARD

runner = CliRunner()


def test_parse_prints_json_without_schema() -> None:
    result = runner.invoke(app, ["parse", "--json", "--", "--foo-bar=A", "-a", "--baz", "-bc=3", "qux"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["options"] == {"foo-bar": ["A"], "a": [], "baz": [], "b": [], "c": ["3"]}
    assert payload["params"] == ["qux"]


def test_parse_renders_table() -> None:
    result = runner.invoke(app, ["parse", "--", "-v", "file"])
    assert result.exit_code == 0
    assert "file" in result.stdout


def test_parse_with_schema_file(tmp_path: Path) -> None:
    schema_file = tmp_path / "schemas.json"
    schema_file.write_text(
        json.dumps([{"name": "baz", "aliases": ["z"], "has_param": True, "is_array": True}, {"name": "*"}]),
        encoding="utf-8",
    )
    result = runner.invoke(
        app,
        ["parse", "--json", "--schema", str(schema_file), "--", "--foo-bar", "qux", "--baz", "1", "-z=2", "-X", "quux"],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["options"]["baz"] == ["1", "2"]
    assert "X" in payload["options"]
    assert payload["params"] == ["qux", "quux"]


def test_parse_error_exits_non_zero(tmp_path: Path) -> None:
    schema_file = tmp_path / "schemas.json"
    schema_file.write_text(json.dumps([{"name": "f", "has_param": True}]), encoding="utf-8")
    result = runner.invoke(app, ["parse", "--schema", str(schema_file), "--", "-f"])
    assert result.exit_code == 1
    assert "needs a parameter" in result.output


def test_load_schemas_maps_configured_wildcard(tmp_path: Path) -> None:
    schema_file = tmp_path / "schemas.json"
    schema_file.write_text(json.dumps([{"name": "any", "has_param": True}, {"name": "v"}]), encoding="utf-8")
    schemas = load_schemas(schema_file, wildcard="any")
    assert schemas[0].name == WILDCARD
    assert schemas[0].has_param
    assert schemas[1].name == "v"


def test_parse_reports_schema_file_with_invalid_json(tmp_path: Path) -> None:
    schema_file = tmp_path / "schemas.json"
    schema_file.write_text("[{", encoding="utf-8")
    result = runner.invoke(app, ["parse", "--schema", str(schema_file), "--", "-a"])
    assert result.exit_code == 2
    assert not isinstance(result.exception, ValueError)
    assert "not valid JSON" in result.output


def test_parse_reports_schema_with_empty_name(tmp_path: Path) -> None:
    schema_file = tmp_path / "schemas.json"
    schema_file.write_text(json.dumps([{"name": ""}]), encoding="utf-8")
    result = runner.invoke(app, ["parse", "--schema", str(schema_file), "--", "-a"])
    assert result.exit_code == 1
    assert "name must not be empty" in result.output


def test_parse_reports_schema_with_non_boolean_flag(tmp_path: Path) -> None:
    schema_file = tmp_path / "schemas.json"
    schema_file.write_text(json.dumps([{"name": "f", "has_param": "false"}]), encoding="utf-8")
    result = runner.invoke(app, ["parse", "--schema", str(schema_file), "--", "-f"])
    assert result.exit_code == 1
    assert "must be a boolean" in result.output
