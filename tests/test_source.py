import sys

import pytest
from pydantic import BaseModel, Field

from clidax import (
    ArgsSource,
    InvalidOption,
    OptionSchema,
    SourceNotReadyError,
    UnconfiguredOption,
)


class AppOptions(BaseModel):
    foo: bool = False
    baz: int = Field(default=0, json_schema_extra={"aliases": ["z"]})


def test_source_without_schemas() -> None:
    source = ArgsSource(["--foo", "bar", "--baz=123"])
    source.setup()
    conn = source.create_conn()

    assert conn.args.cmd_params() == ["bar"]
    assert conn.args.has_opt("foo")
    assert conn.args.opt_params("foo") == []
    assert conn.args.opt_param("baz") == "123"
    assert conn.schemas == []
    assert conn.options is None


def test_source_setup_raises_parse_error() -> None:
    source = ArgsSource(["--foo", "bar", "--123"])
    with pytest.raises(InvalidOption) as exc_info:
        source.setup()
    assert exc_info.value.option == "123"
    with pytest.raises(SourceNotReadyError):
        source.create_conn()


def test_source_with_schemas() -> None:
    schemas = [OptionSchema(name="foo", has_param=True)]
    source = ArgsSource.with_schemas(schemas, ["--foo", "bar", "baz"])
    source.setup()
    conn = source.create_conn()

    assert conn.args.opt_params("foo") == ["bar"]
    assert conn.args.cmd_params() == ["baz"]
    assert conn.schemas == schemas


def test_source_with_schemas_rejects_unknown_option() -> None:
    source = ArgsSource.with_schemas([OptionSchema(name="foo")], ["--bar"])
    with pytest.raises(UnconfiguredOption):
        source.setup()


def test_source_for_options() -> None:
    source = ArgsSource.for_options(AppOptions, ["--foo", "-z", "7", "rest"])
    source.setup()
    conn = source.create_conn()

    assert conn.options == AppOptions(foo=True, baz=7)
    assert conn.args.cmd_params() == ["rest"]
    assert [schema.name for schema in conn.schemas] == ["foo", "baz"]


def test_source_reads_process_arguments_when_no_tokens_given(monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["/path/to/app", "--foo", "bar"])
    source = ArgsSource()
    source.setup()
    assert source.args.has_opt("foo")
    assert source.args.cmd_params() == ["bar"]


def test_set_options_outlives_connection() -> None:
    source = ArgsSource([])
    source.setup()
    first = source.create_conn()
    first.set_options({"answer": 42})
    first.close()

    assert source.create_conn().options == {"answer": 42}


def test_connection_is_always_committed() -> None:
    source = ArgsSource([])
    source.setup()
    conn = source.create_conn()
    conn.commit()
    assert conn.is_committed()
    conn.rollback()
    conn.force_back()
    conn.close()


def test_unit_of_work_yields_connection_and_reraises() -> None:
    source = ArgsSource(["-a"])
    source.setup()

    with source.unit_of_work() as conn:
        assert conn.args.has_opt("a")

    with pytest.raises(RuntimeError), source.unit_of_work():
        raise RuntimeError("boom")


def test_close_discards_parse_results() -> None:
    with ArgsSource(["-a"]) as source:
        assert source.args.has_opt("a")

    with pytest.raises(SourceNotReadyError):
        _ = source.args
    with pytest.raises(SourceNotReadyError):
        source.create_conn()
