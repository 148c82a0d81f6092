"""Data source and connection exposing parse results inside a unit of work."""

from __future__ import annotations

import sys
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from loguru import logger
from pydantic import BaseModel

from clidax.args import Args
from clidax.errors import SourceNotReadyError
from clidax.fields import parse_for
from clidax.parser import parse, parse_with
from clidax.schema import OptionSchema


class ArgsConn:
    """Connection handed to data-access code while a unit of work runs.

    Parsing has no side effects to undo, so commit is a no-op and the
    connection always reports itself committed.
    """

    def __init__(self, source: ArgsSource) -> None:
        self._source = source

    @property
    def args(self) -> Args:
        return self._source.args

    @property
    def schemas(self) -> list[OptionSchema]:
        return list(self._source.schemas)

    @property
    def options(self) -> Any:
        return self._source.options

    def set_options(self, options: Any) -> None:
        # Stored on the source, so it outlives this connection.
        self._source.options = options

    def commit(self) -> None:
        return None

    def is_committed(self) -> bool:
        return True

    def rollback(self) -> None:
        return None

    def force_back(self) -> None:
        return None

    def close(self) -> None:
        return None


class ArgsSource:
    """Parse command-line tokens once and hand the results out through connections."""

    def __init__(
        self,
        tokens: Sequence[str] | None = None,
        *,
        schemas: Sequence[OptionSchema] = (),
        model: type[BaseModel] | None = None,
    ) -> None:
        self._tokens = None if tokens is None else list(tokens)
        self._model = model
        self._lock = threading.Lock()
        self._ready = False
        self._args = Args()
        self.schemas: list[OptionSchema] = list(schemas)
        self.options: Any = None

    @classmethod
    def with_schemas(cls, schemas: Sequence[OptionSchema], tokens: Sequence[str] | None = None) -> ArgsSource:
        return cls(tokens, schemas=schemas)

    @classmethod
    def for_options(cls, model: type[BaseModel], tokens: Sequence[str] | None = None) -> ArgsSource:
        return cls(tokens, model=model)

    @property
    def args(self) -> Args:
        if not self._ready:
            raise SourceNotReadyError("ArgsSource.setup() has not been called")
        return self._args

    def setup(self) -> None:
        """Parse the tokens, falling back to ``sys.argv[1:]`` when none were given."""
        with self._lock:
            tokens = self._tokens if self._tokens is not None else sys.argv[1:]
            if self._model is not None:
                args, schemas, options = parse_for(tokens, self._model)
                self.schemas = schemas
                self.options = options
            elif self.schemas:
                args = parse_with(tokens, self.schemas)
            else:
                args = parse(tokens)
            self._args = args
            self._ready = True
        logger.debug("args.source.setup options={} params={}", len(args.opt_names()), len(args.cmd_params()))

    def create_conn(self) -> ArgsConn:
        if not self._ready:
            raise SourceNotReadyError("ArgsSource.setup() has not been called")
        return ArgsConn(self)

    def close(self) -> None:
        with self._lock:
            self._args = Args()
            self._ready = False
        logger.debug("args.source.close")

    @contextmanager
    def unit_of_work(self) -> Iterator[ArgsConn]:
        """Yield a connection, commit it on success and roll it back on error."""
        conn = self.create_conn()
        try:
            yield conn
        except Exception:
            if not conn.is_committed():
                conn.rollback()
            conn.force_back()
            raise
        else:
            conn.commit()
        finally:
            conn.close()

    def __enter__(self) -> ArgsSource:
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        _ = (exc_type, exc, tb)
        self.close()
