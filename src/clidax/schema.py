"""Option schemas and their resolution against recognized option names."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from loguru import logger

from clidax.args import ArgsBuilder
from clidax.errors import (
    ConfigIsArrayButHasNoParam,
    DuplicateOptionName,
    InvalidOptionSchema,
    OptionIsNotArray,
    OptionNeedsParam,
    OptionTakesNoParam,
    UnconfiguredOption,
)

WILDCARD = "*"


@dataclass(frozen=True)
class OptionSchema:
    """Declared arity, aliases and defaults of one option."""

    name: str
    aliases: tuple[str, ...] = field(default_factory=tuple)
    has_param: bool = False
    is_array: bool = False
    defaults: tuple[str, ...] | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise InvalidOptionSchema(self.name, "name must not be empty")
        object.__setattr__(self, "aliases", tuple(self.aliases))
        if self.defaults is not None:
            object.__setattr__(self, "defaults", tuple(self.defaults))

    @property
    def is_wildcard(self) -> bool:
        return self.name == WILDCARD

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> OptionSchema:
        defaults = payload.get("defaults")
        return cls(
            name=str(payload["name"]),
            aliases=tuple(str(alias) for alias in _as_list(payload.get("aliases"))),
            has_param=_as_bool(payload, "has_param"),
            is_array=_as_bool(payload, "is_array"),
            defaults=None if defaults is None else tuple(str(value) for value in _as_list(defaults)),
            description=str(payload.get("description", "")),
        )


def _as_bool(payload: dict[str, object], key: str) -> bool:
    value = payload.get(key, False)
    if not isinstance(value, bool):
        raise InvalidOptionSchema(str(payload.get("name", "")), f"'{key}' must be a boolean, got {value!r}")
    return value


def _as_list(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


@dataclass(frozen=True)
class ResolvedOption:
    """Canonical name and schema applied to one recognized option."""

    name: str
    schema: OptionSchema | None

    @property
    def has_param(self) -> bool:
        return self.schema is not None and self.schema.has_param


class SchemaResolver:
    """Map recognized option names onto a validated set of schemas.

    With no schemas the resolver runs in zero-configuration mode: every
    option is accepted under its own name and no arity rules apply.
    """

    def __init__(self, schemas: Sequence[OptionSchema] = ()) -> None:
        self._schemas: tuple[OptionSchema, ...] = tuple(schemas)
        self._by_name: dict[str, OptionSchema] = {}
        self._wildcard: OptionSchema | None = None
        self._validate()

    @property
    def schemas(self) -> tuple[OptionSchema, ...]:
        return self._schemas

    @property
    def is_zero_config(self) -> bool:
        return not self._schemas

    def _validate(self) -> None:
        for schema in self._schemas:
            if schema.is_array and not schema.has_param:
                raise ConfigIsArrayButHasNoParam(schema.name)

            if schema.defaults and not schema.is_wildcard:
                if not schema.has_param:
                    raise InvalidOptionSchema(schema.name, "an option without a parameter cannot have defaults")
                if not schema.is_array and len(schema.defaults) > 1:
                    raise InvalidOptionSchema(schema.name, "a single-valued option takes at most one default")

            if schema.is_wildcard:
                if self._wildcard is not None:
                    raise DuplicateOptionName(WILDCARD)
                self._wildcard = schema
                continue

            for name in schema.names:
                if name in self._by_name:
                    raise DuplicateOptionName(name)
                self._by_name[name] = schema

    def resolve(self, name: str) -> ResolvedOption:
        if self.is_zero_config:
            return ResolvedOption(name=name, schema=None)

        schema = self._by_name.get(name)
        if schema is not None:
            return ResolvedOption(name=schema.name, schema=schema)

        if self._wildcard is not None:
            return ResolvedOption(name=name, schema=self._wildcard)

        raise UnconfiguredOption(name)

    def accept_value(self, option: ResolvedOption, builder: ArgsBuilder, *, inline: bool) -> None:
        """Check that one more parameter may be attached to ``option``."""
        schema = option.schema
        if schema is None:
            return
        if inline and not schema.has_param:
            raise OptionTakesNoParam(option.name)
        if not schema.is_array and builder.count(option.name) >= 1:
            raise OptionIsNotArray(option.name)

    def finish(self, builder: ArgsBuilder) -> None:
        """Apply post-scan arity checks and inject defaults of absent options."""
        if self.is_zero_config:
            return

        for name, values in builder.opt_items():
            schema = self._by_name.get(name, self._wildcard)
            if schema is not None and schema.has_param and not values:
                raise OptionNeedsParam(name)

        for schema in self._schemas:
            if schema.is_wildcard or schema.defaults is None:
                continue
            if not builder.has_opt(schema.name):
                logger.debug("args.schema.default name={} values={}", schema.name, list(schema.defaults))
                builder.add_opt_params(schema.name, *schema.defaults)
