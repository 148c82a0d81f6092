"""Build option schemas from declared fields and fill option models from parse results."""

from __future__ import annotations

import types
from collections.abc import Sequence
from typing import Any, TypeVar, Union, get_args, get_origin

from loguru import logger
from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo
from pydantic_core import PydanticUndefined

from clidax.args import Args
from clidax.errors import OptionStoreError
from clidax.parser import parse_with
from clidax.schema import WILDCARD, OptionSchema

ModelT = TypeVar("ModelT", bound=BaseModel)

_SCALAR_TYPES = (str, int, float)
_ARRAY_ORIGINS = (list, tuple, set, frozenset)


class OptionsBuilder:
    """Explicit, chainable builder for a list of option schemas.

    Example:
        schemas = (
            OptionsBuilder()
            .flag("verbose", "v", description="Print more")
            .param("output", "o", default="out.txt")
            .array("include", "I")
            .build()
        )
    """

    def __init__(self) -> None:
        self._schemas: list[OptionSchema] = []

    def flag(self, name: str, *aliases: str, description: str = "") -> OptionsBuilder:
        self._schemas.append(OptionSchema(name=name, aliases=aliases, description=description))
        return self

    def param(
        self,
        name: str,
        *aliases: str,
        default: str | None = None,
        description: str = "",
    ) -> OptionsBuilder:
        defaults = None if default is None else (default,)
        self._schemas.append(
            OptionSchema(name=name, aliases=aliases, has_param=True, defaults=defaults, description=description)
        )
        return self

    def array(
        self,
        name: str,
        *aliases: str,
        defaults: Sequence[str] | None = None,
        description: str = "",
    ) -> OptionsBuilder:
        self._schemas.append(
            OptionSchema(
                name=name,
                aliases=aliases,
                has_param=True,
                is_array=True,
                defaults=None if defaults is None else tuple(defaults),
                description=description,
            )
        )
        return self

    def wildcard(self, *, has_param: bool = False, is_array: bool = False) -> OptionsBuilder:
        self._schemas.append(OptionSchema(name=WILDCARD, has_param=has_param, is_array=is_array))
        return self

    def build(self) -> list[OptionSchema]:
        return list(self._schemas)


def _strip_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return annotation


def _field_extra(info: FieldInfo) -> dict[str, Any]:
    extra = info.json_schema_extra
    return dict(extra) if isinstance(extra, dict) else {}


def _field_kind(option: str, annotation: Any) -> tuple[bool, bool]:
    """Return ``(has_param, is_array)`` for a field annotation."""
    annotation = _strip_optional(annotation)
    if annotation is bool:
        return False, False
    if get_origin(annotation) in _ARRAY_ORIGINS or annotation in _ARRAY_ORIGINS:
        return True, True
    if annotation in _SCALAR_TYPES or annotation is Any:
        return True, False
    raise OptionStoreError(option, f"unsupported field type {annotation!r}")


def _field_defaults(info: FieldInfo, has_param: bool, is_array: bool) -> tuple[str, ...] | None:
    if not has_param:
        return None
    default = info.default
    if default is PydanticUndefined or default is None:
        return None
    if is_array and not isinstance(default, str):
        return tuple(str(value) for value in default)
    return (str(default),)


def option_name(field_name: str, info: FieldInfo) -> str:
    extra = _field_extra(info)
    return str(extra.get("option") or info.alias or field_name.replace("_", "-"))


def schema_for_field(field_name: str, info: FieldInfo) -> OptionSchema:
    """Derive one option schema from a declared model field.

    The option name defaults to the field name with ``_`` replaced by
    ``-``. ``json_schema_extra`` may carry ``option``, ``aliases``,
    ``has_param``, ``is_array`` and ``defaults`` to override what the
    annotation and default value imply.
    """
    name = option_name(field_name, info)
    extra = _field_extra(info)
    has_param, is_array = _field_kind(name, info.annotation)
    has_param = bool(extra.get("has_param", has_param))
    is_array = bool(extra.get("is_array", is_array))

    defaults: tuple[str, ...] | None
    if "defaults" in extra:
        raw = extra["defaults"]
        defaults = (raw,) if isinstance(raw, str) else tuple(str(value) for value in raw)
    else:
        defaults = _field_defaults(info, has_param, is_array)

    aliases = extra.get("aliases", ())
    if isinstance(aliases, str):
        aliases = (aliases,)

    return OptionSchema(
        name=name,
        aliases=tuple(aliases),
        has_param=has_param,
        is_array=is_array,
        defaults=defaults,
        description=info.description or "",
    )


def schemas_for(model: type[BaseModel]) -> list[OptionSchema]:
    """Build option schemas for every declared field of ``model``, in declaration order."""
    return [schema_for_field(field_name, info) for field_name, info in model.model_fields.items()]


def fill_options(model: type[ModelT], args: Args, schemas: Sequence[OptionSchema]) -> ModelT:
    """Validate an instance of ``model`` from the option parameters in ``args``."""
    payload: dict[str, Any] = {}
    keys: dict[str, str] = {}
    for (field_name, info), schema in zip(model.model_fields.items(), schemas):
        key = info.alias or field_name
        keys[key] = schema.name
        if not args.has_opt(schema.name):
            continue
        if schema.is_array:
            payload[key] = args.opt_params(schema.name)
        elif schema.has_param:
            payload[key] = args.opt_param(schema.name)
        else:
            payload[key] = True

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = first.get("loc") or ("",)
        option = keys.get(str(loc[0]), str(loc[0]))
        logger.debug("args.options.invalid option={} error={}", option, first.get("msg"))
        raise OptionStoreError(option, str(first.get("msg", "invalid value"))) from exc


def parse_for(tokens: Sequence[str], model: type[ModelT]) -> tuple[Args, list[OptionSchema], ModelT]:
    """Parse ``tokens`` with schemas derived from ``model`` and fill an instance of it."""
    schemas = schemas_for(model)
    args = parse_with(tokens, schemas)
    return args, schemas, fill_options(model, args, schemas)
