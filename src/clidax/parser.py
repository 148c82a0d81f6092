"""Command-line token classification."""

from __future__ import annotations

import string
from collections.abc import Sequence

from loguru import logger

from clidax.args import Args, ArgsBuilder
from clidax.errors import InvalidOption, ParseError
from clidax.schema import OptionSchema, ResolvedOption, SchemaResolver

TERMINATOR = "--"
LONG_PREFIX = "--"
SHORT_PREFIX = "-"

ALPHABETS = frozenset(string.ascii_letters)
ALNUM_MARKS = ALPHABETS | frozenset(string.digits) | {"-"}


def parse(tokens: Sequence[str]) -> Args:
    """Split tokens into options and command parameters without any schema.

    Every syntactically valid option is accepted and never consumes the
    following token, so ``--foo bar`` yields option ``foo`` and command
    parameter ``bar``.
    """
    return parse_with(tokens, ())


def parse_with(tokens: Sequence[str], schemas: Sequence[OptionSchema]) -> Args:
    """Split tokens into options and command parameters, validated against ``schemas``.

    Raises:
        ConfigurationError: if the schemas themselves are malformed.
        ParseError: on the first violation found in the tokens.
    """
    resolver = SchemaResolver(schemas)
    builder = ArgsBuilder()
    logger.debug("args.parse.start tokens={} schemas={}", len(tokens), len(resolver.schemas))
    try:
        _scan(tokens, resolver, builder)
        resolver.finish(builder)
    except ParseError as exc:
        logger.debug("args.parse.error kind={} option={}", type(exc).__name__, exc.option)
        raise
    return builder.build()


def _scan(tokens: Sequence[str], resolver: SchemaResolver, builder: ArgsBuilder) -> None:
    after_terminator = False
    pending: ResolvedOption | None = None

    for token in tokens:
        if after_terminator:
            builder.add_cmd_params(token)
            continue

        if pending is not None:
            resolver.accept_value(pending, builder, inline=False)
            builder.add_opt_params(pending.name, token)
            pending = None
            continue

        if token == TERMINATOR:
            after_terminator = True
        elif token.startswith(LONG_PREFIX):
            pending = _scan_long(token[len(LONG_PREFIX) :], resolver, builder)
        elif token.startswith(SHORT_PREFIX) and len(token) > len(SHORT_PREFIX):
            pending = _scan_short(token[len(SHORT_PREFIX) :], resolver, builder)
        else:
            builder.add_cmd_params(token)


def _scan_long(body: str, resolver: SchemaResolver, builder: ArgsBuilder) -> ResolvedOption | None:
    name, sep, value = body.partition("=")
    if not name or name[0] not in ALPHABETS:
        raise InvalidOption(body)
    if any(ch not in ALNUM_MARKS for ch in name[1:]):
        raise InvalidOption(body)

    option = resolver.resolve(name)
    builder.add_opt_params(option.name)
    if sep:
        resolver.accept_value(option, builder, inline=True)
        builder.add_opt_params(option.name, value)
        return None
    return option if option.has_param else None


def _scan_short(body: str, resolver: SchemaResolver, builder: ArgsBuilder) -> ResolvedOption | None:
    cluster, sep, value = body.partition("=")
    if not cluster:
        raise InvalidOption("=")

    for ch in cluster[:-1]:
        _register_short(ch, resolver, builder)

    # Only the last option of a cluster can take a parameter.
    option = _register_short(cluster[-1], resolver, builder)
    if sep:
        resolver.accept_value(option, builder, inline=True)
        builder.add_opt_params(option.name, value)
        return None
    return option if option.has_param else None


def _register_short(ch: str, resolver: SchemaResolver, builder: ArgsBuilder) -> ResolvedOption:
    if ch not in ALPHABETS:
        raise InvalidOption(ch)
    option = resolver.resolve(ch)
    builder.add_opt_params(option.name)
    return option
