"""Parsed command-line arguments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


class Args:
    """Command parameters and option parameters produced by one parse call.

    An option present in the result with an empty list was given without a
    parameter. An option absent from the result was never given and has no
    configured default.
    """

    __slots__ = ("_cmd_params", "_opt_params")

    def __init__(
        self,
        opt_params: Mapping[str, Iterable[str]] | None = None,
        cmd_params: Iterable[str] | None = None,
    ) -> None:
        self._opt_params: dict[str, tuple[str, ...]] = {
            name: tuple(values) for name, values in (opt_params or {}).items()
        }
        self._cmd_params: tuple[str, ...] = tuple(cmd_params or ())

    def has_opt(self, name: str) -> bool:
        return name in self._opt_params

    def opt_param(self, name: str) -> str:
        """Return the first parameter of the option, or an empty string."""
        values = self._opt_params.get(name)
        if not values:
            return ""
        return values[0]

    def opt_params(self, name: str) -> list[str]:
        """Return all parameters of the option in the order they were given."""
        return list(self._opt_params.get(name, ()))

    def cmd_params(self) -> list[str]:
        return list(self._cmd_params)

    def opt_names(self) -> list[str]:
        return list(self._opt_params)

    def to_dict(self) -> dict[str, object]:
        return {
            "options": {name: list(values) for name, values in self._opt_params.items()},
            "params": list(self._cmd_params),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Args):
            return NotImplemented
        return self._opt_params == other._opt_params and self._cmd_params == other._cmd_params

    def __hash__(self) -> int:
        return hash((tuple(sorted(self._opt_params.items())), self._cmd_params))

    def __repr__(self) -> str:
        return f"Args(opt_params={dict(self._opt_params)!r}, cmd_params={list(self._cmd_params)!r})"


class ArgsBuilder:
    """Append-only accumulator used while one token sequence is scanned."""

    def __init__(self) -> None:
        self._opt_params: dict[str, list[str]] = {}
        self._cmd_params: list[str] = []

    def add_cmd_params(self, *values: str) -> None:
        self._cmd_params.extend(values)

    def add_opt_params(self, name: str, *values: str) -> None:
        # Touching an option with no values still registers its presence.
        self._opt_params.setdefault(name, []).extend(values)

    def has_opt(self, name: str) -> bool:
        return name in self._opt_params

    def count(self, name: str) -> int:
        return len(self._opt_params.get(name, ()))

    def opt_items(self) -> list[tuple[str, list[str]]]:
        return [(name, list(values)) for name, values in self._opt_params.items()]

    def build(self) -> Args:
        return Args(self._opt_params, self._cmd_params)
