# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Reconcile caller arguments with a method's declared parameters."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .errors import ArgumentError
from .model_method import MethodSpec
from .types import ParameterValue
from .validation import validate_argument

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedCall:
    """Validated, named-parameter form of one logical operation invocation."""

    method_name: str
    parameters: Mapping[str, ParameterValue] = field(default_factory=lambda: MappingProxyType({}))

    def as_dict(self) -> dict[str, ParameterValue]:
        """Return a mutable copy of the resolved parameters."""

        return dict(self.parameters)


def resolve_call(
    spec: MethodSpec,
    args: Sequence[object] = (),
    kwargs: Mapping[str, object] | None = None,
) -> ResolvedCall:
    """Turn positional or associative arguments into a validated :class:`ResolvedCall`.

    Associative style applies when ``kwargs`` is non-empty or when the only
    positional argument is a mapping; otherwise values are assigned to
    parameters in declaration order. While required values are still owed,
    each parameter consumes the next positional value even if it is optional
    itself; once they are paid, remaining positional values are dropped.

    Args:
        spec: Method whose parameters drive the resolution.
        args: Positional arguments supplied by the caller.
        kwargs: Keyword arguments supplied by the caller.

    Returns:
        ResolvedCall: Call holding only parameters declared by ``spec``.

    Raises:
        ArgumentError: If too few values are supplied, a required parameter is
            left without a value, or positional and keyword styles are mixed.
        ParameterTypeError: If a supplied value fails its declared type check.
    """

    named = _associative_arguments(spec, args, kwargs)
    required_count = spec.required_count
    supplied = len(named) if named is not None else len(args)
    if required_count and supplied < required_count:
        raise ArgumentError(f"Not enough arguments for {spec.name}", method=spec.name)

    remaining_required = required_count
    pending = list(args) if named is None else []
    parameters: dict[str, ParameterValue] = {}
    for param in spec.params:
        must_consume = param.required or remaining_required > 0
        if named is None:
            if not (must_consume and pending):
                if param.required:
                    raise ArgumentError(f"Missing required argument '{param.name}' for {spec.name}", method=spec.name)
                continue
            value = pending.pop(0)
        else:
            value = named.get(param.name)
            if value is None:
                if param.required:
                    raise ArgumentError(f"Missing required argument '{param.name}' for {spec.name}", method=spec.name)
                continue
        remaining_required -= 1
        parameters[param.name] = validate_argument(param.name, value, param.param_type)

    if pending:
        LOGGER.debug("%s: dropping %d unconsumed positional argument(s)", spec.name, len(pending))
    if named is not None:
        unknown = sorted(set(named) - set(spec.param_names))
        if unknown:
            LOGGER.debug("%s: ignoring undeclared argument(s) %s", spec.name, ", ".join(unknown))
    return ResolvedCall(method_name=spec.name, parameters=MappingProxyType(parameters))


def _associative_arguments(
    spec: MethodSpec,
    args: Sequence[object],
    kwargs: Mapping[str, object] | None,
) -> Mapping[str, object] | None:
    """Return the name-to-value mapping for associative calls, ``None`` for positional ones."""

    if kwargs:
        if args:
            raise ArgumentError(
                f"{spec.name} accepts either positional or keyword arguments, not both",
                method=spec.name,
            )
        return kwargs
    if len(args) == 1 and isinstance(args[0], Mapping):
        return args[0]
    return None


__all__ = ["ResolvedCall", "resolve_call"]
