# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Per-parameter type checks applied before a call leaves the client."""

from __future__ import annotations

import re
from numbers import Real
from typing import Final

from .errors import ParameterTypeError
from .model_method import ParamType
from .types import ParameterValue

_NUMERIC_PATTERN: Final[re.Pattern[str]] = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\s*$")

TRUE_TOKEN: Final[str] = "true"
FALSE_TOKEN: Final[str] = "false"


def is_numeric(value: object) -> bool:
    """Return ``True`` for real numbers and strings that spell a decimal number.

    Booleans are not numeric here even though ``bool`` subclasses ``int``.
    """

    if isinstance(value, bool):
        return False
    if isinstance(value, Real):
        return True
    return isinstance(value, str) and _NUMERIC_PATTERN.match(value) is not None


def validate_argument(name: str, value: object, param_type: ParamType) -> ParameterValue:
    """Check ``value`` against ``param_type`` and return its normalised form.

    Args:
        name: Parameter name used in the error message.
        value: Raw caller-supplied value.
        param_type: Type declared for the parameter by the catalog.

    Returns:
        ParameterValue: ``"true"``/``"false"`` for booleans, otherwise ``value`` unchanged.

    Raises:
        ParameterTypeError: If ``value`` does not satisfy ``param_type``.
    """

    if param_type is ParamType.BOOLEAN:
        if not isinstance(value, bool):
            raise ParameterTypeError(f"{name} must be a boolean", parameter=name)
        return TRUE_TOKEN if value else FALSE_TOKEN
    if param_type is ParamType.INTEGER:
        if not is_numeric(value):
            raise ParameterTypeError(f"{name} must be an integer", parameter=name)
    elif param_type is ParamType.STRING:
        if not isinstance(value, str):
            raise ParameterTypeError(f"{name} must be a string", parameter=name)
    return value  # type: ignore[return-value]


__all__ = ["FALSE_TOKEN", "TRUE_TOKEN", "is_numeric", "validate_argument"]
