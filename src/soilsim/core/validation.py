"""
Fail-fast argument checks shared by the solvers.

Every helper raises ParameterError before any computation starts and
returns a normalized copy of the value (float or 1-D float array).
"""
import numbers
from typing import Optional, Sequence, Union

import numpy as np

from soilsim.core.exceptions import ErrorContext, ParameterError


def _context(component: str, operation: str, name: str, value=None) -> ErrorContext:
    details = None if value is None else {"value": repr(value)}
    return ErrorContext(component=component, operation=operation, parameter=name, details=details)


def as_scalar(value, name: str, component: str, operation: str) -> float:
    """Coerce a real, finite scalar (including a 0-d array) to float"""
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value.item()
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ParameterError(
            f"{name} must be a numeric scalar, got {type(value).__name__}",
            _context(component, operation, name, value),
        )
    value = float(value)
    if not np.isfinite(value):
        raise ParameterError(f"{name} must be finite", _context(component, operation, name, value))
    return value


def as_positive_scalar(value, name: str, component: str, operation: str) -> float:
    value = as_scalar(value, name, component, operation)
    if value <= 0:
        raise ParameterError(f"{name} must be positive, got {value}", _context(component, operation, name, value))
    return value


def as_open_fraction(value, name: str, component: str, operation: str) -> float:
    """Scalar strictly between 0 and 1"""
    value = as_scalar(value, name, component, operation)
    if not 0.0 < value < 1.0:
        raise ParameterError(
            f"{name} must be between 0 and 1 (exclusive), got {value}",
            _context(component, operation, name, value),
        )
    return value


def as_positive_int(value, name: str, component: str, operation: str) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise ParameterError(
            f"{name} must be an integer, got {type(value).__name__}",
            _context(component, operation, name, value),
        )
    if value < 1:
        raise ParameterError(f"{name} must be at least 1, got {value}", _context(component, operation, name, value))
    return int(value)


def as_series(
    values: Union[Sequence[float], np.ndarray],
    name: str,
    component: str,
    operation: str,
    allow_empty: bool = True,
    min_value: Optional[float] = None,
) -> np.ndarray:
    """Copy a 1-D numeric sequence into a new float array"""
    try:
        array = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise ParameterError(
            f"{name} must be a numeric sequence: {e}",
            _context(component, operation, name),
        ) from e

    if array.ndim != 1:
        raise ParameterError(
            f"{name} must be one-dimensional, got shape {array.shape}",
            _context(component, operation, name),
        )
    if not allow_empty and array.size == 0:
        raise ParameterError(f"{name} must not be empty", _context(component, operation, name))
    if not np.all(np.isfinite(array)):
        raise ParameterError(f"{name} must contain only finite values", _context(component, operation, name))
    if min_value is not None and np.any(array < min_value):
        raise ParameterError(
            f"{name} must not contain values below {min_value}",
            _context(component, operation, name),
        )
    return array
