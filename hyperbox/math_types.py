# Copyright 2023 Intrinsic Innovation LLC

"""Type definitions and numeric tolerances for hyperbox (python3).

Vectors and matrices are represented as numpy arrays, but most functions also
accept lists and tuples of numbers.

The tolerance constants below define the single floating point comparison
policy of the library.  Every tolerant predicate takes rtol, atol or ztol
keyword arguments that default to these values.
"""

import numbers
from typing import List, Sequence, Text, Tuple, Union

import numpy as np

# ----------------------------------------------------------------------------
# Pytype definitions.
VectorType = Union[np.ndarray, Sequence[float], List[float], Tuple[float, ...]]
VectorOrValueType = Union[VectorType, float]
MatrixType = Union[np.ndarray, Sequence[Sequence[float]]]

# ----------------------------------------------------------------------------
# Tolerances.

# Relative tolerance for approximate equality of two values.
DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE = 1e-8

# Absolute tolerance for approximate equality of two values.
DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE = 1e-12

# Any value with magnitude at or below this threshold is treated as zero.
DEFAULT_ZERO_EPSILON = 1e-12

# Matrices with a larger condition number are not considered invertible.
DEFAULT_COND_TOL = 1e6

# ----------------------------------------------------------------------------
# Error messages for exceptions.
SHAPE_MISMATCH_MESSAGE = 'Arrays do not have the same shape'


def is_scalar(value) -> bool:
  """Returns True if the value is a single number.

  Strings, lists, tuples and numpy arrays are not scalars, even if they contain
  a single element.

  Args:
    value: Any python object.

  Returns:
    True if value is an int, float or numpy scalar number.
  """
  return isinstance(value, numbers.Number) and not isinstance(value, bool)


def get_matching_arrays(
    lhs: VectorOrValueType, rhs: VectorOrValueType, err_msg: Text = ''
) -> Tuple[np.ndarray, np.ndarray]:
  """Converts the arguments to numpy arrays with the same shape.

  If one of the arguments is a scalar, it is expanded to an array with the
  shape of the other argument.

  Args:
    lhs: Left hand side scalar or array.
    rhs: Right hand side scalar or array.
    err_msg: Error message string appended to exception in case of failure.

  Returns:
    (lhs, rhs) as numpy arrays of equal shape.

  Raises:
    ValueError: If neither argument is a scalar and the shapes differ.
  """
  lhs = np.asarray(lhs)
  rhs = np.asarray(rhs)
  if lhs.ndim == 0 and rhs.ndim != 0:
    lhs = np.full(rhs.shape, lhs, dtype=lhs.dtype)
  elif rhs.ndim == 0 and lhs.ndim != 0:
    rhs = np.full(lhs.shape, rhs, dtype=rhs.dtype)
  if lhs.shape != rhs.shape:
    raise ValueError(
        '%s: lhs.shape = %s, rhs.shape = %s\n%s'
        % (SHAPE_MISMATCH_MESSAGE, lhs.shape, rhs.shape, err_msg)
    )
  return lhs, rhs
