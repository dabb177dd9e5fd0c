# Copyright 2023 Intrinsic Innovation LLC

"""Utility functions for vectors (python3).

Vectors are represented as a numpy.ndarray.

Tolerant comparisons:
  is_approx_zero - |x| <= ztol.
  is_close - Approximate equality of two values.
  is_less_equal, is_greater_equal - Comparisons that accept near equality.

Directions:
  right_continuous_sign - Sign function that is +1 at zero.
  direction_relation - Tests whether two vectors are multiples of each other.
  same_direction - Positive multiples only.
  is_multiple - Positive or negative multiples.
  turn_sign, is_right_turn - Orientation of 2D vectors.
  cross_product - Generalized cross product of n-1 vectors in n dimensions.

Utility functions:
  one_hot_vector - Returns a vector of all 0 except for a single 1 value.
  as_vector - Validates the number of components of an input vector.
  rectify - Elementwise maximum with zero.
  distance - p-norm distance between two points.
"""

import collections
import math
from typing import Dict, List, Optional, Sequence, Text, Tuple, Type, Union

from absl import logging
from hyperbox import math_types
import numpy as np


# ----------------------------------------------------------------------------
# Error messages for exceptions.
VECTOR_COMPONENTS_MESSAGE = 'Vector has incorrect number of components'
VECTOR_INFINITE_VALUES_MESSAGE = 'Vector has non-finite values'
VECTOR_VALUES_MESSAGE = 'Vector has NaN values'
VECTOR_LENGTH_MISMATCH_MESSAGE = 'Vectors have different numbers of components'
CROSS_PRODUCT_SHAPE_MESSAGE = (
    'Cross product needs n-1 column vectors of dimension n >= 2'
)
TURN_DIMENSION_MESSAGE = 'Orientation is only defined for 2D vectors'
VECTOR_ZERO_MAGNITUDE_MESSAGE = 'Vector has nearly zero magnitude'


# ----------------------------------------------------------------------------
# Input validation.


def normalize_vector(
    vector: math_types.VectorType, err_msg: Text = ''
) -> np.ndarray:
  """Returns a vector in the same direction but with magnitude 1.

  Args:
    vector: Vector to be normalized.
    err_msg: Error message string appended to exception in case of failure.

  Returns:
    A vector in the same direction as the argument but with magnitude 1.

  Raises:
    ValueError: If the vector cannot be normalized.
  """
  vector = np.array(vector, dtype=np.float64)
  vector_norm = np.linalg.norm(vector)
  if vector_norm <= math_types.DEFAULT_ZERO_EPSILON:
    raise ValueError(
        '%s: |%r| = %f\n%s'
        % (VECTOR_ZERO_MAGNITUDE_MESSAGE, vector, vector_norm, err_msg)
    )
  return vector / vector_norm


def one_hot_vector(
    dimension: int,
    hot_index: int,
    value: float = 1,
    dtype: Union[np.dtype, Type[np.number]] = np.float64,
) -> np.ndarray:
  """Returns a vector with all zeros except the hot_index component.

  For example,
    one_hot_vector(3, 0) = [1, 0, 0]
    one_hot_vector(4, 2) = [0, 0, 1, 0]
    one_hot_vector(4, 2, value=-3) = [0, 0, -3, 0]

  Args:
    dimension: Number of components in the vector.
    hot_index: Index of the non-zero element.
    value: Value of the non-zero element.
    dtype: Numeric type of components.

  Returns:
    The one-hot vector as a numpy array.
  """
  vector = np.zeros(dimension, dtype=dtype)
  vector[hot_index] = value
  return vector


def as_vector(
    values: math_types.VectorType,
    dimension: Optional[int] = None,
    dtype: Optional[Union[np.dtype, Type[np.number]]] = None,
    err_msg: Text = '',
) -> np.ndarray:
  """Interprets the values as a vector with <dimension> components.

  All values may be infinite.  NaN values will result in an error.

  Args:
    values: Input vector values.
    dimension: Expected dimension of output vector and number of components in
      input vector.
    dtype: Numeric type of array.
    err_msg: Error message string appended to exception in case of failure.

  Returns:
    The input vector as a numpy array after checking its size and values.

  Raises:
    ValueError: If the inputs are not a valid vector with the correct number of
      components.
  """
  if dimension is not None and len(values) != dimension:
    raise ValueError(
        '%s: Expected %d vector components, but found %d: %r\n%s'
        % (VECTOR_COMPONENTS_MESSAGE, dimension, len(values), values, err_msg)
    )
  vector = np.asarray(values, dtype=dtype)
  if np.any(np.isnan(vector)):
    raise ValueError('%s: %r\n%s' % (VECTOR_VALUES_MESSAGE, values, err_msg))
  return vector


def as_finite_vector(
    values: math_types.VectorType,
    dimension: Optional[int] = None,
    normalize: bool = False,
    dtype: Optional[Union[np.dtype, Type[np.number]]] = None,
    err_msg: Text = '',
) -> np.ndarray:
  """Interprets the values as a vector with <dimension> components.

  All values must be finite.  Infinite or NaN values will result in an error.

  Args:
    values: Input vector values.
    dimension: Expected dimension of output vector and number of components in
      input vector.
    normalize: Indicates whether to normalize the vector.
    dtype: Numeric type of array.
    err_msg: Error message string appended to exception in case of failure.

  Returns:
    The input vector as a numpy array after checking its size and values.

  Raises:
    ValueError: If the inputs are not a valid vector with the correct number of
      components or if normalize is True and the vector has near zero magnitude.
  """
  vector = as_vector(
      values=values, dimension=dimension, dtype=dtype, err_msg=err_msg
  )
  if not np.all(np.isfinite(vector)):
    raise ValueError(
        '%s: %r\n%s' % (VECTOR_INFINITE_VALUES_MESSAGE, values, err_msg)
    )
  if normalize:
    vector = normalize_vector(vector, err_msg=err_msg)
  return vector


def _as_matching_vectors(
    u: math_types.VectorType, v: math_types.VectorType, err_msg: Text = ''
) -> Tuple[np.ndarray, np.ndarray]:
  """Returns both vectors as float arrays after checking their lengths agree."""
  u = as_vector(u, dtype=np.float64, err_msg=err_msg)
  v = as_vector(v, dtype=np.float64, err_msg=err_msg)
  if u.shape != v.shape:
    raise ValueError(
        '%s: %s != %s\n%s'
        % (VECTOR_LENGTH_MISMATCH_MESSAGE, u.shape, v.shape, err_msg)
    )
  return u, v


# ----------------------------------------------------------------------------
# Tolerant comparisons.


def is_approx_zero(
    x: float, ztol: float = math_types.DEFAULT_ZERO_EPSILON
) -> bool:
  """Returns True if |x| <= ztol."""
  return bool(abs(x) <= ztol)


def is_close(
    a: float,
    b: float,
    rtol: float = math_types.DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE,
    atol: float = math_types.DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE,
    ztol: float = math_types.DEFAULT_ZERO_EPSILON,
) -> bool:
  """Tests whether two values are equal within tolerances.

  Unlike np.isclose, the comparison is symmetric in a and b:

    |a - b| <= max(atol, rtol * max(|a|, |b|))

  Two values that are both approximately zero are always close, and identical
  values (including equal infinities) are always close.

  Args:
    a: First value.
    b: Second value.
    rtol: Relative tolerance.
    atol: Absolute tolerance.
    ztol: Threshold below which values are treated as zero.

  Returns:
    True if the two values are approximately equal.
  """
  if a == b:
    return True
  if not (math.isfinite(a) and math.isfinite(b)):
    return False
  if is_approx_zero(a, ztol) and is_approx_zero(b, ztol):
    return True
  return bool(abs(a - b) <= max(atol, rtol * max(abs(a), abs(b))))


def is_less_equal(
    x: float,
    y: float,
    rtol: float = math_types.DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE,
    atol: float = math_types.DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE,
    ztol: float = math_types.DEFAULT_ZERO_EPSILON,
) -> bool:
  """Returns True if x <= y or x is approximately equal to y."""
  return bool(x <= y) or is_close(x, y, rtol=rtol, atol=atol, ztol=ztol)


def is_greater_equal(
    x: float,
    y: float,
    rtol: float = math_types.DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE,
    atol: float = math_types.DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE,
    ztol: float = math_types.DEFAULT_ZERO_EPSILON,
) -> bool:
  """Returns True if x >= y or x is approximately equal to y."""
  return bool(x >= y) or is_close(x, y, rtol=rtol, atol=atol, ztol=ztol)


# ----------------------------------------------------------------------------
# Directions.


def right_continuous_sign(
    x: math_types.VectorOrValueType,
) -> Union[float, np.ndarray]:
  """Returns the sign of x, treating zero as positive.

  This is the sign function made right-continuous at zero:

    right_continuous_sign(-0.6) = -1
    right_continuous_sign(0.0) = 1
    right_continuous_sign(1.3) = 1

  It never returns 0, so it can be used to pick a definite side of a box when a
  direction component is exactly zero.

  Args:
    x: Scalar or vector.

  Returns:
    A float for scalar input, otherwise an array of +1.0 and -1.0 values.
  """
  if math_types.is_scalar(x):
    return -1.0 if x < 0 else 1.0
  return np.where(np.asarray(x) < 0, -1.0, 1.0)


def direction_relation(
    u: math_types.VectorType,
    v: math_types.VectorType,
    allow_negative: bool,
    rtol: float = math_types.DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE,
    atol: float = math_types.DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE,
    ztol: float = math_types.DEFAULT_ZERO_EPSILON,
) -> Tuple[bool, float]:
  """Determines whether u is a scalar multiple of v.

  A component that is approximately zero in one vector must be approximately
  zero in the other.  The first pair of non-zero components fixes the factor
  u[i] / v[i], and every later pair must have the same ratio within tolerance.

  Two zero vectors are related with factor 0.

  Examples:
    direction_relation([1, 2, 3], [2, 4, 6], False) = (True, 0.5)
    direction_relation([1, 2, 3], [3, 2, 1], True) = (False, 0)
    direction_relation([1, 2, 3], [-1, -2, -3], False) = (False, 0)
    direction_relation([1, 2, 3], [-1, -2, -3], True) = (True, -1.0)

  Args:
    u: First vector.
    v: Second vector, with the same number of components as u.
    allow_negative: If False, a negative factor is rejected.
    rtol: Relative tolerance for comparing ratios.
    atol: Absolute tolerance for comparing ratios.
    ztol: Threshold below which components are treated as zero.

  Returns:
    (True, factor) such that u = factor * v, or (False, 0).

  Raises:
    ValueError: If the vectors have different numbers of components.
  """
  u, v = _as_matching_vectors(u, v)
  factor = None
  for u_i, v_i in zip(u, v):
    if is_approx_zero(u_i, ztol):
      if not is_approx_zero(v_i, ztol):
        return False, 0.0
      continue
    elif is_approx_zero(v_i, ztol):
      return False, 0.0
    ratio = u_i / v_i
    if factor is None:
      if not allow_negative and ratio < 0:
        return False, 0.0
      factor = ratio
    elif not is_close(factor, ratio, rtol=rtol, atol=atol, ztol=ztol):
      return False, 0.0
  if factor is None:
    # Both vectors are zero.
    return True, 0.0
  return True, float(factor)


def same_direction(
    u: math_types.VectorType, v: math_types.VectorType
) -> Tuple[bool, float]:
  """Returns (True, k) if u = k * v for some k > 0, else (False, 0)."""
  return direction_relation(u, v, allow_negative=False)


def is_multiple(
    u: math_types.VectorType, v: math_types.VectorType
) -> Tuple[bool, float]:
  """Returns (True, k) if u = k * v for some k != 0, else (False, 0)."""
  return direction_relation(u, v, allow_negative=True)


def is_pointing_towards(
    direction: math_types.VectorType, vector: math_types.VectorType
) -> bool:
  """Returns True if the vector has a positive component along direction."""
  direction, vector = _as_matching_vectors(direction, vector)
  return bool(np.dot(direction, vector) > 0)


def is_above(
    direction: math_types.VectorType,
    v_i: math_types.VectorType,
    v_j: math_types.VectorType,
) -> bool:
  """Returns True if v_i - v_j points towards the direction."""
  v_i, v_j = _as_matching_vectors(v_i, v_j)
  return is_pointing_towards(direction, v_i - v_j)


def _as_vector2(values: math_types.VectorType) -> np.ndarray:
  vector = as_vector(values, dtype=np.float64)
  if vector.shape != (2,):
    raise ValueError('%s: %r' % (TURN_DIMENSION_MESSAGE, values))
  return vector


def turn_sign(
    u: math_types.VectorType,
    v: math_types.VectorType,
    origin: Optional[math_types.VectorType] = None,
) -> float:
  """Returns the signed 2D cross product of u and v about the origin.

  The result is zero if the three points are collinear, positive if the
  rotation from u to v around the origin is counter-clockwise and negative if
  it is clockwise.

  Args:
    u: First 2D point.
    v: Second 2D point.
    origin: Center of rotation, [0, 0] if not given.

  Returns:
    (u - O)[0] * (v - O)[1] - (u - O)[1] * (v - O)[0]

  Raises:
    ValueError: If any input is not a 2D vector.
  """
  u = _as_vector2(u)
  v = _as_vector2(v)
  if origin is not None:
    origin = _as_vector2(origin)
    u = u - origin
    v = v - origin
  return float(u[0] * v[1] - u[1] * v[0])


def is_right_turn(
    u: math_types.VectorType,
    v: math_types.VectorType,
    origin: Optional[math_types.VectorType] = None,
) -> bool:
  """Returns True if the turn from u to v about the origin is not clockwise.

  Collinear points, within tolerance, count as a right turn.
  """
  return is_greater_equal(turn_sign(u, v, origin=origin), 0.0)


def cross_product(matrix: math_types.MatrixType) -> np.ndarray:
  """Returns the generalized cross product of the columns of the matrix.

  For an n x (n-1) matrix M, component i of the result is

    (-1)^i * det(M with row i removed)

  which is orthogonal to every column of M.  For n = 3 this is the usual cross
  product of the two columns.

  See Althoff, Stursberg, Buss: Computing Reachable Sets of Hybrid Systems
  Using a Combination of Zonotopes and Polytopes, 2009.

  Args:
    matrix: n x (n-1) matrix whose columns are the input vectors.

  Returns:
    An n-dimensional vector.

  Raises:
    ValueError: If the matrix does not have shape (n, n-1) with n >= 2.
  """
  matrix = np.asarray(matrix, dtype=np.float64)
  if (
      matrix.ndim != 2
      or matrix.shape[0] < 2
      or matrix.shape[1] != matrix.shape[0] - 1
  ):
    raise ValueError(
        '%s: shape=%s' % (CROSS_PRODUCT_SHAPE_MESSAGE, matrix.shape)
    )
  n = matrix.shape[0]
  result = np.zeros(n, dtype=np.float64)
  for i in range(n):
    minor = np.delete(matrix, i, axis=0)
    determinant = np.linalg.det(minor)
    result[i] = -determinant if i % 2 else determinant
  logging.debug('cross_product(%s) = %s', matrix.tolist(), result)
  return result


# ----------------------------------------------------------------------------
# Vector operations.


def rectify(x: math_types.VectorType) -> np.ndarray:
  """Returns a copy of x with each negative component replaced by zero."""
  return np.maximum(as_vector(x, dtype=np.float64), 0.0)


def distance(
    x: math_types.VectorType, y: math_types.VectorType, p: float = 2.0
) -> float:
  """Returns |x - y| in the p-norm.

  Args:
    x: First point.
    y: Second point.
    p: Order of the norm, e.g. 1, 2 or np.inf.

  Returns:
    (sum_i |x[i] - y[i]|^p)^(1/p)

  Raises:
    ValueError: If the points have different numbers of components.
  """
  x, y = _as_matching_vectors(x, y)
  return float(np.linalg.norm(x - y, ord=p))


def dot_zero(x: math_types.VectorType, y: math_types.VectorType) -> float:
  """Returns the dot product of x and y using the rule 0 * inf = 0."""
  x, y = _as_matching_vectors(x, y)
  both_nonzero = np.logical_and(x != 0, y != 0)
  return float(np.sum(x[both_nonzero] * y[both_nonzero]))


def nonzero_indices(v: math_types.VectorType) -> List[int]:
  """Returns the ascending indices at which v is not exactly zero."""
  return [int(i) for i in np.flatnonzero(np.asarray(v))]


def find_unique_nonzero_entry(v: math_types.VectorType) -> int:
  """Returns the index of the only non-zero entry of v.

  Args:
    v: Vector.

  Returns:
    The index of the non-zero entry, or -1 if v has no non-zero entry or more
    than one.
  """
  indices = nonzero_indices(v)
  if len(indices) != 1:
    return -1
  return indices[0]


def remove_duplicates_sorted(values: Sequence) -> List:
  """Returns the sorted sequence without consecutive duplicates."""
  result = []
  for value in values:
    if not result or result[-1] != value:
      result.append(value)
  return result


def all_equal(values: Sequence) -> bool:
  """Returns True if all elements of the sequence are equal."""
  return all(value == values[0] for value in values[1:])


def is_cyclic_permutation(candidate: Sequence, paragon: Sequence) -> bool:
  """Returns True if candidate is a rotation of paragon.

  For example, [2, 3, 1] is a cyclic permutation of [1, 2, 3], but [1, 3, 2]
  is not.
  """
  candidate = list(candidate)
  paragon = list(paragon)
  if len(candidate) != len(paragon):
    return False
  if not paragon:
    return True
  return any(
      candidate == paragon[shift:] + paragon[:shift]
      for shift in range(len(paragon))
  )


def is_permutation(u: Sequence, v: Sequence) -> bool:
  """Returns True if u and v contain the same elements up to reordering."""
  if len(u) != len(v):
    return False
  return collections.Counter(u) == collections.Counter(v)


def substitute(
    substitution: Dict[int, float], x: math_types.VectorType
) -> np.ndarray:
  """Returns a copy of x with x[index] = value for each substitution entry."""
  result = np.array(x, copy=True)
  for index, value in substitution.items():
    result[index] = value
  return result


def is_square(matrix: math_types.MatrixType) -> bool:
  """Returns True if the matrix has as many rows as columns."""
  shape = np.shape(matrix)
  return len(shape) == 2 and shape[0] == shape[1]


def is_invertible(
    matrix: math_types.MatrixType,
    cond_tol: float = math_types.DEFAULT_COND_TOL,
) -> bool:
  """A sufficient check that the matrix is invertible.

  If the result is True, the matrix is invertible.  If the result is False, the
  matrix is not square or its condition number is too large to conclude.

  Args:
    matrix: Matrix to check.
    cond_tol: Upper bound on the condition number.

  Returns:
    True if the matrix is square with condition number below cond_tol.
  """
  if not is_square(matrix):
    return False
  condition = np.linalg.cond(np.asarray(matrix, dtype=np.float64))
  return bool(math.isfinite(condition) and condition < cond_tol)
