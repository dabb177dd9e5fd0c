# Copyright 2023 Intrinsic Innovation LLC

"""Interval class (python3).

An Interval is the one-dimensional hyperrectangle [lo, hi] with finite
endpoints lo <= hi.  It is stored as its pair of endpoints and exposes the
hyperrectangle primitives with

  dim = 1, center = [(lo + hi) / 2], radius = [(hi - lo) / 2],

so every function in hyperbox.hyperrectangle accepts it.  An interval with
lo == hi is a single value and is flat.
"""

from typing import Text

from hyperbox import math_types
from hyperbox import vector_util
import numpy as np

# ----------------------------------------------------------------------------
# Error messages for exceptions.
INTERVAL_INVALID_BOUNDS_MESSAGE = 'Interval needs finite bounds lo <= hi.'

NEGATIVE_LENGTH_MESSAGE = 'Interval length must be non-negative.'


class Interval(object):
  """A closed, bounded interval of real numbers.

  Attributes:
    _bounds: numpy array [lo, hi].

  Properties:
    bounds, minimum, maximum: The endpoints.
    length, midpoint, half_length: Size and position.
    dim, center, radius: One-dimensional hyperrectangle view.
  Factory functions:
    zero, unit, from_length, from_value.
  """

  def __init__(self, bounds: math_types.VectorType):
    """Creates the interval from its endpoints.

    Args:
      bounds: Pair [lo, hi].

    Raises:
      ValueError: Unless bounds holds two finite values with lo <= hi.
    """
    self._bounds = vector_util.as_finite_vector(
        bounds,
        dimension=2,
        dtype=np.float64,
        err_msg=INTERVAL_INVALID_BOUNDS_MESSAGE,
    ).copy()
    if self._bounds[0] > self._bounds[1]:
      raise ValueError(
          '%s: lo=%s, hi=%s'
          % (INTERVAL_INVALID_BOUNDS_MESSAGE, self._bounds[0], self._bounds[1])
      )

  # --------------------------------------------------------------------------
  # Endpoints
  # --------------------------------------------------------------------------

  @property
  def bounds(self) -> np.ndarray:
    return self._bounds.copy()

  @property
  def minimum(self) -> float:
    return float(self._bounds[0])

  @property
  def maximum(self) -> float:
    return float(self._bounds[1])

  @property
  def length(self) -> float:
    """hi - lo, never negative."""
    return self.maximum - self.minimum

  @property
  def midpoint(self) -> float:
    return (self.minimum + self.maximum) * 0.5

  @property
  def half_length(self) -> float:
    return self.length * 0.5

  # --------------------------------------------------------------------------
  # Hyperrectangle primitives
  # --------------------------------------------------------------------------

  @property
  def dim(self) -> int:
    return 1

  @property
  def center(self) -> np.ndarray:
    return np.array([self.midpoint])

  @property
  def radius(self) -> np.ndarray:
    return np.array([self.half_length])

  def center_at(self, i: int) -> float:
    return float(self.center[i])

  def radius_at(self, i: int) -> float:
    return float(self.radius[i])

  # --------------------------------------------------------------------------
  # Comparison
  # --------------------------------------------------------------------------

  def __eq__(self, other: 'Interval') -> bool:
    if not isinstance(other, Interval):
      return NotImplemented
    return bool(np.all(self._bounds == other._bounds))

  def almost_equal(
      self,
      other: 'Interval',
      rtol: float = math_types.DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE,
      atol: float = math_types.DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE,
  ) -> bool:
    """Returns True if both endpoints agree within np.allclose tolerances."""
    return bool(np.allclose(self._bounds, other.bounds, rtol=rtol, atol=atol))

  def contains(self, value: float) -> bool:
    """Tests lo <= value <= hi, accepting values within tolerance of an end."""
    return vector_util.is_less_equal(
        self.minimum, value
    ) and vector_util.is_less_equal(value, self.maximum)

  def __str__(self) -> Text:
    return '[%s, %s]' % (self.minimum, self.maximum)

  def __repr__(self) -> Text:
    return 'Interval([%r, %r])' % (self.minimum, self.maximum)

  # --------------------------------------------------------------------------
  # Factory functions
  # --------------------------------------------------------------------------

  @classmethod
  def zero(cls) -> 'Interval':
    """The single value 0."""
    return cls.from_value(0.0)

  @classmethod
  def unit(cls) -> 'Interval':
    """[0, 1]."""
    return cls((0.0, 1.0))

  @classmethod
  def from_length(cls, length: float) -> 'Interval':
    """Returns the interval of the given length centered at 0.

    Raises:
      ValueError: If the length is negative.
    """
    if length < 0:
      raise ValueError('%s: %s' % (NEGATIVE_LENGTH_MESSAGE, length))
    half = length * 0.5
    return cls((-half, half))

  @classmethod
  def from_value(cls, value: float) -> 'Interval':
    """Returns the flat interval [value, value]."""
    return cls((value, value))
