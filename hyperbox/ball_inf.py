# Copyright 2023 Intrinsic Innovation LLC

"""BallInf class (python3).

A BallInf is a ball in the infinity norm:

  {x : max_i |x[i] - center[i]| <= radius}

It is the hyperrectangle with the same radius in every dimension.
"""

from typing import Text

from hyperbox import math_types
from hyperbox import vector_util
import numpy as np

NEGATIVE_RADIUS_MESSAGE = 'BallInf radius should be a non-negative number.'

BALL_CENTER_MESSAGE = 'BallInf center should have at least one component.'


class BallInf(object):
  """A ball in the infinity norm, represented by a center and a scalar radius.

  Attributes:
    _center: Center of the ball, as a numpy array.
    _radius: Non-negative scalar radius.
  """

  def __init__(self, center: math_types.VectorType, radius: float):
    """Initializes the ball.

    Args:
      center: Center of the ball.
      radius: Radius of the ball, shared by all dimensions.

    Raises:
      ValueError: If the center is empty or the radius is negative or NaN.
    """
    self._center = np.array(
        vector_util.as_vector(center, dtype=np.float64), copy=True
    )
    if self._center.ndim != 1 or self._center.shape[0] < 1:
      raise ValueError(
          '%s: shape=%s' % (BALL_CENTER_MESSAGE, self._center.shape)
      )
    if not math_types.is_scalar(radius) or not radius >= 0:
      raise ValueError('%s: %r' % (NEGATIVE_RADIUS_MESSAGE, radius))
    self._radius = float(radius)

  @property
  def dim(self) -> int:
    return self._center.shape[0]

  @property
  def center(self) -> np.ndarray:
    return self._center.copy()

  @property
  def radius(self) -> np.ndarray:
    """Returns the radius in every dimension as a vector."""
    return np.full(self.dim, self._radius)

  @property
  def ball_radius(self) -> float:
    """Returns the scalar radius of the ball."""
    return self._radius

  def center_at(self, i: int) -> float:
    return float(self._center[i])

  def radius_at(self, i: int) -> float:
    return float(self.radius[i])

  def __eq__(self, other: 'BallInf') -> bool:
    if not isinstance(other, BallInf):
      return NotImplemented
    return bool(
        self.dim == other.dim
        and np.all(self._center == other._center)
        and self._radius == other._radius
    )

  def __str__(self) -> Text:
    return 'BallInf(%s, %s)' % (self._center, self._radius)

  def __repr__(self) -> Text:
    return 'BallInf(%r, %r)' % (self._center, self._radius)
