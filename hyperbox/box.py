# Copyright 2023 Intrinsic Innovation LLC

"""Box class (python3).

This library implements a Box class defined by a center and a radius.

A Box is a closed, axis-aligned hyperrectangle.  It is described by its center
vector and a non-negative radius vector holding the half-width of the box in
each dimension.  A point v lies in the box if

  |v[i] - center[i]| <= radius[i] for all i.

A 1-dimensional Box is an interval.
A 2-dimensional Box is a square or rectangle.
A 3-dimensional Box is a cube or rectilinear solid.

For example, b = Box([0.5, 0.5, 0.5], [0.5, 0.5, 0.5]) describes the unit cube
in 3D with one corner at the origin, which could be written as a Cartesian
product of intervals:
  [0,1] x [0,1] x [0,1].

A radius of zero in some dimension makes the box flat in that dimension.  The
box still contains points, but has zero volume.

Box only stores its center and radius.  Vertices, constraints, support
functions, splitting and all other geometric operations are provided by the
hyperbox.hyperrectangle module for any object with dim, center, center_at,
radius and radius_at, and Box is the type those operations return.
"""

from typing import Iterable, Text

from hyperbox import interval
from hyperbox import math_types
from hyperbox import vector_util
import numpy as np

# ----------------------------------------------------------------------------
# Error messages for exceptions.

BOX_SHAPE_MESSAGE = (
    'Box center and radius should be vectors with the same dimension >= 1.'
)

BOX_NAN_MESSAGE = 'Box should not contain any NaN values.'

BOX_NEGATIVE_RADIUS_MESSAGE = 'Box radius should be non-negative.'

BOX_CORNERS_MESSAGE = (
    'Box corners should satisfy low <= high in every dimension.'
)


class Box(object):
  """A closed, axially-aligned box represented by its center and radius.

  ------------------------------------------------------------------------------
  Representation:

  The box is represented by two 1D numpy arrays of the same length:

    center = [c_0, ..., c_n-1]
    radius = [r_0, ..., r_n-1]

  It defines the set of points:

    v such that center[i] - radius[i] <= v[i] <= center[i] + radius[i]

  ------------------------------------------------------------------------------
  Attributes:
    _center: Center of the box as a numpy array.
    _radius: Non-negative half-width of the box in each dimension.

  Properties:
    dim: Number of dimensions.
    center: Center vector.
    radius: Radius vector.
  Factory functions:
    zero: Returns the box containing exactly the origin.
    unit: Returns the box [0, 1] in every dimension.
    from_corners: Returns a box with the given low and high corners.
    from_point: Returns the box containing exactly one point.
    from_intervals: Returns a box with the given interval in each dimension.
  """

  def __init__(
      self,
      center: math_types.VectorType,
      radius: math_types.VectorType,
      check_radius: bool = True,
  ):
    """Initializes the box from its center and radius.

    Args:
      center: Center of the box.
      radius: Half-width of the box in each dimension.
      check_radius: Whether to verify that the radius is non-negative.  Only
        disable this check for data derived from an existing valid box.

    Raises:
      ValueError: If the center and radius are not vectors of the same
        dimension, contain NaN values, or the radius is negative.
    """
    self._center = np.array(center, copy=True, dtype=np.float64)
    self._radius = np.array(radius, copy=True, dtype=np.float64)
    self._check_valid(check_radius=check_radius)

  # --------------------------------------------------------------------------
  # Properties
  # --------------------------------------------------------------------------

  @property
  def dim(self) -> int:
    """Returns the dimensionality of the vector space.

    For example, Box([0, 0, 0], [1, 1, 1]).dim = 3
    """
    return self._center.shape[0]

  @property
  def center(self) -> np.ndarray:
    """Returns the center of the box."""
    return self._center.copy()

  @property
  def radius(self) -> np.ndarray:
    """Returns the radius of the box, its half-width in each dimension."""
    return self._radius.copy()

  def center_at(self, i: int) -> float:
    """Returns the center coordinate in dimension i."""
    return float(self._center[i])

  def radius_at(self, i: int) -> float:
    """Returns the radius in dimension i."""
    return float(self._radius[i])

  # --------------------------------------------------------------------------
  # Operators
  # --------------------------------------------------------------------------

  def __eq__(self, other: 'Box') -> bool:
    """Returns true if the two boxes have identical center and radius."""
    if not isinstance(other, Box):
      return NotImplemented
    return bool(
        self.dim == other.dim
        and np.all(self._center == other._center)
        and np.all(self._radius == other._radius)
    )

  def __str__(self) -> Text:
    """Returns a string that describes the box."""
    return 'Box(%s, %s)' % (self._center, self._radius)

  def __repr__(self) -> Text:
    """Returns a string representation of the box."""
    return 'Box(%r, %r)' % (self._center, self._radius)

  # --------------------------------------------------------------------------
  # Utility functions
  # --------------------------------------------------------------------------

  def almost_equal(
      self,
      other: 'Box',
      rtol: float = math_types.DEFAULT_RTOL_VALUE_FOR_NP_IS_CLOSE,
      atol: float = math_types.DEFAULT_ATOL_VALUE_FOR_NP_IS_CLOSE,
  ) -> bool:
    """Tests whether the two boxes are equivalent within tolerances.

    Args:
      other: Another box.
      rtol: relative tolerance
      atol: absolute tolerance

    Returns:
      True if the boxes have the same dimension and their centers and radii
      are equal within the tolerances.
    """
    return bool(
        self.dim == other.dim
        and np.allclose(self._center, other.center, rtol=rtol, atol=atol)
        and np.allclose(self._radius, other.radius, rtol=rtol, atol=atol)
    )

  def copy(self) -> 'Box':
    return Box(self._center, self._radius, check_radius=False)

  # --------------------------------------------------------------------------
  # Checks
  # --------------------------------------------------------------------------

  def _check_valid(self, check_radius: bool = True, err_msg: Text = '') -> None:
    """Raises a ValueError exception if the box is not well defined."""
    if (
        self._center.ndim != 1
        or self._center.shape != self._radius.shape
        or self._center.shape[0] < 1
    ):
      raise ValueError(
          '%s: center.shape=%s radius.shape=%s %s'
          % (
              BOX_SHAPE_MESSAGE,
              self._center.shape,
              self._radius.shape,
              err_msg,
          )
      )
    if np.any(np.isnan(self._center)) or np.any(np.isnan(self._radius)):
      raise ValueError('%s: %r %s' % (BOX_NAN_MESSAGE, self, err_msg))
    if check_radius and np.any(self._radius < 0):
      raise ValueError(
          '%s: radius=%s %s'
          % (BOX_NEGATIVE_RADIUS_MESSAGE, self._radius, err_msg)
      )

  # --------------------------------------------------------------------------
  # Factory functions
  # --------------------------------------------------------------------------

  @classmethod
  def zero(cls, dim: int = 3) -> 'Box':
    """Returns the box containing exactly the origin."""
    return cls(np.zeros(dim), np.zeros(dim))

  @classmethod
  def unit(cls, dim: int = 3) -> 'Box':
    """Returns the box containing [0, 1] in every dimension."""
    return cls(np.full(dim, 0.5), np.full(dim, 0.5))

  @classmethod
  def from_point(cls, point: math_types.VectorType) -> 'Box':
    """Constructs a Box that contains a single point."""
    point = vector_util.as_vector(point, dtype=np.float64)
    return cls(point, np.zeros_like(point))

  @classmethod
  def from_corners(
      cls, low: math_types.VectorType, high: math_types.VectorType
  ) -> 'Box':
    """Constructs a Box from its low and high corners.

    Args:
      low: Minimum corner of the box.
      high: Maximum corner of the box.

    Returns:
      The Box with center (low + high) / 2 and radius (high - low) / 2.

    Raises:
      ValueError: If corners are defined with different dimensions or if
        low > high in any dimension.
    """
    low = vector_util.as_vector(low, dtype=np.float64)
    high = vector_util.as_vector(
        high, dimension=len(low), dtype=np.float64, err_msg=BOX_SHAPE_MESSAGE
    )
    if np.any(low > high):
      raise ValueError(
          '%s: Box.from_corners(%s, %s)' % (BOX_CORNERS_MESSAGE, low, high)
      )
    return cls((low + high) * 0.5, (high - low) * 0.5)

  @classmethod
  def from_intervals(cls, ivals: Iterable[interval.Interval]) -> 'Box':
    """Constructs a Box with the given interval in each dimension."""
    ivals = list(ivals)
    return cls(
        [ival.midpoint for ival in ivals],
        [ival.half_length for ival in ivals],
    )
