# Copyright 2023 Intrinsic Innovation LLC

"""Operations on axis-aligned boxes (python3).

A hyperrectangle is any object that provides five primitives:

  dim           Number of dimensions n >= 1.
  center        Center vector c, a numpy array with n components.
  radius        Radius vector r, n non-negative half-widths.
  center_at(i)  c[i].
  radius_at(i)  r[i], which must be exactly 0 for a flat dimension.

The object represents the set {x : |x[i] - c[i]| <= r[i] for all i}.  Box,
Interval, Singleton and BallInf all satisfy the Hyperrectangle protocol.

Every other operation is a function in this module that only uses those
primitives:

  low, high            Corners of the box.
  generators           Axis-aligned generators of the zonotope form.
  vertices             All 2^k extreme points, k = number of non-flat axes.
  constraints          The 2n half-spaces whose intersection is the box.
  support_vector       Farthest point of the box in a direction.
  support_function     Maximum of d.x over the box.
  enclosing_norm       Maximum p-norm over all points of the box.
  enclosing_radius     p-norm of the radius vector.
  contains             Point membership, within tolerance.
  is_flat              True if some axis has approximately zero radius.
  split                Uniform partition into sub-boxes.
  rectify              Image of the box under x -> max(x, 0).
  volume               2^n * prod(r).
  project              Restriction to a subset of the axes.
  closest_point        Closest point of the box to a query point.
  distance             p-norm distance from a point to the box.

Operations that produce a new box always return a box.Box, whatever the type of
the input.

A dimension is flat when its radius is approximately zero, as decided by
vector_util.is_approx_zero.  Flat dimensions have no generator and never double
the number of vertices.
"""

import itertools
from typing import Iterator, List, NamedTuple, Protocol, Sequence, Text, Tuple
from typing import runtime_checkable

from absl import logging
from hyperbox import box
from hyperbox import math_types
from hyperbox import vector_util
import numpy as np

# ----------------------------------------------------------------------------
# Error messages for exceptions.
SET_DIMENSION_MESSAGE = 'Vector is incompatible with the set dimension'

SPLIT_BLOCKS_LENGTH_MESSAGE = 'Split needs a number of blocks in each dimension'

SPLIT_BLOCKS_INVALID_MESSAGE = (
    'Each dimension needs a whole number of blocks, at least one'
)


@runtime_checkable
class Hyperrectangle(Protocol):
  """Primitives that define an axis-aligned box."""

  @property
  def dim(self) -> int:
    ...

  @property
  def center(self) -> np.ndarray:
    ...

  @property
  def radius(self) -> np.ndarray:
    ...

  def center_at(self, i: int) -> float:
    ...

  def radius_at(self, i: int) -> float:
    ...


class HalfSpace(NamedTuple):
  """The half-space {x : direction . x <= offset}."""

  direction: np.ndarray
  offset: float

  def contains(self, point: math_types.VectorType) -> bool:
    point = vector_util.as_vector(
        point, dimension=len(self.direction), dtype=np.float64
    )
    return vector_util.is_less_equal(
        float(np.dot(self.direction, point)), self.offset
    )


def _as_set_vector(
    h: Hyperrectangle, values: math_types.VectorType, err_msg: Text = ''
) -> np.ndarray:
  """Returns the values as a float vector of shape (h.dim,).

  Args:
    h: The box that defines the dimension.
    values: Input vector values.
    err_msg: Error message string appended to exception in case of failure.

  Returns:
    The values as a one-dimensional numpy array.

  Raises:
    ValueError: If the values are not a vector with h.dim components.
  """
  vector = vector_util.as_vector(values, dtype=np.float64, err_msg=err_msg)
  if vector.shape != (h.dim,):
    raise ValueError(
        '%s: %s, expected shape (%d,) but found %s in %s\n%s'
        % (
            SET_DIMENSION_MESSAGE,
            vector_util.VECTOR_COMPONENTS_MESSAGE,
            h.dim,
            vector.shape,
            h,
            err_msg,
        )
    )
  return vector


# ----------------------------------------------------------------------------
# Corners.


def low(h: Hyperrectangle) -> np.ndarray:
  """Returns the lower corner center - radius."""
  return h.center - h.radius


def high(h: Hyperrectangle) -> np.ndarray:
  """Returns the upper corner center + radius."""
  return h.center + h.radius


def low_at(h: Hyperrectangle, i: int) -> float:
  return h.center_at(i) - h.radius_at(i)


def high_at(h: Hyperrectangle, i: int) -> float:
  return h.center_at(i) + h.radius_at(i)


# ----------------------------------------------------------------------------
# Zonotope representation.


def nonflat_dimensions(h: Hyperrectangle) -> List[int]:
  """Returns the ascending indices of the dimensions with non-zero radius."""
  return [
      i
      for i in range(h.dim)
      if not vector_util.is_approx_zero(h.radius_at(i))
  ]


def num_generators(h: Hyperrectangle) -> int:
  """Returns the number of generators, one per non-flat dimension."""
  return len(nonflat_dimensions(h))


def generators(h: Hyperrectangle) -> Iterator[np.ndarray]:
  """Iterates over the generators of the box.

  The generator for non-flat dimension i is radius[i] times the i-th unit
  vector.  The box is the set

    center + sum_i e_i * generator_i, with e_i in [-1, 1].

  Each call returns a new iterator that enumerates the generators again in
  ascending dimension order.

  Args:
    h: The box.

  Yields:
    One n-dimensional vector per non-flat dimension.
  """
  n = h.dim
  for i in nonflat_dimensions(h):
    yield vector_util.one_hot_vector(n, i, value=h.radius_at(i))


def generator_matrix(h: Hyperrectangle) -> np.ndarray:
  """Returns the n x k matrix whose columns are the generators."""
  gens = list(generators(h))
  if not gens:
    return np.zeros((h.dim, 0), dtype=np.float64)
  return np.stack(gens, axis=1)


# ----------------------------------------------------------------------------
# Polytope representation.


def vertices(h: Hyperrectangle) -> List[np.ndarray]:
  """Returns the list of vertices of the box.

  Flat dimensions are handled so that the result has no duplicates: a box with
  k non-flat dimensions has exactly 2^k vertices.  A box that is flat in every
  dimension has the single vertex center.

  Vertices are enumerated with a state vector s with entries -1, 0 or 1, where
  vertex(s)[i] = center[i] + s[i] * radius[i].  The entry is 0 for flat
  dimensions and starts at 1 otherwise.  The next state is found by scanning s
  from left to right, changing -1 to 1 and stopping at the first 1, which
  changes to -1.  Only the coordinates that change are recomputed.

  Args:
    h: The box.

  Returns:
    A list of 2^k vertices, each a new numpy array.
  """
  n = h.dim
  c = h.center
  r = h.radius
  state = np.zeros(n, dtype=np.int8)
  v = c.copy()
  num_vertices = 1
  for i in range(n):
    if not vector_util.is_approx_zero(r[i]):
      state[i] = 1
      v[i] += r[i]
      num_vertices *= 2

  result = [v.copy()]
  for _ in range(1, num_vertices):
    for j in range(n):
      if state[j] == -1:
        state[j] = 1
        v[j] = c[j] + r[j]
      elif state[j] == 1:
        state[j] = -1
        v[j] = c[j] - r[j]
        break
    result.append(v.copy())
  logging.debug('vertices(%s): %d vertices', h, num_vertices)
  return result


def constraints(h: Hyperrectangle) -> List[HalfSpace]:
  """Returns the 2n half-spaces whose intersection is the box.

  Constraint i is the upper bound x[i] <= high[i], and constraint i + n is the
  lower bound -x[i] <= -low[i] for the same dimension.

  Args:
    h: The box.

  Returns:
    A list of 2n HalfSpace constraints.
  """
  n = h.dim
  upper = high(h)
  lower = low(h)
  upper_constraints = []
  lower_constraints = []
  for i in range(n):
    e_i = vector_util.one_hot_vector(n, i)
    upper_constraints.append(HalfSpace(e_i, float(upper[i])))
    lower_constraints.append(HalfSpace(-e_i, float(-lower[i])))
  return upper_constraints + lower_constraints


# ----------------------------------------------------------------------------
# Support function.


def support_vector(
    h: Hyperrectangle, direction: math_types.VectorType
) -> np.ndarray:
  """Returns the support vector of the box in the given direction.

  The support vector is a point of the box that maximizes direction . x.  For
  components of the direction that are zero, the upper side of the box is
  chosen, so the zero direction returns the high corner.

  Args:
    h: The box.
    direction: Direction vector with h.dim components.

  Returns:
    center + right_continuous_sign(direction) * radius

  Raises:
    ValueError: If the direction has the wrong number of components.
  """
  direction = _as_set_vector(h, direction)
  return h.center + vector_util.right_continuous_sign(direction) * h.radius


def support_function(
    h: Hyperrectangle, direction: math_types.VectorType
) -> float:
  """Returns the maximum of direction . x over all points x in the box.

  Args:
    h: The box.
    direction: Direction vector with h.dim components.

  Returns:
    sum_i d[i] * center[i] + |d[i]| * radius[i]

  Raises:
    ValueError: If the direction has the wrong number of components.
  """
  direction = _as_set_vector(h, direction)
  result = 0.0
  for i, d_i in enumerate(direction):
    if d_i > 0:
      result += d_i * high_at(h, i)
    elif d_i < 0:
      result += d_i * low_at(h, i)
  return float(result)


# ----------------------------------------------------------------------------
# Norms.


def enclosing_norm(h: Hyperrectangle, p: float = np.inf) -> float:
  """Returns the maximum p-norm of any point in the box.

  This is the radius of the smallest p-norm ball centered at the origin that
  contains the box.

  The maximum of a convex function over a polytope is attained at a vertex:

    max_x |x|_p = max over signs a_i of (sum_i |c_i + a_i r_i|^p)^(1/p)

  Each term is maximized independently by the sign of c_i, so the maximum is
  attained at the vertex c + right_continuous_sign(c) * r, and only that
  vertex is evaluated.

  Args:
    h: The box.
    p: Order of the norm.

  Returns:
    The p-norm of the farthest vertex from the origin.
  """
  c = h.center
  farthest = c + vector_util.right_continuous_sign(c) * h.radius
  return float(np.linalg.norm(farthest, ord=p))


def enclosing_radius(h: Hyperrectangle, p: float = np.inf) -> float:
  """Returns the p-norm of the radius vector.

  This is the radius of the smallest p-norm ball centered at the center of the
  box that contains the box.  Every vertex is at this distance from the
  center.

  Args:
    h: The box.
    p: Order of the norm.

  Returns:
    |radius|_p
  """
  return float(np.linalg.norm(h.radius, ord=p))


# ----------------------------------------------------------------------------
# Membership.


def contains(h: Hyperrectangle, point: math_types.VectorType) -> bool:
  """Returns True if the point lies in the box.

  A point lies in the box iff |center[i] - point[i]| <= radius[i] in every
  dimension.  The comparison is tolerant, so points within floating point
  error of the boundary are contained.

  Args:
    h: The box.
    point: Point with h.dim components.

  Raises:
    ValueError: If the point has the wrong number of components.
  """
  point = _as_set_vector(h, point)
  for i, x_i in enumerate(point):
    offset = abs(h.center_at(i) - x_i)
    if not vector_util.is_less_equal(offset, h.radius_at(i)):
      return False
  return True


def is_flat(h: Hyperrectangle) -> bool:
  """Returns True if the radius is approximately zero in some dimension."""
  return any(vector_util.is_approx_zero(h.radius_at(i)) for i in range(h.dim))


def volume(h: Hyperrectangle) -> float:
  """Returns the volume 2^n * prod_i radius[i] of the box.

  The volume is 0 exactly when the box is flat.  A nearly flat radius counts
  as zero, and a box that is not flat never reports 0: if the product
  underflows, the smallest positive float is returned instead.

  Args:
    h: The box.

  Returns:
    The volume, 0 if and only if is_flat(h).
  """
  if is_flat(h):
    return 0.0
  result = float(np.prod(2.0 * h.radius))
  if result == 0.0:
    logging.warning('volume(%s) underflows; returning the smallest float.', h)
    result = float(np.nextafter(0.0, 1.0))
  return result


# ----------------------------------------------------------------------------
# Derived boxes.


def split(h: Hyperrectangle, num_blocks: Sequence[int]) -> List[box.Box]:
  """Partitions the box into uniform sub-boxes.

  Dimension i is cut into num_blocks[i] blocks of equal size.  The result has
  one box for every combination of blocks, prod(num_blocks) boxes in total,
  with the blocks of the last dimension varying fastest.

  Args:
    h: The box.
    num_blocks: Number of blocks in each dimension, all integers >= 1.

  Returns:
    A list of new Box objects.

  Raises:
    ValueError: If num_blocks does not have h.dim entries or if an entry is
      not an integer >= 1.
  """
  if len(num_blocks) != h.dim:
    raise ValueError(
        '%s: num_blocks=%r, dim=%d'
        % (SPLIT_BLOCKS_LENGTH_MESSAGE, list(num_blocks), h.dim)
    )
  r = h.radius
  lo = low(h)
  sub_radius = r.copy()
  centers = []
  for i, m in enumerate(num_blocks):
    if not isinstance(m, (int, np.integer)) or m < 1:
      raise ValueError(
          '%s: num_blocks[%d]=%r' % (SPLIT_BLOCKS_INVALID_MESSAGE, i, m)
      )
    if m == 1:
      centers.append([h.center_at(i)])
    else:
      sub_radius[i] = r[i] / m
      centers.append(lo[i] + sub_radius[i] * (1 + 2 * np.arange(m)))

  result = [
      box.Box(np.array(center), sub_radius, check_radius=False)
      for center in itertools.product(*centers)
  ]
  logging.debug('split(%s, %s): %d boxes', h, list(num_blocks), len(result))
  return result


def rectify(h: Hyperrectangle) -> box.Box:
  """Returns the rectification of the box.

  Rectification maps every point x to max(x, 0) componentwise.  The map is
  monotone in each dimension, so the image of a box is the box spanned by the
  rectified corners.

  Args:
    h: The box.

  Returns:
    The Box with corners rectify(low) and rectify(high).
  """
  result = box.Box.from_corners(
      vector_util.rectify(low(h)), vector_util.rectify(high(h))
  )
  logging.debug('rectify(%s) = %s', h, result)
  return result


def project(h: Hyperrectangle, axes: Sequence[int]) -> box.Box:
  """Returns the projection of the box onto the given axes.

  The result has dimension len(axes), with axis j of the result equal to axis
  axes[j] of the box.  The axes must be valid, distinct indices; this is not
  checked beyond numpy indexing.

  Args:
    h: The box.
    axes: Indices of the dimensions to keep, in the order of the result.

  Returns:
    A new Box.
  """
  axes = list(axes)
  return box.Box(h.center[axes], h.radius[axes], check_radius=False)


# ----------------------------------------------------------------------------
# Distance.


def closest_point(
    h: Hyperrectangle, point: math_types.VectorType
) -> np.ndarray:
  """Returns the point of the box closest to the given point.

  Each coordinate is clamped independently to the box.  This gives the closest
  point in every p-norm, because the p-norm is a sum of per-coordinate terms
  that can be minimized separately.

  Args:
    h: The box.
    point: Point with h.dim components.

  Returns:
    The closest point, which equals the input if it lies in the box.

  Raises:
    ValueError: If the point has the wrong number of components.
  """
  point = _as_set_vector(h, point)
  result, _ = _clamp(h, point)
  return result


def _clamp(
    h: Hyperrectangle, point: np.ndarray
) -> Tuple[np.ndarray, bool]:
  """Returns the clamped point and whether any coordinate was clamped."""
  result = point.copy()
  outside = False
  for i, x_i in enumerate(point):
    c_i = h.center_at(i)
    r_i = h.radius_at(i)
    delta = x_i - c_i
    if abs(delta) > r_i:
      result[i] = c_i + vector_util.right_continuous_sign(delta) * r_i
      outside = True
  return result, outside


def distance(
    h: Hyperrectangle, point: math_types.VectorType, p: float = 2.0
) -> float:
  """Returns the p-norm distance between a point and the box.

  The distance compares coordinates exactly, while contains accepts points
  within tolerance of the boundary.  A point just outside the box can
  therefore be contained and still have a tiny positive distance; the
  distance is 0 if and only if the point lies in the box exactly.

  Args:
    h: The box.
    point: Point with h.dim components.
    p: Order of the norm.

  Returns:
    0 if the point lies in the box, otherwise the p-norm distance from the
    point to closest_point(h, point).

  Raises:
    ValueError: If the point has the wrong number of components.
  """
  point = _as_set_vector(h, point)
  nearest, outside = _clamp(h, point)
  if not outside:
    return 0.0
  return vector_util.distance(point, nearest, p=p)

