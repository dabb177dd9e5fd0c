# Copyright 2023 Intrinsic Innovation LLC

"""Singleton class (python3).

A Singleton is the set containing exactly one point.  As a hyperrectangle it
has its element as center and a zero radius in every dimension, so it is flat
in every dimension: it has one vertex, no generators and zero volume.
"""

from typing import Text

from hyperbox import math_types
from hyperbox import vector_util
import numpy as np

SINGLETON_EMPTY_MESSAGE = (
    'Singleton element should have at least one component.'
)


class Singleton(object):
  """A set with a single element.

  Attributes:
    _element: The point, as a numpy array.
  """

  def __init__(self, element: math_types.VectorType):
    self._element = np.array(
        vector_util.as_vector(element, dtype=np.float64), copy=True
    )
    if self._element.ndim != 1 or self._element.shape[0] < 1:
      raise ValueError(
          '%s: shape=%s' % (SINGLETON_EMPTY_MESSAGE, self._element.shape)
      )

  @property
  def element(self) -> np.ndarray:
    return self._element.copy()

  @property
  def dim(self) -> int:
    return self._element.shape[0]

  @property
  def center(self) -> np.ndarray:
    return self._element.copy()

  @property
  def radius(self) -> np.ndarray:
    return np.zeros(self.dim, dtype=np.float64)

  def center_at(self, i: int) -> float:
    return float(self._element[i])

  def radius_at(self, i: int) -> float:
    return float(self.radius[i])

  def __eq__(self, other: 'Singleton') -> bool:
    if not isinstance(other, Singleton):
      return NotImplemented
    return bool(
        self.dim == other.dim and np.all(self._element == other._element)
    )

  def __str__(self) -> Text:
    return 'Singleton(%s)' % self._element

  def __repr__(self) -> Text:
    return 'Singleton(%r)' % self._element
