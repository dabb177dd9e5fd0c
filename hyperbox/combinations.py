# Copyright 2023 Intrinsic Innovation LLC

"""Enumeration of strictly increasing index vectors (python3).

StrictlyIncreasingIndices(n, m) ranges over the C(n, m) vectors of m strictly
increasing indices from {1, ..., n}, in lexicographic order with the last index
growing first:

  for v in StrictlyIncreasingIndices(4, 2):
    print(v)

  [1, 2]
  [1, 3]
  [1, 4]
  [2, 3]
  [2, 4]
  [3, 4]

The vectors are produced by an IndexCursor, which modifies a single list in
place.  Copy a value before advancing the cursor if it needs to be kept.
"""

import math
from typing import List, Optional, Text

# ----------------------------------------------------------------------------
# Error messages for exceptions.
INVALID_INDICES_MESSAGE = 'Index enumeration requires n >= m > 0'


class IndexCursor(object):
  """Position in an enumeration of strictly increasing index vectors.

  Attributes:
    _n: Size of the index domain {1, ..., n}.
    _m: Number of indices in each vector.
    _indices: Current index vector, shared with the caller.
    _started: True once the first vector has been returned.
    _exhausted: True once every vector has been returned.
  """

  def __init__(self, n: int, m: int):
    self._n = n
    self._m = m
    self._indices = list(range(1, m + 1))
    self._started = False
    self._exhausted = False

  @property
  def exhausted(self) -> bool:
    """Returns True if no further vectors will be produced."""
    return self._exhausted

  def advance(self) -> Optional[List[int]]:
    """Moves to the next index vector.

    Finds the rightmost index that is below its maximum value, increments it
    and resets every index to its right to consecutive successors.  The index
    at position i (0-based) has the maximum value n - m + 1 + i.

    Returns:
      The next index vector, or None if the enumeration is complete.  The
      returned list is reused by the next call.
    """
    if self._exhausted:
      return None
    if not self._started:
      self._started = True
      return self._indices
    i = self._m - 1
    while i >= 0 and self._indices[i] == self._n - self._m + 1 + i:
      i -= 1
    if i < 0:
      self._exhausted = True
      return None
    self._indices[i] += 1
    for j in range(i + 1, self._m):
      self._indices[j] = self._indices[j - 1] + 1
    return self._indices

  def __iter__(self) -> 'IndexCursor':
    return self

  def __next__(self) -> List[int]:
    indices = self.advance()
    if indices is None:
      raise StopIteration
    return indices

  def __repr__(self) -> Text:
    return 'IndexCursor(n=%d, m=%d, indices=%r, exhausted=%r)' % (
        self._n,
        self._m,
        self._indices,
        self._exhausted,
    )


class StrictlyIncreasingIndices(object):
  """Restartable sequence of m strictly increasing indices from 1 to n."""

  def __init__(self, n: int, m: int):
    """Initializes the sequence.

    Args:
      n: Size of the index domain {1, ..., n}.
      m: Number of indices to choose.

    Raises:
      ValueError: Unless n >= m >= 1.
    """
    if not n >= m >= 1:
      raise ValueError('%s: n=%r, m=%r' % (INVALID_INDICES_MESSAGE, n, m))
    self._n = n
    self._m = m

  @property
  def n(self) -> int:
    return self._n

  @property
  def m(self) -> int:
    return self._m

  def cursor(self) -> IndexCursor:
    """Returns a new cursor positioned before the first index vector."""
    return IndexCursor(self._n, self._m)

  def __iter__(self) -> IndexCursor:
    return self.cursor()

  def __len__(self) -> int:
    return math.comb(self._n, self._m)

  def __repr__(self) -> Text:
    return 'StrictlyIncreasingIndices(%d, %d)' % (self._n, self._m)
