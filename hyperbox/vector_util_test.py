# Copyright 2023 Intrinsic Innovation LLC

"""Tests for hyperbox.vector_util."""

import math

from absl.testing import absltest
from absl.testing import parameterized
import hypothesis
from hypothesis import strategies
from hypothesis.extra import numpy as np_strategies
from hyperbox import math_test
from hyperbox import math_types
from hyperbox import vector_util
import numpy as np

_FINITE_FLOATS = strategies.floats(
    min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False
)


@strategies.composite
def _cross_product_matrices(draw):
  """Draws an n x (n-1) matrix with small integer entries, 2 <= n <= 5."""
  n = draw(strategies.integers(min_value=2, max_value=5))
  return draw(
      np_strategies.arrays(
          dtype=np.float64,
          shape=(n, n - 1),
          elements=strategies.integers(min_value=-10, max_value=10).map(float),
      )
  )


class VectorUtilTest(parameterized.TestCase, math_test.TestCase):

  # --------------------------------------------------------------------------
  # Input validation.
  # --------------------------------------------------------------------------

  def test_one_hot_vector(self):
    self.assert_all_equal(vector_util.one_hot_vector(3, 0), [1, 0, 0])
    self.assert_all_equal(vector_util.one_hot_vector(4, 2), [0, 0, 1, 0])
    self.assert_all_equal(
        vector_util.one_hot_vector(4, 2, value=-3), [0, 0, -3, 0]
    )
    self.assertEqual(vector_util.one_hot_vector(2, 1).dtype, np.float64)

  def test_as_vector(self):
    self.assert_all_equal(vector_util.as_vector([1, 2, 3]), [1, 2, 3])
    self.assert_all_equal(
        vector_util.as_vector((1, np.inf), dimension=2), [1, np.inf]
    )
    self.assertEqual(
        vector_util.as_vector([1, 2], dtype=np.float64).dtype, np.float64
    )

  def test_as_vector_fails(self):
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_COMPONENTS_MESSAGE,
        vector_util.as_vector,
        [1, 2, 3],
        2,
    )
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_VALUES_MESSAGE,
        vector_util.as_vector,
        [1, np.nan],
    )

  def test_as_finite_vector(self):
    self.assert_all_close(
        vector_util.as_finite_vector([3, 4], normalize=True), [0.6, 0.8]
    )
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_INFINITE_VALUES_MESSAGE,
        vector_util.as_finite_vector,
        [1, np.inf],
    )
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_ZERO_MAGNITUDE_MESSAGE,
        vector_util.as_finite_vector,
        [0, 0],
        normalize=True,
    )

  def test_normalize_vector(self):
    self.assert_all_close(vector_util.normalize_vector([0, -2, 0]), [0, -1, 0])
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_ZERO_MAGNITUDE_MESSAGE,
        vector_util.normalize_vector,
        [1e-15, 0],
    )

  # --------------------------------------------------------------------------
  # Tolerant comparisons.
  # --------------------------------------------------------------------------

  @parameterized.named_parameters(
      ('equal', 1.0, 1.0),
      ('relative', 1.0, 1.0 + 1e-10),
      ('large', 1e9, 1e9 + 1.0),
      ('near_zero', 1e-13, -1e-13),
      ('infinity', np.inf, np.inf),
  )
  def test_is_close(self, a, b):
    self.assertTrue(vector_util.is_close(a, b))
    self.assertTrue(vector_util.is_close(b, a))

  @parameterized.named_parameters(
      ('different', 1.0, 1.001),
      ('small', 1e-9, 2e-9),
      ('opposite_infinities', np.inf, -np.inf),
      ('infinite', np.inf, 1e300),
      ('nan', np.nan, np.nan),
  )
  def test_is_not_close(self, a, b):
    self.assertFalse(vector_util.is_close(a, b))
    self.assertFalse(vector_util.is_close(b, a))

  def test_is_close_tolerances(self):
    self.assertFalse(vector_util.is_close(1.0, 1.1))
    self.assertTrue(vector_util.is_close(1.0, 1.1, rtol=0.2))
    self.assertTrue(vector_util.is_close(0.0, 0.5, atol=1.0))
    self.assertTrue(vector_util.is_close(0.001, -0.001, ztol=0.01))

  @hypothesis.given(_FINITE_FLOATS, _FINITE_FLOATS)
  def test_is_close_is_symmetric(self, a, b):
    self.assertEqual(vector_util.is_close(a, b), vector_util.is_close(b, a))

  @hypothesis.given(_FINITE_FLOATS)
  def test_is_close_is_reflexive(self, a):
    self.assertTrue(vector_util.is_close(a, a))
    self.assertTrue(vector_util.is_less_equal(a, a))
    self.assertTrue(vector_util.is_greater_equal(a, a))

  def test_is_approx_zero(self):
    self.assertTrue(vector_util.is_approx_zero(0.0))
    self.assertTrue(vector_util.is_approx_zero(-1e-13))
    self.assertFalse(vector_util.is_approx_zero(1e-6))
    self.assertTrue(vector_util.is_approx_zero(1e-6, ztol=1e-5))

  def test_is_less_equal(self):
    self.assertTrue(vector_util.is_less_equal(1.0, 2.0))
    self.assertTrue(vector_util.is_less_equal(1.0 + 1e-10, 1.0))
    self.assertFalse(vector_util.is_less_equal(1.1, 1.0))
    self.assertTrue(vector_util.is_less_equal(-np.inf, 0.0))

  def test_is_greater_equal(self):
    self.assertTrue(vector_util.is_greater_equal(2.0, 1.0))
    self.assertTrue(vector_util.is_greater_equal(1.0, 1.0 + 1e-10))
    self.assertFalse(vector_util.is_greater_equal(1.0, 1.1))

  # --------------------------------------------------------------------------
  # Directions.
  # --------------------------------------------------------------------------

  @parameterized.parameters((-0.6, -1.0), (0.0, 1.0), (-0.0, 1.0), (1.3, 1.0))
  def test_right_continuous_sign(self, x, expected):
    self.assertEqual(vector_util.right_continuous_sign(x), expected)

  def test_right_continuous_sign_vector(self):
    self.assert_all_equal(
        vector_util.right_continuous_sign([-2.0, 0.0, 3.0]), [-1, 1, 1]
    )

  @parameterized.named_parameters(
      ('positive', [1, 2, 3], [2, 4, 6], False, (True, 0.5)),
      ('not_multiple', [1, 2, 3], [3, 2, 1], True, (False, 0.0)),
      ('negative_rejected', [1, 2, 3], [-1, -2, -3], False, (False, 0.0)),
      ('negative_allowed', [1, 2, 3], [-1, -2, -3], True, (True, -1.0)),
      ('zero_pattern', [0, 1], [1, 1], True, (False, 0.0)),
      ('zero_pattern_reversed', [1, 1], [1, 0], True, (False, 0.0)),
      ('shared_zeros', [0, 3, 0, 6], [0, 1, 0, 2], False, (True, 3.0)),
      ('both_zero', [0, 0], [0, 0], False, (True, 0.0)),
  )
  def test_direction_relation(self, u, v, allow_negative, expected):
    related, factor = vector_util.direction_relation(u, v, allow_negative)
    self.assertEqual(related, expected[0])
    self.assert_close(factor, expected[1])

  def test_direction_relation_is_tolerant(self):
    related, factor = vector_util.direction_relation(
        [1.0, 2.0 + 1e-12], [2.0, 4.0], False
    )
    self.assertTrue(related)
    self.assert_close(factor, 0.5)
    related, _ = vector_util.direction_relation(
        [1.0, 2.001], [2.0, 4.0], False
    )
    self.assertFalse(related)

  def test_direction_relation_length_mismatch(self):
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_LENGTH_MISMATCH_MESSAGE,
        vector_util.direction_relation,
        [1, 2],
        [1, 2, 3],
        True,
    )

  def test_same_direction_and_is_multiple(self):
    self.assertEqual(
        vector_util.same_direction([2, 0, 4], [1, 0, 2]), (True, 2.0)
    )
    self.assertEqual(vector_util.same_direction([-2, 0], [1, 0]), (False, 0.0))
    self.assertEqual(vector_util.is_multiple([-2, 0], [1, 0]), (True, -2.0))

  def test_is_pointing_towards(self):
    self.assertTrue(vector_util.is_pointing_towards([1, 0], [1, 1]))
    self.assertFalse(vector_util.is_pointing_towards([1, 0], [-1, 5]))
    self.assertFalse(vector_util.is_pointing_towards([1, 0], [0, 1]))

  def test_is_above(self):
    self.assertTrue(vector_util.is_above([0, 1], [0, 2], [0, 1]))
    self.assertFalse(vector_util.is_above([0, 1], [0, 1], [0, 2]))

  @parameterized.named_parameters(
      ('counter_clockwise', [1, 0], [0, 1], None, 1.0),
      ('clockwise', [0, 1], [1, 0], None, -1.0),
      ('collinear', [1, 1], [2, 2], None, 0.0),
      ('origin', [2, 1], [1, 2], [1, 1], 1.0),
      ('scaled', [2, 0], [0, 3], None, 6.0),
  )
  def test_turn_sign(self, u, v, origin, expected):
    self.assert_close(vector_util.turn_sign(u, v, origin=origin), expected)

  def test_turn_sign_fails_for_3d(self):
    self.assertRaisesRegex(
        ValueError,
        vector_util.TURN_DIMENSION_MESSAGE,
        vector_util.turn_sign,
        [1, 0, 0],
        [0, 1, 0],
    )

  def test_is_right_turn(self):
    self.assertTrue(vector_util.is_right_turn([1, 0], [0, 1]))
    self.assertFalse(vector_util.is_right_turn([0, 1], [1, 0]))
    self.assertTrue(vector_util.is_right_turn([1, 1], [2, 2]))
    self.assertTrue(vector_util.is_right_turn([2, 1], [1, 2], origin=[1, 1]))

  def test_cross_product_3d(self):
    self.assert_all_close(
        vector_util.cross_product([[1, 0], [0, 1], [0, 0]]), [0, 0, 1]
    )
    a = np.array([1.0, 2.0, 3.0])
    b = np.array([-4.0, 0.5, 2.0])
    self.assert_all_close(
        vector_util.cross_product(np.stack([a, b], axis=1)), np.cross(a, b)
    )

  def test_cross_product_2d(self):
    self.assert_all_close(vector_util.cross_product([[1], [0]]), [0, -1])
    self.assert_all_close(vector_util.cross_product([[3], [4]]), [4, -3])

  @hypothesis.given(_cross_product_matrices())
  def test_cross_product_is_orthogonal(self, matrix):
    result = vector_util.cross_product(matrix)
    self.assertEqual(result.shape, (matrix.shape[0],))
    self.assert_all_close(
        np.dot(result, matrix), np.zeros(matrix.shape[1]), atol=1e-6
    )

  @parameterized.named_parameters(
      ('square', np.eye(3)),
      ('too_short', np.zeros((3, 1))),
      ('one_row', np.zeros((1, 0))),
      ('vector', np.zeros(3)),
  )
  def test_cross_product_fails_for_bad_shape(self, matrix):
    self.assertRaisesRegex(
        ValueError,
        vector_util.CROSS_PRODUCT_SHAPE_MESSAGE,
        vector_util.cross_product,
        matrix,
    )

  # --------------------------------------------------------------------------
  # Vector operations.
  # --------------------------------------------------------------------------

  def test_rectify(self):
    x = np.array([-1.0, 0.0, 2.0, -0.5])
    self.assert_all_equal(vector_util.rectify(x), [0, 0, 2, 0])
    self.assert_all_equal(x, [-1.0, 0.0, 2.0, -0.5])

  @parameterized.parameters((2.0, 5.0), (1.0, 7.0), (np.inf, 4.0))
  def test_distance(self, p, expected):
    self.assert_close(vector_util.distance([0, 0], [3, -4], p=p), expected)

  def test_distance_length_mismatch(self):
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_LENGTH_MISMATCH_MESSAGE,
        vector_util.distance,
        [0, 0],
        [1, 2, 3],
    )

  def test_dot_zero(self):
    self.assertEqual(vector_util.dot_zero([0, 1], [np.inf, 2]), 2.0)
    self.assertEqual(vector_util.dot_zero([1, 2], [3, 4]), 11.0)
    self.assertFalse(math.isnan(vector_util.dot_zero([np.inf], [0])))

  def test_nonzero_indices(self):
    self.assertEqual(vector_util.nonzero_indices([0, 1, 0, 2]), [1, 3])
    self.assertEqual(vector_util.nonzero_indices([0, 0]), [])

  @parameterized.parameters(
      ([0, 0, 3], 2), ([5, 0], 0), ([0, 0], -1), ([1, 1], -1)
  )
  def test_find_unique_nonzero_entry(self, v, expected):
    self.assertEqual(vector_util.find_unique_nonzero_entry(v), expected)

  def test_remove_duplicates_sorted(self):
    self.assertEqual(
        vector_util.remove_duplicates_sorted([1, 1, 2, 3, 3, 3]), [1, 2, 3]
    )
    self.assertEqual(vector_util.remove_duplicates_sorted([]), [])

  def test_all_equal(self):
    self.assertTrue(vector_util.all_equal([2, 2, 2]))
    self.assertTrue(vector_util.all_equal([7]))
    self.assertFalse(vector_util.all_equal([1, 2]))

  def test_is_cyclic_permutation(self):
    self.assertTrue(vector_util.is_cyclic_permutation([2, 3, 1], [1, 2, 3]))
    self.assertTrue(vector_util.is_cyclic_permutation([1, 2, 3], [1, 2, 3]))
    self.assertFalse(vector_util.is_cyclic_permutation([1, 3, 2], [1, 2, 3]))
    self.assertFalse(vector_util.is_cyclic_permutation([1, 2], [1, 2, 3]))

  def test_is_permutation(self):
    self.assertTrue(vector_util.is_permutation([1, 2, 2], [2, 1, 2]))
    self.assertFalse(vector_util.is_permutation([1, 2], [1, 1]))
    self.assertFalse(vector_util.is_permutation([1], [1, 1]))

  def test_substitute(self):
    x = np.array([1.0, 2.0, 3.0])
    self.assert_all_equal(
        vector_util.substitute({0: 5.0, 2: -1.0}, x), [5.0, 2.0, -1.0]
    )
    self.assert_all_equal(x, [1.0, 2.0, 3.0])

  def test_is_square(self):
    self.assertTrue(vector_util.is_square(np.eye(2)))
    self.assertFalse(vector_util.is_square(np.zeros((2, 3))))
    self.assertFalse(vector_util.is_square(np.zeros(4)))

  def test_is_invertible(self):
    self.assertTrue(vector_util.is_invertible(np.eye(3)))
    self.assertTrue(vector_util.is_invertible([[2, 1], [1, 3]]))
    self.assertFalse(vector_util.is_invertible([[1, 1], [1, 1]]))
    self.assertFalse(vector_util.is_invertible(np.zeros((2, 3))))
    self.assertFalse(
        vector_util.is_invertible([[1, 0], [0, 1e-9]]),
    )
    self.assertTrue(
        vector_util.is_invertible(
            [[1, 0], [0, 1e-9]], cond_tol=math_types.DEFAULT_COND_TOL * 1e6
        ),
    )


if __name__ == '__main__':
  absltest.main()
