# Copyright 2023 Intrinsic Innovation LLC

"""Tests for hyperbox.box."""

from absl.testing import absltest
from absl.testing import parameterized
from hyperbox import box
from hyperbox import interval
from hyperbox import math_test
from hyperbox import vector_util
import numpy as np


class BoxTest(parameterized.TestCase, math_test.TestCase):

  def test_init(self):
    b = box.Box([1, 2, 3], [0.5, 0, 2])
    self.assertEqual(b.dim, 3)
    self.assert_all_equal(b.center, [1, 2, 3])
    self.assert_all_equal(b.radius, [0.5, 0, 2])
    self.assertEqual(b.center.dtype, np.float64)
    self.assertEqual(b.radius.dtype, np.float64)

  def test_init_copies_arguments(self):
    center = np.array([1.0, 2.0])
    radius = np.array([3.0, 4.0])
    b = box.Box(center, radius)
    center[0] = 10.0
    radius[0] = 10.0
    self.assert_all_equal(b.center, [1, 2])
    self.assert_all_equal(b.radius, [3, 4])

  def test_properties_return_copies(self):
    b = box.Box([1, 2], [3, 4])
    b.center[0] = 10.0
    b.radius[0] = 10.0
    self.assertEqual(b, box.Box([1, 2], [3, 4]))

  def test_center_at_and_radius_at(self):
    b = box.Box([1, -2, 3], [4, 0, 6])
    for i in range(b.dim):
      self.assertEqual(b.center_at(i), b.center[i])
      self.assertEqual(b.radius_at(i), b.radius[i])
      self.assertIsInstance(b.center_at(i), float)
      self.assertIsInstance(b.radius_at(i), float)
    self.assertRaises(IndexError, b.center_at, 3)

  @parameterized.named_parameters(
      ('length_mismatch', [0, 0], [1, 1, 1]),
      ('empty', [], []),
      ('scalar', 1.0, 1.0),
      ('matrix', [[0, 0], [0, 0]], [[1, 1], [1, 1]]),
  )
  def test_init_fails_for_bad_shape(self, center, radius):
    self.assertRaisesRegex(
        ValueError, box.BOX_SHAPE_MESSAGE, box.Box, center, radius
    )

  def test_init_fails_for_nan(self):
    self.assertRaisesRegex(
        ValueError, box.BOX_NAN_MESSAGE, box.Box, [0, np.nan], [1, 1]
    )
    self.assertRaisesRegex(
        ValueError, box.BOX_NAN_MESSAGE, box.Box, [0, 0], [np.nan, 1]
    )

  def test_init_fails_for_negative_radius(self):
    self.assertRaisesRegex(
        ValueError,
        box.BOX_NEGATIVE_RADIUS_MESSAGE,
        box.Box,
        [0, 0],
        [1, -1],
    )
    b = box.Box([0, 0], [1, -1], check_radius=False)
    self.assert_all_equal(b.radius, [1, -1])

  def test_eq_and_ne(self):
    b = box.Box([1, 2], [3, 4])
    self.check_eq_and_ne_for_equal_values(b, box.Box([1.0, 2.0], [3.0, 4.0]))
    self.check_eq_and_ne_for_unequal_values(b, box.Box([1, 2], [3, 5]))
    self.check_eq_and_ne_for_unequal_values(b, box.Box([1, 3], [3, 4]))
    self.check_eq_and_ne_for_unequal_values(b, box.Box([1, 2, 0], [3, 4, 0]))
    self.check_eq_and_ne_for_unequal_values(b, 'Box([1, 2], [3, 4])')

  def test_almost_equal(self):
    b = box.Box([1, 2], [3, 4])
    self.assertTrue(b.almost_equal(box.Box([1, 2 + 1e-12], [3, 4])))
    self.assertFalse(b.almost_equal(box.Box([1, 2.1], [3, 4])))
    self.assertTrue(b.almost_equal(box.Box([1, 2.1], [3, 4]), atol=0.2))
    self.assertFalse(b.almost_equal(box.Box([1, 2, 3], [3, 4, 5])))

  def test_copy(self):
    b = box.Box([1, 2], [3, 4])
    c = b.copy()
    self.assertEqual(b, c)
    self.assertIsNot(b, c)

  def test_str_and_repr(self):
    b = box.Box([1, 2], [3, 4])
    self.assertEqual(str(b), 'Box([1. 2.], [3. 4.])')
    self.assertEqual(repr(b), 'Box(array([1., 2.]), array([3., 4.]))')

  # --------------------------------------------------------------------------
  # Factory functions
  # --------------------------------------------------------------------------

  def test_zero(self):
    b = box.Box.zero()
    self.assertEqual(b.dim, 3)
    self.assert_all_equal(b.center, 0)
    self.assert_all_equal(b.radius, 0)
    self.assertEqual(box.Box.zero(2), box.Box([0, 0], [0, 0]))

  def test_unit(self):
    self.assertEqual(box.Box.unit(2), box.Box([0.5, 0.5], [0.5, 0.5]))
    self.assertEqual(box.Box.unit().dim, 3)

  def test_from_point(self):
    b = box.Box.from_point([1, -2, 3])
    self.assert_all_equal(b.center, [1, -2, 3])
    self.assert_all_equal(b.radius, [0, 0, 0])

  def test_from_corners(self):
    b = box.Box.from_corners([1, 2], [3, 6])
    self.assertEqual(b, box.Box([2, 4], [1, 2]))
    self.assertEqual(
        box.Box.from_corners([1, 1], [1, 1]), box.Box.from_point([1, 1])
    )

  def test_from_corners_fails(self):
    self.assertRaisesRegex(
        ValueError,
        box.BOX_CORNERS_MESSAGE,
        box.Box.from_corners,
        [0, 3],
        [1, 2],
    )
    self.assertRaisesRegex(
        ValueError,
        vector_util.VECTOR_COMPONENTS_MESSAGE,
        box.Box.from_corners,
        [0, 0],
        [1, 1, 1],
    )

  def test_from_intervals(self):
    b = box.Box.from_intervals(
        [interval.Interval((0, 2)), interval.Interval.from_value(-1)]
    )
    self.assertEqual(b, box.Box([1, -1], [1, 0]))


if __name__ == '__main__':
  absltest.main()
