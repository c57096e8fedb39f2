# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

import unittest
import numpy as np
import pandas as pd
from policysearch.utilities import InvalidInputError, check_int_param, check_search_inputs, get_input_columns


class TestUtilities(unittest.TestCase):

    def test_check_search_inputs(self):
        X = [[1, 2], [3, 4], [5, 6]]
        Y = pd.DataFrame({'a': [1., 2., 3.], 'b': [0., 0., 0.]})
        X_arr, Y_arr, depth, split_step, min_node_size = check_search_inputs(X, Y, np.int64(2), 3)
        assert X_arr.dtype == np.float64 and X_arr.shape == (3, 2)
        assert Y_arr.dtype == np.float64 and Y_arr.shape == (3, 2)
        assert (depth, split_step, min_node_size) == (2, 3, 1)
        assert isinstance(depth, int)

        X_arr, _, _, _, _ = check_search_inputs(np.zeros((3, 0)), Y, 1)
        assert X_arr.shape == (3, 0)

    def test_invalid(self):
        X = np.zeros((3, 2))
        Y = np.zeros((3, 2))
        with self.assertRaises(InvalidInputError):
            check_search_inputs(X, Y, True)
        with self.assertRaises(InvalidInputError):
            check_search_inputs(X, Y, "1")
        with self.assertRaises(InvalidInputError):
            check_search_inputs(X, np.zeros((4, 2)), 1)
        with self.assertRaises(InvalidInputError):
            check_search_inputs(X, np.zeros((3, 1)), 1)
        with self.assertRaises(InvalidInputError):
            check_search_inputs([["a", "b"]] * 3, Y, 1)
        with self.assertRaises(InvalidInputError):
            check_int_param(0, "split_step", 1)
        assert check_int_param(np.int32(4), "depth", 0) == 4
        assert issubclass(InvalidInputError, ValueError)

    def test_get_input_columns(self):
        assert get_input_columns(None) is None
        assert get_input_columns(np.zeros((2, 3))) == ['X0', 'X1', 'X2']
        assert get_input_columns(np.zeros((2, 2)), prefix="A") == ['A0', 'A1']
        assert get_input_columns(pd.DataFrame({'x': [1], 'z': [2]})) == ['x', 'z']
        assert get_input_columns(pd.Series([1, 2], name='s')) == ['s']
        with self.assertWarns(UserWarning):
            assert get_input_columns(pd.DataFrame({0: [1], 1: [2]})) == ['0', '1']
        with self.assertRaises(ValueError):
            get_input_columns(3)
