# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

import numpy as np

from ..tree import TreeBuilder, SplitNode, flatten_tree
from ..utilities import InvalidInputError, check_int_param, check_search_inputs
from ._tree import _BasePolicyTree


class HybridPolicyTree(_BasePolicyTree):
    """ Policy tree grown by greedy look-ahead, for depths where exhaustive search is too slow.

    A node with at most `search_depth` levels left is solved exactly, as by :class:`PolicyTree`.
    Otherwise the exact tree of depth `search_depth` is found on the node's samples, only its root
    split is kept, and each side is grown in the same way with one level less. If the look-ahead
    tree is a single leaf, so is the node.

    Parameters
    ----------
    depth : int, default 3
        The maximum depth of the tree.

    search_depth : int, default 2
        The depth of the exact look-ahead search, between 1 and `depth`.

    split_step : int, default 1
        Evaluate every `split_step`-th distinct value of each feature as a threshold.

    min_node_size : int, default 1
        The minimum number of samples required to be at a leaf node.

    n_jobs : int or None, default 1
        The number of jobs evaluating the features of every look-ahead root in parallel.

    verbose : int, default 0
        Controls the verbosity of the parallel evaluation.

    Attributes
    ----------
    tree_ : TreeResult
        The fitted tree.

    policy_value_ : float
        The average reward per sample achieved by the recommended policy

    always_treat_value_ : ndarray of shape (n_actions,)
        The average reward per sample of the policy assigning each single action to everyone
    """

    def __init__(self, *,
                 depth=3,
                 search_depth=2,
                 split_step=1,
                 min_node_size=1,
                 n_jobs=1,
                 verbose=0):
        self.depth = depth
        self.search_depth = search_depth
        self.split_step = split_step
        self.min_node_size = min_node_size
        self.n_jobs = n_jobs
        self.verbose = verbose

    def _grow(self, X, y, rows, depth):
        levels = min(depth, self.search_depth)
        builder = TreeBuilder(X[rows], y[rows], split_step=self.split_step_,
                              min_node_size=self.min_node_size_)
        node = builder.search(levels, n_jobs=self.n_jobs, verbose=self.verbose)
        if depth <= self.search_depth or node.is_leaf:
            return node
        go_left = X[rows, node.feature] <= node.threshold
        left = self._grow(X, y, rows[go_left], depth - 1)
        right = self._grow(X, y, rows[~go_left], depth - 1)
        return SplitNode(node.feature, node.threshold, left, right)

    def fit(self, X, y):
        """ Fit the tree from the data

        Parameters
        ----------
        X : (n, n_features) array
            The features to split on

        y : (n, n_actions) array
            The reward for each of the actions

        Returns
        -------
        self : object instance
        """
        X_arr, y_arr, depth, self.split_step_, self.min_node_size_ = check_search_inputs(
            X, y, self.depth, self.split_step, self.min_node_size)
        search_depth = check_int_param(self.search_depth, "search_depth", 1)
        if search_depth > depth:
            raise InvalidInputError("search_depth must be at most depth, got search_depth={} and depth={}".format(
                search_depth, depth))
        root = self._grow(X_arr, y_arr, np.arange(X_arr.shape[0]), depth)
        assert root.depth <= depth
        tree = flatten_tree(root, X_arr.shape[1], y_arr.shape[1])
        return self._store_fit(X, y, tree)
