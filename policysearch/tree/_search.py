# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

"""Exhaustive search for the depth-bounded policy tree with the largest total reward."""

import warnings
import numpy as np
from joblib import Parallel, delayed

from ..utilities import DOUBLE, check_search_inputs
from ._reward import reward_sums, best_action
from ._splitter import evaluate_feature
from ._tree import LeafNode, flatten_tree

# Above this many distinct values in a feature, exhaustive search of depth >= 2 becomes slow.
LARGE_CARDINALITY = 15000


class TreeBuilder:
    """Depth-first solver of the policy tree search.

    A node is represented by the list of its rows sorted by each feature. The lists are sorted once
    at the root; the children of a split inherit filtered, still sorted, copies.

    Parameters
    ----------
    X : (n, p) array
        The covariates.

    Y : (n, d) array
        The rewards.

    split_step : int, default 1
        Threshold decimation step.

    min_node_size : int, default 1
        Minimum number of rows per leaf.
    """

    def __init__(self, X, Y, split_step=1, min_node_size=1):
        self.X = X
        self.Y = Y
        self.split_step = split_step
        self.min_node_size = min_node_size

    def root_sets(self):
        """Row indices sorted by each feature, ties kept in row order."""
        return [np.argsort(self.X[:, j], kind="stable") for j in range(self.X.shape[1])]

    def leaf(self, samples, tol=None):
        """Best single-action leaf for `samples`."""
        if tol is None:
            tol = self.tolerance(samples)
        value = reward_sums(self.Y, samples)
        action, reward = best_action(value, tol)
        return LeafNode(action, reward, value, samples.shape[0])

    def _terminal(self, n_samples, depth):
        return depth == 0 or self.X.shape[1] == 0 or n_samples < 2 * self.min_node_size

    def tolerance(self, samples):
        """Bound on the rounding error of any total reward over the rows `samples`.

        Two totals of the node closer than this are treated as equal. The bound scales with the
        node's absolute reward mass, so it moves with a constant shift of the rewards only as far as
        the rounding error does.
        """
        return samples.shape[0] * self.Y.shape[1] * np.finfo(DOUBLE).eps * np.abs(self.Y[samples]).sum()

    def choose(self, leaf, candidates, tol):
        """Reduce per-feature candidates, in feature order, against the leaf fallback.

        A candidate replaces the current best only if better by more than `tol`, so the lowest
        feature wins ties, and the leaf wins any tie with the best split.
        """
        best = None
        for split in candidates:
            if split is not None and (best is None or split.reward > best.reward + tol):
                best = split
        if best is not None and best.reward > leaf.reward + tol:
            return best
        return leaf

    def build(self, sorted_sets, depth):
        """Solve the node made of the rows in `sorted_sets` with `depth` levels left."""
        samples = sorted_sets[0]
        tol = self.tolerance(samples)
        leaf = self.leaf(samples, tol)
        if self._terminal(samples.shape[0], depth):
            return leaf
        candidates = [evaluate_feature(self, feature, sorted_sets, depth, tol)
                      for feature in range(self.X.shape[1])]
        return self.choose(leaf, candidates, tol)

    def search(self, depth, n_jobs=1, verbose=0):
        """Solve the root node.

        The features of the root are evaluated by `n_jobs` joblib workers; the reduction runs in
        feature order, so the tree does not depend on `n_jobs`.
        """
        n, p = self.X.shape
        if p == 0:
            return self.leaf(np.arange(n))
        sorted_sets = self.root_sets()
        samples = sorted_sets[0]
        tol = self.tolerance(samples)
        leaf = self.leaf(samples, tol)
        if self._terminal(n, depth):
            return leaf
        candidates = Parallel(n_jobs=n_jobs, verbose=verbose)(
            delayed(evaluate_feature)(self, feature, sorted_sets, depth, tol) for feature in range(p))
        return self.choose(leaf, candidates, tol)


def _warn_large_cardinality(X, depth, split_step):
    if depth < 2 or split_step > 1 or X.shape[1] == 0:
        return
    n_unique = max(np.unique(X[:, j]).shape[0] for j in range(X.shape[1]))
    if n_unique > LARGE_CARDINALITY:
        warnings.warn("A feature has {} distinct values; an exhaustive search of depth {} may take a long "
                      "time. Consider a larger split_step.".format(n_unique, depth), UserWarning)


def tree_search(X, Y, depth, split_step=1, *, min_node_size=1, n_jobs=1, verbose=0):
    """Find the policy tree of depth at most `depth` with the largest total reward.

    Parameters
    ----------
    X : (n, p) array_like
        The covariates to split on. Must be finite.

    Y : (n, d) array_like
        The reward of each of the ``d >= 2`` actions for every observation.

    depth : int
        Maximum depth of the tree. Zero gives the best constant-action policy.

    split_step : int, default 1
        Evaluate every ``split_step``-th distinct value of a feature as a threshold. One searches
        every threshold and gives the optimal tree; larger values trade reward for speed.

    min_node_size : int, default 1
        Minimum number of observations in each leaf.

    n_jobs : int or None, default 1
        Number of joblib workers evaluating the root's features. ``None`` means 1 unless in a
        :func:`joblib.parallel_backend` context, ``-1`` means all processors.

    verbose : int, default 0
        Verbosity of the joblib workers.

    Returns
    -------
    tree : TreeResult
        The flattened optimal tree and its total reward.

    Raises
    ------
    InvalidInputError
        If the inputs are malformed; no search is run.
    """
    X, Y, depth, split_step, min_node_size = check_search_inputs(X, Y, depth, split_step, min_node_size)
    _warn_large_cardinality(X, depth, split_step)
    builder = TreeBuilder(X, Y, split_step=split_step, min_node_size=min_node_size)
    root = builder.search(depth, n_jobs=n_jobs, verbose=verbose)
    assert root.depth <= depth
    return flatten_tree(root, X.shape[1], Y.shape[1])
