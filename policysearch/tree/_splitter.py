# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

"""Evaluation of the candidate thresholds of a single feature."""

import numpy as np

from ._reward import RewardAccumulator
from ._tree import SplitNode


def candidate_positions(values, split_step=1, min_node_size=1):
    """Sorted positions at which a node may be split.

    A position ``i`` stands for the threshold ``values[i]``: rows ``0..i`` go left and the rest go
    right. Only the last position of each distinct value is admissible, and the largest value is
    never one, so neither side is empty.

    Parameters
    ----------
    values : (m,) array
        Feature values of the node's rows, in increasing order.

    split_step : int, default 1
        Keep every ``split_step``-th distinct value, starting from the smallest.

    min_node_size : int, default 1
        Drop positions that leave fewer than ``min_node_size`` rows on either side.

    Returns
    -------
    positions : (k,) array of int
    """
    m = values.shape[0]
    positions = np.flatnonzero(values[:-1] < values[1:])
    positions = positions[::split_step]
    if min_node_size > 1:
        positions = positions[(positions + 1 >= min_node_size) & (m - positions - 1 >= min_node_size)]
    return positions


def partition(sorted_sets, in_left):
    """Split every per-feature sorted index array of a node by a boolean row mask.

    Filtering keeps the order, so the children's arrays are sorted without re-sorting.
    """
    left_sets = [s[in_left[s]] for s in sorted_sets]
    right_sets = [s[~in_left[s]] for s in sorted_sets]
    return left_sets, right_sets


def evaluate_feature(builder, feature, sorted_sets, depth, tol=None):
    """Find the best split of a node on one feature.

    Parameters
    ----------
    builder : TreeBuilder
        The search the node belongs to; solves the children of every candidate split.

    feature : int
        The feature to scan.

    sorted_sets : list of (m,) arrays of int
        The node's rows, sorted by each feature.

    depth : int
        Remaining depth of the node, at least one.

    tol : float, optional
        Totals closer than this are equal. Defaults to the rounding bound of the node, see
        :meth:`TreeBuilder.tolerance`.

    Returns
    -------
    split : SplitNode or None
        The candidate with the largest total reward, the lowest threshold among those within
        `tol` of each other, with its children solved at ``depth - 1``. None if the feature admits
        no split.
    """
    assert depth >= 1
    X, Y = builder.X, builder.Y
    order = sorted_sets[feature]
    values = X[order, feature]
    positions = candidate_positions(values, builder.split_step, builder.min_node_size)
    if positions.shape[0] == 0:
        return None
    if tol is None:
        tol = builder.tolerance(sorted_sets[0])

    in_left = np.zeros(X.shape[0], dtype=bool)
    if depth == 1:
        # children are leaves, so every threshold is scored from running sums in one pass
        accumulator = RewardAccumulator(Y, order)
        scores = accumulator.best_split_rewards(positions)
        pos = positions[np.flatnonzero(scores >= scores.max() - tol)[0]]
        in_left[order[:pos + 1]] = True
        samples = sorted_sets[0]
        mask = in_left[samples]
        return SplitNode(feature, float(values[pos]),
                         builder.leaf(samples[mask]), builder.leaf(samples[~mask]))

    best = None
    filled = 0
    for pos in positions:
        in_left[order[filled:pos + 1]] = True
        filled = pos + 1
        left_sets, right_sets = partition(sorted_sets, in_left)
        left = builder.build(left_sets, depth - 1)
        right = builder.build(right_sets, depth - 1)
        if best is None or left.reward + right.reward > best.reward + tol:
            best = SplitNode(feature, float(values[pos]), left, right)
    return best
