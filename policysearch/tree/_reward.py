# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

"""Per-action reward bookkeeping used when scoring leaves and scanning thresholds."""

import numpy as np


def reward_sums(Y, samples):
    """Sum the rewards of every action over a subset of observations.

    Parameters
    ----------
    Y : (n, d) array
        The reward matrix.

    samples : (m,) array of int
        Row indices of the subset.

    Returns
    -------
    sums : (d,) array
        ``sums[a]`` is the total reward of assigning action ``a`` to every row in `samples`.
    """
    return Y[samples].sum(axis=0)


def best_action(sums, tol=0.):
    """Return the action with the largest reward sum and that sum.

    Ties go to the lowest action index; sums within `tol` of the largest one count as tied.
    """
    action = int(np.flatnonzero(sums >= sums.max() - tol)[0])
    return action, float(sums[action])


class RewardAccumulator:
    """Running per-action reward sums over a subset scanned in increasing feature order.

    Moving the threshold from one sorted position to the next moves exactly the rows in between
    from the right side to the left side, so the sums of every admissible threshold are obtained
    from a single cumulative sum over the sorted rewards instead of a rescan per threshold.

    Parameters
    ----------
    Y : (n, d) array
        The reward matrix.

    order : (m,) array of int
        Row indices of the subset, sorted by the feature being scanned.
    """

    def __init__(self, Y, order):
        self.rewards = Y[order]
        self.total = self.rewards.sum(axis=0)
        self._left = None

    @property
    def left(self):
        """(m, d) array whose row ``i`` holds the sums of the first ``i + 1`` sorted rows."""
        if self._left is None:
            self._left = np.cumsum(self.rewards, axis=0)
        return self._left

    @property
    def right(self):
        """(m, d) array whose row ``i`` holds the sums of the rows after sorted position ``i``."""
        return self.total - self.left

    def best_split_rewards(self, positions):
        """Reward of the best action on each side, summed, for every candidate position.

        Parameters
        ----------
        positions : (k,) array of int
            Sorted positions of the last row that goes to the left side.

        Returns
        -------
        rewards : (k,) array
        """
        left = self.left[positions]
        right = self.total - left
        return left.max(axis=1) + right.max(axis=1)
