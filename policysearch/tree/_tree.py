# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

"""Tree nodes produced by the search and the flattened :class:`TreeResult` exposed to callers.

The search returns a nested structure of :class:`LeafNode` and :class:`SplitNode` objects. The
:func:`flatten_tree` assembler walks it in pre-order (root, left subtree, right subtree) and stores
it in parallel node arrays, in the same layout as scikit-learn's ``Tree`` objects.
"""

from collections import namedtuple
import numpy as np
import scipy.sparse

from ..utilities import DOUBLE, INTP

TREE_LEAF = -1
TREE_UNDEFINED = -1


class LeafNode:
    """Terminal node assigning a single action to its observations.

    Parameters
    ----------
    action : int
        The chosen action.

    reward : float
        Total reward of `action` over the node's observations.

    value : (d,) array
        Total reward of every action over the node's observations.

    n_samples : int
        Number of observations in the node.
    """

    is_leaf = True

    def __init__(self, action, reward, value, n_samples):
        self.action = action
        self.reward = reward
        self.value = value
        self.n_samples = n_samples

    @property
    def depth(self):
        return 0


class SplitNode:
    """Internal node sending ``x[feature] <= threshold`` to `left` and the rest to `right`."""

    is_leaf = False

    def __init__(self, feature, threshold, left, right):
        assert left.n_samples > 0 and right.n_samples > 0, "a split produced an empty child"
        self.feature = feature
        self.threshold = threshold
        self.left = left
        self.right = right
        self.reward = left.reward + right.reward
        self.value = left.value + right.value
        self.n_samples = left.n_samples + right.n_samples

    @property
    def depth(self):
        return 1 + max(self.left.depth, self.right.depth)


FlatNode = namedtuple("FlatNode", ["node_id", "parent", "feature", "threshold",
                                   "action", "reward", "n_samples"])


class TreeResult:
    """Flattened, read-only policy tree.

    Nodes are numbered in pre-order, so node ``0`` is the root and the numbering is reproducible
    for identical inputs. Leaves have ``feature == -1``, ``threshold == nan`` and no children;
    split nodes have ``action == -1``.

    Attributes
    ----------
    node_count : int
        Number of nodes.

    parent, children_left, children_right : (node_count,) array of int
        Tree structure, ``-1`` where absent.

    feature : (node_count,) array of int
        Split feature of each node.

    threshold : (node_count,) array of float
        Split threshold of each node.

    action : (node_count,) array of int
        Action assigned by each leaf.

    reward : (node_count,) array of float
        Total reward achieved by the subtree rooted at each node.

    value : (node_count, n_actions) array of float
        Per-action reward sums over the observations of each node.

    n_node_samples : (node_count,) array of int
        Number of training observations reaching each node.

    total_reward : float
        Reward achieved by the whole tree, equal to ``reward[0]``.

    root : LeafNode or SplitNode
        The nested structure the arrays were built from.
    """

    def __init__(self, root, n_features, n_actions):
        self.root = root
        self.n_features = n_features
        self.n_actions = n_actions
        records = []
        _flatten(root, TREE_UNDEFINED, records)
        self.node_count = len(records)

        self.parent = np.array([r["parent"] for r in records], dtype=INTP)
        self.children_left = np.array([r["left"] for r in records], dtype=INTP)
        self.children_right = np.array([r["right"] for r in records], dtype=INTP)
        self.feature = np.array([r["feature"] for r in records], dtype=INTP)
        self.threshold = np.array([r["threshold"] for r in records], dtype=DOUBLE)
        self.action = np.array([r["action"] for r in records], dtype=INTP)
        self.reward = np.array([r["reward"] for r in records], dtype=DOUBLE)
        self.n_node_samples = np.array([r["n_samples"] for r in records], dtype=INTP)
        self.value = np.array([r["value"] for r in records], dtype=DOUBLE).reshape(self.node_count, n_actions)
        for arr in (self.parent, self.children_left, self.children_right, self.feature,
                    self.threshold, self.action, self.reward, self.n_node_samples, self.value):
            arr.setflags(write=False)

        self.total_reward = float(self.reward[0])
        self.max_depth = root.depth

    @property
    def is_leaf(self):
        return self.children_left == TREE_LEAF

    @property
    def n_leaves(self):
        return int(np.sum(self.is_leaf))

    @property
    def nodes(self):
        """The node table as a list of :class:`FlatNode` tuples, in pre-order."""
        return [FlatNode(i, int(self.parent[i]), int(self.feature[i]), float(self.threshold[i]),
                         int(self.action[i]), float(self.reward[i]), int(self.n_node_samples[i]))
                for i in range(self.node_count)]

    def _check_X(self, X):
        X = np.asarray(X, dtype=DOUBLE)
        if X.ndim != 2 or X.shape[1] != self.n_features:
            raise ValueError("X must be a 2-d array with {} columns, got shape {}".format(
                self.n_features, X.shape))
        return X

    def apply(self, X):
        """Return the id of the leaf that each row of `X` falls into.

        Parameters
        ----------
        X : (n, n_features) array

        Returns
        -------
        leaves : (n,) array of int
        """
        X = self._check_X(X)
        node = np.zeros(X.shape[0], dtype=INTP)
        rows = np.arange(X.shape[0])
        active = ~self.is_leaf[node]
        while np.any(active):
            r, current = rows[active], node[active]
            go_left = X[r, self.feature[current]] <= self.threshold[current]
            node[r] = np.where(go_left, self.children_left[current], self.children_right[current])
            active = ~self.is_leaf[node]
        return node

    def predict(self, X):
        """Return the action assigned to each row of `X`."""
        return self.action[self.apply(X)]

    def decision_path(self, X):
        """Return a CSR indicator matrix of shape (n, node_count) of the nodes each row visits."""
        leaves = self.apply(X)
        indptr = [0]
        indices = []
        for leaf in leaves:
            path = []
            node = leaf
            while node != TREE_UNDEFINED:
                path.append(node)
                node = self.parent[node]
            indices.extend(reversed(path))
            indptr.append(len(indices))
        data = np.ones(len(indices), dtype=INTP)
        return scipy.sparse.csr_matrix((data, np.array(indices, dtype=INTP), np.array(indptr, dtype=INTP)),
                                       shape=(len(leaves), self.node_count))

    def __eq__(self, other):
        if not isinstance(other, TreeResult):
            return NotImplemented
        return (self.node_count == other.node_count and
                self.n_actions == other.n_actions and
                np.array_equal(self.parent, other.parent) and
                np.array_equal(self.feature, other.feature) and
                np.array_equal(self.threshold, other.threshold, equal_nan=True) and
                np.array_equal(self.action, other.action) and
                np.array_equal(self.reward, other.reward) and
                np.array_equal(self.value, other.value) and
                np.array_equal(self.n_node_samples, other.n_node_samples))

    __hash__ = None

    def __repr__(self):
        return "TreeResult(node_count={}, max_depth={}, total_reward={!r})".format(
            self.node_count, self.max_depth, self.total_reward)


def _flatten(node, parent, records):
    node_id = len(records)
    record = {"parent": parent, "left": TREE_LEAF, "right": TREE_LEAF,
              "reward": node.reward, "value": node.value, "n_samples": node.n_samples}
    records.append(record)
    if node.is_leaf:
        record.update(feature=TREE_UNDEFINED, threshold=np.nan, action=node.action)
    else:
        record.update(feature=node.feature, threshold=node.threshold, action=TREE_UNDEFINED)
        record["left"] = _flatten(node.left, node_id, records)
        record["right"] = _flatten(node.right, node_id, records)
    return node_id


def flatten_tree(root, n_features, n_actions):
    """Assemble the nested search output into a :class:`TreeResult`."""
    return TreeResult(root, n_features, n_actions)
