# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

import numpy as np
from sklearn.base import BaseEstimator
from sklearn.utils import check_array
from sklearn.utils.validation import check_is_fitted

from ..tree import tree_search
from ..utilities import DOUBLE, get_input_columns
from ._base import PolicyLearner


class _BasePolicyTree(PolicyLearner, BaseEstimator):
    """Prediction methods shared by the estimators wrapping a fitted :class:`~policysearch.tree.TreeResult`."""

    def _store_fit(self, X, y, tree):
        self.tree_ = tree
        self.n_samples_ = int(tree.n_node_samples[0])
        self.n_features_in_ = tree.n_features
        self.n_actions_ = tree.n_actions
        self.feature_names_ = get_input_columns(X, prefix="X")
        self.action_names_ = get_input_columns(y, prefix="A")
        self.policy_value_ = tree.total_reward / self.n_samples_
        self.always_treat_value_ = tree.value[0] / self.n_samples_
        return self

    def _validate_X_predict(self, X):
        X = check_array(X, dtype=DOUBLE, ensure_min_features=0)
        if self.n_features_in_ != X.shape[1]:
            raise ValueError("Number of features of the model must "
                             "match the input. Model n_features is %s and "
                             "input n_features is %s "
                             % (self.n_features_in_, X.shape[1]))
        return X

    def get_depth(self):
        """Return the depth of the fitted tree."""
        check_is_fitted(self)
        return self.tree_.max_depth

    def get_n_leaves(self):
        """Return the number of leaves of the fitted tree."""
        check_is_fitted(self)
        return self.tree_.n_leaves

    def apply(self, X):
        """Return the index of the leaf that each sample is predicted as.

        Parameters
        ----------
        X : {array_like} of shape (n_samples, n_features)
            The input samples.

        Returns
        -------
        X_leaves : array_like of shape (n_samples,)
            For each sample, the pre-order id of the leaf it ends up in.
        """
        check_is_fitted(self)
        return self.tree_.apply(self._validate_X_predict(X))

    def decision_path(self, X):
        """Return the decision path in the tree.

        Parameters
        ----------
        X : {array_like} of shape (n_samples, n_features)
            The input samples.

        Returns
        -------
        indicator : sparse matrix of shape (n_samples, n_nodes)
            Return a node indicator CSR matrix where non zero elements
            indicates that the samples goes through the nodes.
        """
        check_is_fitted(self)
        return self.tree_.decision_path(self._validate_X_predict(X))

    def predict(self, X):
        """ Predict the best action for each sample

        Parameters
        ----------
        X : {array_like} of shape (n_samples, n_features)
            The input samples.

        Returns
        -------
        action : array_like of shape (n_samples)
            The recommended action, i.e. the action assigned by the leaf of each sample
        """
        check_is_fitted(self)
        return self.tree_.predict(self._validate_X_predict(X))

    def predict_proba(self, X):
        """ Predict the probability of recommending each action

        Parameters
        ----------
        X : {array_like} of shape (n_samples, n_features)
            The input samples.

        Returns
        -------
        action_proba : array_like of shape (n_samples, n_actions)
            One-hot encoding of the recommended action
        """
        pred = self.predict(X)
        proba = np.zeros((pred.shape[0], self.n_actions_))
        proba[np.arange(pred.shape[0]), pred] = 1
        return proba

    def predict_value(self, X):
        """ Predict the average reward of each action for the group of each sample

        Parameters
        ----------
        X : {array_like} of shape (n_samples, n_features)
            The input samples.

        Returns
        -------
        welfare : array_like of shape (n_samples, n_actions)
            The mean training reward of each action in the leaf of each sample
        """
        leaves = self.apply(X)
        return self.tree_.value[leaves] / self.tree_.n_node_samples[leaves][:, np.newaxis]


class PolicyTree(_BasePolicyTree):
    """ Reward maximization policy tree found by exhaustive search. Finds the tree of depth at most
    `depth` maximizing :math:`\\sum_i y_{i, a(X_i)}`, where :math:`a(X)` is the action assigned by the
    leaf containing :math:`X`. Unlike a greedy tree, every split is chosen jointly with the splits
    below it.

    Parameters
    ----------
    depth : int, default 2
        The maximum depth of the tree. The cost of the search grows as the number of samples to the
        power `depth`, so values above 3 are rarely practical.

    split_step : int, default 1
        Evaluate every `split_step`-th distinct value of each feature as a threshold. The default
        searches every threshold and returns the optimal tree; larger values trade reward for speed
        on features with many distinct values.

    min_node_size : int, default 1
        The minimum number of samples required to be at a leaf node.

    n_jobs : int or None, default 1
        The number of jobs evaluating the features of the root in parallel.
        ``None`` means 1 unless in a :func:`joblib.parallel_backend` context.
        ``-1`` means using all processors. The tree does not depend on `n_jobs`.

    verbose : int, default 0
        Controls the verbosity of the parallel evaluation.

    Attributes
    ----------
    tree_ : TreeResult
        The fitted tree.

    n_features_in_ : int
        The number of features when ``fit`` is performed.

    n_actions_ : int
        The number of actions when ``fit`` is performed.

    n_samples_ : int
        The number of training samples when ``fit`` is performed.

    feature_names_ : list of str
        The column names of `X` if it was a DataFrame, else ``X0, X1, ...``.

    action_names_ : list of str
        The column names of `y` if it was a DataFrame, else ``A0, A1, ...``.

    policy_value_ : float
        The average reward per sample achieved by the recommended policy

    always_treat_value_ : ndarray of shape (n_actions,)
        The average reward per sample of the policy assigning each single action to everyone
    """

    def __init__(self, *,
                 depth=2,
                 split_step=1,
                 min_node_size=1,
                 n_jobs=1,
                 verbose=0):
        self.depth = depth
        self.split_step = split_step
        self.min_node_size = min_node_size
        self.n_jobs = n_jobs
        self.verbose = verbose

    def fit(self, X, y):
        """ Fit the tree from the data

        Parameters
        ----------
        X : (n, n_features) array
            The features to split on

        y : (n, n_actions) array
            The reward for each of the actions, e.g. doubly robust scores

        Returns
        -------
        self : object instance
        """
        tree = tree_search(X, y, self.depth, self.split_step, min_node_size=self.min_node_size,
                           n_jobs=self.n_jobs, verbose=self.verbose)
        return self._store_fit(X, y, tree)
