# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

"""Base classes for all Policy estimators."""

import abc


class PolicyLearner(metaclass=abc.ABCMeta):

    @abc.abstractmethod
    def fit(self, X, y):
        pass

    @abc.abstractmethod
    def predict_value(self, X):
        pass

    @abc.abstractmethod
    def predict(self, X):
        pass
