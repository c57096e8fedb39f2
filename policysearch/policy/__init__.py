# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

from ._base import PolicyLearner
from ._tree import PolicyTree
from ._hybrid import HybridPolicyTree

__all__ = ["PolicyLearner",
           "PolicyTree",
           "HybridPolicyTree"]
