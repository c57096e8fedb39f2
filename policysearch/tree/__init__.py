# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

from ._reward import RewardAccumulator, reward_sums, best_action
from ._splitter import candidate_positions, evaluate_feature
from ._search import TreeBuilder, tree_search
from ._tree import LeafNode, SplitNode, FlatNode, TreeResult, flatten_tree

__all__ = ["tree_search",
           "TreeBuilder",
           "TreeResult",
           "FlatNode",
           "LeafNode",
           "SplitNode",
           "flatten_tree",
           "RewardAccumulator",
           "reward_sums",
           "best_action",
           "candidate_positions",
           "evaluate_feature"]
