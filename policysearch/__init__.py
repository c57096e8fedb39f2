# Copyright (c) PyWhy contributors. All rights reserved.
# Licensed under the MIT License.

__all__ = ['policy',
           'tree',
           'utilities',
           'tree_search',
           'InvalidInputError',
           '__version__']

from ._version import __version__
from .tree import tree_search
from .utilities import InvalidInputError
