# rtreepy/__init__.py
"""
rtreepy: least-squares regression trees in Python (scikit-learn style).

Exports:
    - RegressionTreeLearner
    - build, build_tree
    - Instances and the attribute types
"""
from .attributes import BinnedAttribute, ContinuousAttribute, Instances, NominalAttribute
from .config import GrowthConfig, GrowthMode, parse_mode
from .exceptions import ConfigurationError, DataIntegrityError
from .growth import build, build_tree
from .learner import RegressionTreeLearner
from .rng import Random
from .tree import RegressionTree, RegressionTreeInteriorNode, RegressionTreeLeaf

__all__ = [
    "RegressionTreeLearner",
    "build",
    "build_tree",
    "Instances",
    "ContinuousAttribute",
    "NominalAttribute",
    "BinnedAttribute",
    "GrowthConfig",
    "GrowthMode",
    "parse_mode",
    "ConfigurationError",
    "DataIntegrityError",
    "Random",
    "RegressionTree",
    "RegressionTreeInteriorNode",
    "RegressionTreeLeaf",
]
__version__ = "0.1.0"
