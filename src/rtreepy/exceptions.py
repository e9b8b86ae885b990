"""Exception types raised by rtreepy."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a growth mode or its parameter cannot be accepted.

    Raised at configuration time (parsing ``"a:0.01"``-style strings, building
    a :class:`~rtreepy.config.GrowthConfig`), never during tree growth.
    """


class DataIntegrityError(RuntimeError):
    """Raised when training data violates an invariant the tree builder relies on.

    Examples are negative instance weights, nominal or binned values outside
    ``[0, cardinality)``, or a candidate split with no weight on one side.
    """
