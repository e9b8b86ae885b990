"""Growth configuration: the three construction modes and their parameters.

Modes are written on the command line as ``<letter>:<parameter>``:

- ``a:<alpha>``  alpha limited, ``0 < alpha <= 1``; a node stops splitting once
  its weight falls below ``floor(alpha * n_instances)``.
- ``d:<depth>``  depth limited, ``depth >= 1``.
- ``l:<leaves>`` number-of-leaves limited, ``leaves >= 1``.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .exceptions import ConfigurationError

DEFAULT_MODE = "a:0.01"


class GrowthMode(Enum):
    ALPHA_LIMITED = "a"
    DEPTH_LIMITED = "d"
    NUM_LEAVES_LIMITED = "l"

    @classmethod
    def coerce(cls, mode: Union["GrowthMode", str]) -> "GrowthMode":
        if isinstance(mode, cls):
            return mode
        text = str(mode).strip()
        for m in cls:
            if text == m.value or text.upper() == m.name:
                return m
        raise ConfigurationError(f"unknown construction mode: {mode!r}")


@dataclass
class GrowthConfig:
    mode: GrowthMode = GrowthMode.ALPHA_LIMITED
    alpha: float = 0.01
    max_depth: Optional[int] = None
    max_leaves: Optional[int] = None

    @property
    def parameter(self) -> Union[float, int, None]:
        if self.mode is GrowthMode.ALPHA_LIMITED:
            return self.alpha
        if self.mode is GrowthMode.DEPTH_LIMITED:
            return self.max_depth
        return self.max_leaves

    def validate(self) -> "GrowthConfig":
        self.mode = GrowthMode.coerce(self.mode)
        if self.mode is GrowthMode.ALPHA_LIMITED:
            if not 0.0 < float(self.alpha) <= 1.0:
                raise ConfigurationError(f"alpha must be in (0, 1], got {self.alpha!r}")
        elif self.mode is GrowthMode.DEPTH_LIMITED:
            if self.max_depth is None or int(self.max_depth) < 1:
                raise ConfigurationError(f"max_depth must be >= 1, got {self.max_depth!r}")
        elif self.max_leaves is None or int(self.max_leaves) < 1:
            raise ConfigurationError(f"max_leaves must be >= 1, got {self.max_leaves!r}")
        return self

    @classmethod
    def from_mode(cls, mode: Union[GrowthMode, str], parameter) -> "GrowthConfig":
        mode = GrowthMode.coerce(mode)
        try:
            if mode is GrowthMode.ALPHA_LIMITED:
                cfg = cls(mode, alpha=float(parameter))
            elif mode is GrowthMode.DEPTH_LIMITED:
                cfg = cls(mode, max_depth=_as_int(parameter))
            else:
                cfg = cls(mode, max_leaves=_as_int(parameter))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"bad parameter {parameter!r} for mode {mode.value!r}") from e
        return cfg.validate()

    def to_string(self) -> str:
        return f"{self.mode.value}:{self.parameter}"


def _as_int(v) -> int:
    if isinstance(v, str):
        return int(v.strip())
    if isinstance(v, float) and not v.is_integer():
        raise ValueError(f"expected an integer, got {v!r}")
    return int(v)


def parse_mode(text: str) -> GrowthConfig:
    """Parse ``"a:0.01"``, ``"d:4"`` or ``"l:16"`` into a validated config."""
    parts = str(text).split(":")
    if len(parts) != 2:
        raise ConfigurationError(f"construction mode must look like <mode>:<parameter>, got {text!r}")
    return GrowthConfig.from_mode(parts[0], parts[1])
