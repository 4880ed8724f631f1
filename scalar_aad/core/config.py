# scalar_aad/core/config.py
"""
Engine configuration

Numeric-domain policies shared by the operation constructors and the backward
driver. One EngineConfig is active at a time; `use_config` swaps it for the
duration of a block.
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Optional

POW_DOMAIN_POLICIES = ("zero", "raise")


@dataclass
class EngineConfig:
    """
    Attributes
    ----------
    pow_domain : str
        What pow does where a^n or its derivative n * a^(n-1) is undefined
        (a == 0 with n < 1, or a < 0 with non-integer n):
          - "zero"  : record the inf/NaN value and contribute 0 to the
                      operand's grad, logging a warning each time
          - "raise" : raise DomainError
    check_finite : bool
        If True, recording a node whose forward value is inf or NaN raises
        DomainError instead of letting the value flow through the graph.
    """
    pow_domain: str = "zero"
    check_finite: bool = False

    def __post_init__(self):
        if self.pow_domain not in POW_DOMAIN_POLICIES:
            raise ValueError(
                f"pow_domain must be one of {POW_DOMAIN_POLICIES}, got {self.pow_domain!r}"
            )
        if not isinstance(self.check_finite, bool):
            raise ValueError(f"check_finite must be a bool, got {self.check_finite!r}")


active_config = EngineConfig()


@contextmanager
def use_config(config: Optional[EngineConfig] = None, **overrides):
    """
    Temporarily replace the active configuration:
        with use_config(pow_domain="raise"):
            ... build graph, call backward ...

    Keyword overrides are applied on top of `config` (or of the currently
    active configuration when `config` is omitted).
    """
    from . import config as _config_mod  # module access so the swap is visible everywhere
    known = {f.name for f in fields(EngineConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"unknown config option(s): {sorted(unknown)}")

    prev = _config_mod.active_config
    new = replace(config or prev, **overrides)
    try:
        _config_mod.active_config = new
        yield new
    finally:
        _config_mod.active_config = prev
