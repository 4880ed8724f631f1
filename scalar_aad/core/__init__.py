# scalar_aad/core/__init__.py

"""
Core public API for the scalar AAD package.

Exports:
    Scalar            : Handle to a node on a tape; the value users compute with.
    Node, OpKind      : The arena record and its operation tag.
    Tape, global_tape : The arena and the default one.
    use_tape          : Context manager to temporarily switch the active tape.
    topological_order : Nodes reachable from a root, operands first.
    backward          : Run a single reverse pass from a root.
    zero_grad         : Reset grads of everything reachable from a root.
    zero_adjoints     : Reset grads of every node on a tape.
    EngineConfig, use_config : Numeric-domain policies.
"""

from .node import Node, OpKind
from .var import Scalar
from .tape import Tape, global_tape, use_tape, active_tape
from .engine import topological_order, backward, zero_grad, zero_adjoints
from .config import EngineConfig, use_config
from .errors import AutodiffError, OperandError, StaleNodeError, DomainError
from .seeds import grad_of, grads, grads_list, value

__all__ = [
    "Node", "OpKind",
    "Scalar",
    "Tape", "global_tape", "use_tape", "active_tape",
    "topological_order", "backward", "zero_grad", "zero_adjoints",
    "EngineConfig", "use_config",
    "AutodiffError", "OperandError", "StaleNodeError", "DomainError",
    "grad_of", "grads", "grads_list", "value",
]
