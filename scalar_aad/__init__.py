# scalar_aad/__init__.py
# Reverse-mode automatic differentiation over scalars

from .core.var import Scalar
from .core.node import Node, OpKind
from .core.tape import Tape, global_tape, use_tape, active_tape
from .core.engine import topological_order, backward, zero_grad, zero_adjoints
from .core.config import EngineConfig, use_config
from .core.errors import AutodiffError, OperandError, StaleNodeError, DomainError
from .core.seeds import grad_of, grads, grads_list, value
from .core.graph_utils import get_graph_stats, format_computation_graph, analyze_graph_complexity

# Ensure operator overloading targets are importable
from . import ops
from .ops import (
    add, sub, mul, multiply, div, neg, pow, reciprocal,
    relu, tanh, exp, sigmoid,
)


def from_value(x) -> Scalar:
    """Leaf node holding the real number `x`, recorded on the active tape."""
    return Scalar(x)


def data(x: Scalar) -> float:
    return x.data


def grad(x: Scalar) -> float:
    return x.grad


__all__ = [
    # Core
    'Scalar',
    'Node',
    'OpKind',
    'Tape',
    'global_tape',
    'use_tape',
    'active_tape',
    'from_value',
    'data',
    'grad',
    # Engine
    'topological_order',
    'backward',
    'zero_grad',
    'zero_adjoints',
    # Ops
    'ops',
    'add', 'sub', 'mul', 'multiply', 'div', 'neg', 'pow', 'reciprocal',
    'relu', 'tanh', 'exp', 'sigmoid',
    # Config and errors
    'EngineConfig',
    'use_config',
    'AutodiffError',
    'OperandError',
    'StaleNodeError',
    'DomainError',
    # Helpers
    'grad_of',
    'grads',
    'grads_list',
    'value',
    'get_graph_stats',
    'format_computation_graph',
    'analyze_graph_complexity',
]
