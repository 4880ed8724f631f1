# scalar_aad/ops/__init__.py

# Convenience re-exports so users can do: from scalar_aad.ops import mul, tanh, ...
from .arithmetic import add, sub, mul, multiply, div, neg, pow, reciprocal
from .activations import relu, tanh, exp, sigmoid

__all__ = [
    "add", "sub", "mul", "multiply", "div", "neg", "pow", "reciprocal",
    "relu", "tanh", "exp", "sigmoid",
]
