# scalar_aad/ops/activations.py
import numpy as np

from ..core.node import OpKind
from .arithmetic import _as_scalar, _tape_of, record


def _unary(x, f, op):
    tape = _tape_of(x)
    x = _as_scalar(x, tape)
    return record(tape, op, f(x.node.data), (x,))


def relu(x):
    """max(x, 0); the derivative at 0 is taken as 0."""
    return _unary(x, lambda a: np.maximum(a, 0.0), OpKind.RELU)


def tanh(x):
    return _unary(x, np.tanh, OpKind.TANH)


def exp(x):
    # overflow to inf is left to EngineConfig.check_finite
    def _exp(a):
        with np.errstate(over="ignore"):
            return np.exp(a)
    return _unary(x, _exp, OpKind.EXP)


def sigmoid(x):
    """
    Logistic function 1 / (1 + e^-x).

    Uses scipy's expit, which stays finite for large |x| where the naive
    formula overflows.
    """
    from scipy.special import expit
    return _unary(x, expit, OpKind.SIGMOID)
