# scalar_aad/core/var.py
from __future__ import annotations
import numbers
from typing import Any, Optional

import numpy as np

from .node import Node, OpKind
from .errors import OperandError, StaleNodeError
from . import tape as tape_mod  # module access for use_tape() compatibility


def check_real(val: Any) -> float:
    """Return `val` as a float, or raise OperandError if it is not a real scalar."""
    if isinstance(val, (bool, np.bool_)) or not isinstance(val, numbers.Real):
        raise OperandError(
            f"Scalar only accepts real numbers (int, float, numpy scalar), "
            f"but got {type(val).__name__}"
        )
    try:
        return float(val)
    except OverflowError:
        raise OperandError(
            f"Scalar only accepts real numbers representable as a float, "
            f"but got {type(val).__name__} too large to convert"
        ) from None


class Scalar:
    """
    Handle to one node of a tape.

    The node itself (data, grad, operands, op tag) lives in the tape arena;
    a Scalar only remembers where. Two handles for the same node of the same
    tape generation compare and hash equal, whatever their numeric values.

    Attributes
    ----------
    tape : Tape
        Arena holding the node.
    idx : int
        Index of the node in `tape.nodes`; this is the node's identity.
    generation : int
        Tape generation at creation time, used to detect stale handles.
    """
    __slots__ = ("tape", "idx", "generation")

    # numpy scalars on the left (np.float64(2) * x) defer to our reflected operators
    __array_ufunc__ = None

    def __init__(self, val: Any, *, tape: Optional["tape_mod.Tape"] = None):
        tape = tape if tape is not None else tape_mod.active_tape()
        self.tape = tape
        self.idx = tape.push_node(op=OpKind.LEAF, data=check_real(val))
        self.generation = tape.generation

    @classmethod
    def _wrap(cls, tape, idx: int) -> "Scalar":
        obj = object.__new__(cls)
        obj.tape = tape
        obj.idx = idx
        obj.generation = tape.generation
        return obj

    def check_live(self):
        """Raise StaleNodeError if the tape was reset after this handle was made."""
        if self.generation != self.tape.generation:
            raise StaleNodeError(
                f"node {self.idx} belongs to tape generation {self.generation}, "
                f"but the tape was reset (now generation {self.tape.generation})"
            )

    @property
    def node(self) -> Node:
        self.check_live()
        return self.tape.nodes[self.idx]

    @property
    def data(self) -> float:
        return float(self.node.data)

    @property
    def grad(self) -> float:
        return float(self.node.grad)

    @property
    def op(self) -> OpKind:
        return self.node.op

    @property
    def operands(self):
        """Handles of the nodes this one was computed from."""
        return tuple(Scalar._wrap(self.tape, i) for i in self.node.operands)

    def __float__(self):
        return self.data

    def __eq__(self, other):
        if not isinstance(other, Scalar):
            return NotImplemented
        return (self.tape is other.tape and self.idx == other.idx
                and self.generation == other.generation)

    def __hash__(self):
        return hash((id(self.tape), self.idx, self.generation))

    def __repr__(self):
        node = self.node
        return f"Scalar(data={float(node.data)!r}, grad={float(node.grad)!r}, op={node.op.value!r})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    # Activations as methods, mirroring the functional forms in ops.activations
    def relu(self):
        from ..ops.activations import relu
        return relu(self)

    def tanh(self):
        from ..ops.activations import tanh
        return tanh(self)

    def exp(self):
        from ..ops.activations import exp
        return exp(self)

    def sigmoid(self):
        from ..ops.activations import sigmoid
        return sigmoid(self)

    def backward(self):
        from .engine import backward
        backward(self)

    def zero_grad(self):
        from .engine import zero_grad
        zero_grad(self)
