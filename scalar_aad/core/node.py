# scalar_aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import numpy as np


class OpKind(Enum):
    """Tag of the primitive that produced a node."""
    LEAF = "leaf"
    ADD = "add"
    MUL = "mul"
    POW = "pow"
    RELU = "relu"
    TANH = "tanh"
    EXP = "exp"
    SIGMOID = "sigmoid"


@dataclass
class Node:
    """
    One record in the tape arena.

    Attributes
    ----------
    op       : OpKind
        Primitive that produced this node (LEAF for inputs and constants).
    data     : np.float64
        Forward value, computed eagerly when the node is recorded.
    operands : Tuple[int, ...]
        Tape indices of the nodes this one was computed from, in call order.
        Every index is smaller than this node's own index.
    exponent : Optional[float]
        Constant exponent, only set for OpKind.POW.
    grad     : float
        Gradient accumulator; 0 until a backward pass reaches the node.
    """
    op: OpKind
    data: np.float64
    operands: Tuple[int, ...] = ()
    exponent: Optional[float] = None
    grad: float = 0.0

    @property
    def is_leaf(self) -> bool:
        return self.op is OpKind.LEAF
