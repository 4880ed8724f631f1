# scalar_aad/core/tape.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence
from contextlib import contextmanager

import numpy as np

from .node import Node, OpKind
from .errors import OperandError

log = logging.getLogger(__name__)


class Tape:
    """
    Arena of Nodes in recording order.

    A node is addressed by its index in `nodes`. Operands always precede the
    node that consumes them, so the tape itself is a valid forward order and
    cannot contain a cycle.
    """
    def __init__(self):
        self.nodes: List[Node] = []
        # bumped on reset so handles from an earlier recording can be detected
        self.generation = 0

    def __len__(self):
        return len(self.nodes)

    def reset(self):
        log.debug("resetting tape %#x (%d nodes, generation %d)",
                  id(self), len(self.nodes), self.generation)
        self.nodes.clear()
        self.generation += 1

    def push_node(self, *, op: OpKind, data, operands: Sequence[int] = (),
                  exponent: Optional[float] = None) -> int:
        """
        Append a Node(op, data, operands, exponent) to the tape and return its index.
        `operands` are indices of nodes already on this tape.
        """
        idx = len(self.nodes)
        operands = tuple(operands)
        for o in operands:
            if not 0 <= o < idx:
                raise OperandError(
                    f"operand index {o} is not an earlier node of this tape (size {idx})"
                )
        if op is OpKind.LEAF and operands:
            raise OperandError("a leaf node cannot have operands")
        if op is not OpKind.LEAF and not operands:
            raise OperandError(f"{op.value} node needs at least one operand")
        self.nodes.append(Node(op=op, data=np.float64(data), operands=operands,
                               exponent=exponent))
        return idx


# Global singleton tape (simple and practical as a default arena)
global_tape = Tape()


def active_tape() -> Tape:
    from . import tape as _tape_mod  # module access so use_tape() swaps are visible
    return _tape_mod.global_tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily record onto a fresh (or the given) tape:
        with use_tape():
            ... build computation ...
            backward(y)
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
