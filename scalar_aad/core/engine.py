# scalar_aad/core/engine.py
from __future__ import annotations
import logging
from typing import List, Optional

import numpy as np

from .node import Node, OpKind
from .errors import AutodiffError, DomainError
from .var import Scalar
from . import config as config_mod  # module access for use_config() compatibility
from . import tape as tape_mod      # module access for use_tape() compatibility

log = logging.getLogger(__name__)


# ---------------- Topological order ---------------- #
def _topo_indices(nodes: List[Node], root: int) -> List[int]:
    """
    Post-order DFS from `root`: operands are visited in list order and a node
    is emitted only after all of its operands.

    Uses an explicit stack instead of recursion. Each entry is
    (index, expanded); an index is pushed once unexpanded to schedule its
    operands, then once expanded to emit it.
    """
    visited = set()
    order: List[int] = []
    stack = [(root, False)]
    while stack:
        idx, expanded = stack.pop()
        if expanded:
            order.append(idx)
            continue
        if idx in visited:
            continue  # shared operand reached through another path
        visited.add(idx)
        stack.append((idx, True))
        # reversed so the first operand is popped (and finished) first
        for o in reversed(nodes[idx].operands):
            if o not in visited:
                stack.append((o, False))
    return order


def topological_order(root: Scalar) -> List[Scalar]:
    """
    All nodes reachable from `root`, each exactly once, with every operand
    placed before the nodes that use it. `root` is last.
    """
    root.check_live()
    nodes = root.tape.nodes
    return [Scalar._wrap(root.tape, i) for i in _topo_indices(nodes, root.idx)]


# ---------------- Reverse pass ---------------- #
def backward(root: Scalar) -> None:
    """
    Run a single reverse pass from `root`.

    Seeds root.grad = 1, then walks the reachable nodes in reverse
    topological order; each node hands its grad to its operands through the
    rule for its op tag. Grads are accumulated, never cleared: on a graph that
    already went through backward, call zero_grad(root) first or the new
    contributions are added to the old ones.
    """
    root.check_live()
    nodes = root.tape.nodes
    order = _topo_indices(nodes, root.idx)

    nodes[root.idx].grad = 1.0
    for idx in reversed(order):
        node = nodes[idx]
        if node.op is OpKind.LEAF or node.grad == 0:
            continue  # nothing to propagate
        _propagate(nodes, node)
    log.debug("backward from node %d visited %d nodes", root.idx, len(order))


def _propagate(nodes: List[Node], node: Node) -> None:
    """
    Local chain rule for one node: operand.grad += (∂node/∂operand) * node.grad.
    This is the only place derivative rules live.
    """
    g = node.grad
    op = node.op

    if op is OpKind.ADD:
        # z = a + b  ->  ∂z/∂a = ∂z/∂b = 1
        for i in node.operands:
            nodes[i].grad += g

    elif op is OpKind.MUL:
        # z = a * b  ->  ∂z/∂a = b, ∂z/∂b = a  (a and b may be the same node)
        a, b = (nodes[i] for i in node.operands)
        a.grad += b.data * g
        b.grad += a.data * g

    elif op is OpKind.POW:
        # z = a^n  ->  ∂z/∂a = n * a^(n-1)
        a = nodes[node.operands[0]]
        a.grad += _pow_partial(a.data, node.exponent) * g

    elif op is OpKind.RELU:
        # undefined at 0, taken as 0
        a = nodes[node.operands[0]]
        if a.data > 0:
            a.grad += g

    elif op is OpKind.TANH:
        # ∂tanh(a)/∂a = 1 - tanh(a)^2, read from the recorded output
        a = nodes[node.operands[0]]
        a.grad += (1.0 - node.data * node.data) * g

    elif op is OpKind.EXP:
        a = nodes[node.operands[0]]
        a.grad += node.data * g

    elif op is OpKind.SIGMOID:
        # σ'(a) = σ(a) * (1 - σ(a))
        a = nodes[node.operands[0]]
        a.grad += node.data * (1.0 - node.data) * g

    else:
        raise AutodiffError(f"no backward rule for op {op!r}")


def _pow_partial(base: np.float64, n: float) -> np.float64:
    """
    n * base^(n-1), with explicit handling of the points where it is undefined.
    """
    if n == 0.0:
        return np.float64(0.0)  # d/da a^0 = 0 everywhere
    if (base == 0.0 and n < 1.0) or (base < 0.0 and not float(n).is_integer()):
        if config_mod.active_config.pow_domain == "raise":
            raise DomainError(
                f"derivative of a**{n} is undefined at a = {float(base)}"
            )
        log.warning("derivative of a**%s is undefined at a = %s; using 0",
                    n, float(base))
        return np.float64(0.0)
    return n * np.power(base, n - 1.0)


# ---------------- Reset ---------------- #
def zero_grad(root: Scalar) -> None:
    """
    Set grad to zero on `root` and every node reachable from it.
    Needed between backward passes that reuse the same graph.
    """
    root.check_live()
    nodes = root.tape.nodes
    for idx in _topo_indices(nodes, root.idx):
        nodes[idx].grad = 0.0


def zero_adjoints(tape: Optional["tape_mod.Tape"] = None) -> None:
    """
    Set grad to zero on every node of `tape` (the active tape by default),
    reachable or not.
    """
    tape = tape if tape is not None else tape_mod.active_tape()
    for node in tape.nodes:
        node.grad = 0.0
