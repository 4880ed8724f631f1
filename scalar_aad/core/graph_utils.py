# scalar_aad/core/graph_utils.py
"""
Graph inspection helpers.

Summaries of the nodes reachable from a root Scalar (or of a whole tape):
size, fan-in / fan-out and the mix of operations. Everything is returned as
dicts or strings; nothing here prints.
"""

from collections import Counter
from typing import Dict, List, Union

import numpy as np

from .engine import _topo_indices
from .tape import Tape
from .var import Scalar


def _select(source: Union[Scalar, Tape]) -> List[int]:
    """Node indices to summarise: reachable from a Scalar, or a whole tape."""
    if isinstance(source, Scalar):
        source.check_live()
        return _topo_indices(source.tape.nodes, source.idx)
    return list(range(len(source.nodes)))


def get_graph_stats(source: Union[Scalar, Tape]) -> Dict:
    """
    Statistics of the computation graph.

    Args:
        source: a root Scalar (only nodes reachable from it are counted)
                or a Tape (every recorded node is counted)

    Returns:
        dict with nodes, leaves, edges, max/avg fan-in, max/avg fan-out,
        depth (longest operand chain, 0 for a lone leaf), shared (nodes used
        by more than one operand slot) and an {op tag: count} breakdown
    """
    tape = source.tape if isinstance(source, Scalar) else source
    indices = _select(source)
    if not indices:
        return {
            'nodes': 0,
            'leaves': 0,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'depth': 0,
            'shared': 0,
            'operations': {}
        }

    nodes = [tape.nodes[i] for i in indices]

    # fan-in: operand slots per node (a + a counts 2)
    fan_ins = [len(node.operands) for node in nodes]

    # fan-out: how many operand slots refer to each node
    fan_out_counter = Counter(o for node in nodes for o in node.operands)
    fan_outs = [fan_out_counter[i] for i in indices]

    # indices are in topological order, so operands are already settled
    depth = {}
    for i, node in zip(indices, nodes):
        depth[i] = 1 + max(depth[o] for o in node.operands) if node.operands else 0

    op_counter = Counter(node.op.value for node in nodes)

    return {
        'nodes': len(nodes),
        'leaves': sum(1 for node in nodes if node.is_leaf),
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'depth': max(depth.values()),
        'shared': sum(1 for f in fan_outs if f > 1),
        'operations': dict(op_counter)
    }


def format_computation_graph(root: Scalar, max_nodes: int = 20) -> str:
    """
    One line per reachable node in topological order:

        Node    3: mul    (   -6.000000) grad    1.000000 <- [Node0, Node1]
    """
    root.check_live()
    nodes = root.tape.nodes
    order = _topo_indices(nodes, root.idx)

    lines = []
    for i in order[:max_nodes]:
        node = nodes[i]
        head = f"Node {i:4d}: {node.op.value:8s} ({float(node.data):12.6f}) grad {float(node.grad):12.6f}"
        if node.operands:
            parent_info = ", ".join(f"Node{o}" for o in node.operands)
            if node.exponent is not None:
                parent_info += f"; exponent={node.exponent:g}"
            lines.append(f"{head} <- [{parent_info}]")
        else:
            lines.append(f"{head} [leaf/input]")

    if len(order) > max_nodes:
        lines.append(f"... ({len(order) - max_nodes} more nodes)")
    return "\n".join(lines)


def analyze_graph_complexity(source: Union[Scalar, Tape]) -> str:
    """
    What one backward pass over the graph costs: how many local rules run,
    how many grad accumulations they make, how long the longest chain of
    dependent rules is, and how many nodes collect grads from several users.
    """
    stats = get_graph_stats(source)

    if stats['nodes'] == 0:
        return "Empty computation graph"

    rules = stats['nodes'] - stats['leaves']
    report = [
        f"Backward pass over {stats['nodes']:,} nodes ({stats['leaves']:,} leaves):",
        f"  local rules: {rules:,}",
        f"  grad accumulations: {stats['edges']:,}",
        f"  depth: {stats['depth']:,}",
        f"  shared nodes: {stats['shared']:,} (max fan-out {stats['max_fan_out']})",
    ]
    ops = sorted(((op, n) for op, n in stats['operations'].items() if op != 'leaf'),
                 key=lambda item: (-item[1], item[0]))
    if ops:
        report.append("  rules by op: " + ", ".join(f"{op}={n}" for op, n in ops))
    return "\n".join(report)
