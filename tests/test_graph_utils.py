import pytest

import scalar_aad as ad
from scalar_aad import Scalar, get_graph_stats, format_computation_graph, analyze_graph_complexity


def test_stats_for_diamond():
    leaf = Scalar(3.0)
    left = leaf.tanh()
    right = leaf.exp()
    top = left * right

    stats = get_graph_stats(top)
    assert stats['nodes'] == 4
    assert stats['leaves'] == 1
    assert stats['edges'] == 4
    assert stats['max_fan_in'] == 2
    assert stats['max_fan_out'] == 2
    assert stats['avg_fan_in'] == pytest.approx(1.0)
    assert stats['operations'] == {'leaf': 1, 'tanh': 1, 'exp': 1, 'mul': 1}
    assert stats['depth'] == 2
    assert stats['shared'] == 1


def test_stats_count_repeated_operand_slots():
    a = Scalar(1.0)
    stats = get_graph_stats(a + a)
    assert stats['edges'] == 2
    assert stats['max_fan_out'] == 2


def test_stats_for_whole_tape_include_unreachable(tape):
    a = Scalar(1.0)
    a.exp()
    z = a.tanh()
    assert get_graph_stats(z)['nodes'] == 2
    assert get_graph_stats(tape)['nodes'] == 3


def test_stats_for_empty_tape():
    stats = get_graph_stats(ad.Tape())
    assert stats['nodes'] == 0
    assert stats['operations'] == {}
    assert analyze_graph_complexity(ad.Tape()) == "Empty computation graph"


def test_format_computation_graph():
    a, b = Scalar(2.0), Scalar(-3.0)
    z = a * b
    ad.backward(z)
    lines = format_computation_graph(z).splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("Node    0: leaf")
    assert lines[0].endswith("[leaf/input]")
    assert "mul" in lines[2]
    assert lines[2].endswith("<- [Node0, Node1]")


def test_format_shows_exponent_and_truncates():
    x = Scalar(2.0)
    y = x
    for _ in range(5):
        y = y ** 1.5
    text = format_computation_graph(y, max_nodes=3)
    lines = text.splitlines()
    assert "exponent=1.5" in lines[1]
    assert lines[-1] == "... (3 more nodes)"


def test_analyze_graph_complexity_report():
    x = Scalar(1.0)
    y = (x * 2).tanh()
    lines = analyze_graph_complexity(y).splitlines()
    assert lines == [
        "Backward pass over 4 nodes (2 leaves):",
        "  local rules: 2",
        "  grad accumulations: 3",
        "  depth: 2",
        "  shared nodes: 0 (max fan-out 1)",
        "  rules by op: mul=1, tanh=1",
    ]


def test_analyze_counts_shared_nodes():
    x = Scalar(1.0)
    y = x * x + x.exp()
    report = analyze_graph_complexity(y)
    assert "shared nodes: 1 (max fan-out 3)" in report
    assert "rules by op: add=1, exp=1, mul=1" in report


def test_analyze_lone_leaf():
    report = analyze_graph_complexity(Scalar(1.0))
    assert report.splitlines()[0] == "Backward pass over 1 nodes (1 leaves):"
    assert "depth: 0" in report
    assert "rules by op" not in report


def test_depth_is_longest_operand_chain(tape):
    a, b = Scalar(1.0), Scalar(2.0)
    short = a + b
    long_chain = b.tanh().exp().tanh()
    root = short * long_chain
    assert get_graph_stats(root)['depth'] == 4
    assert get_graph_stats(short)['depth'] == 1
    assert get_graph_stats(tape)['depth'] == 4
