"""
Visualization utilities for ugrad computational graphs.

This module provides functions to visualize the computational graph created by
Value objects, showing the flow of data and gradients through operations.
"""

from graphviz import Digraph


def trace(root):
    """
    Trace the computational graph starting from a root Value node.

    Collects every node reachable from ``root`` and every (operand, node) edge.
    Read-only: nothing in the graph is modified. Uses an explicit stack so deep
    graphs can be traced.

    Args:
        root: A Value object representing the output of a computation

    Returns:
        tuple: (nodes, edges) where:
            - nodes: set of all Value objects in the graph
            - edges: set of (operand, node) tuples representing connections

    Example:
        >>> from ugrad.engine import Value
        >>> x = Value(2.0)
        >>> y = Value(3.0)
        >>> z = x * y + x
        >>> nodes, edges = trace(z)
        >>> len(nodes)  # x, y, x*y and z
        4
    """
    nodes, edges = set(), set()
    stack = [root]

    while stack:
        v = stack.pop()
        if v in nodes:
            continue
        nodes.add(v)
        for child in v.operands:
            edges.add((child, v))
            stack.append(child)

    return nodes, edges


def _node_label(v):
    """Record label: { label | data | grad }"""
    name = f"{v.label} | " if v.label else ""
    return f"{{ {name}data {v.data:.4f} | grad {v.grad:.4f} }}"


def draw_dot(root, format='svg', rankdir='LR', filename=None):
    """
    Visualize the computational graph of a Value object as a directed graph.

    Creates a Graphviz diagram showing:
    - Value nodes with their data and gradients
    - Operation nodes (+, *, tanh, etc.)
    - Edges showing data flow through the computation

    Args:
        root: A Value object (typically the loss) to visualize from
        format: Output format ('svg', 'png', 'pdf', etc.)
        rankdir: Graph direction - 'LR' (left-right) or 'TB' (top-bottom)
        filename: If given, the dot source is written to this path

    Returns:
        Digraph: A graphviz Digraph object that can be rendered or displayed

    Example:
        >>> from ugrad.engine import Value
        >>> from ugrad.utils import draw_dot
        >>> x = Value(2.0, label='x')
        >>> z = (x * -3.0).relu()
        >>> z.backward()
        >>> graph = draw_dot(z)
        >>> graph.render('computation_graph')  # needs the graphviz binaries

    Note:
        Rendering (not building or saving the dot source) requires the
        graphviz system package: apt install graphviz / brew install graphviz
    """
    assert rankdir in ['LR', 'TB'], "rankdir must be 'LR' (left-right) or 'TB' (top-bottom)"

    nodes, edges = trace(root)

    dot = Digraph(format=format, graph_attr={'rankdir': rankdir})

    # Sorted by uid so the same graph always produces the same source
    for n in sorted(nodes, key=lambda v: v.uid):
        uid = f"v{n.uid}"
        dot.node(name=uid, label=_node_label(n), shape='record')

        # A node produced by an operation gets a separate bubble feeding it
        if n.op is not None:
            dot.node(name=uid + n.op.name, label=str(n.op))
            dot.edge(uid + n.op.name, uid)

    for n1, n2 in sorted(edges, key=lambda e: (e[0].uid, e[1].uid)):
        dot.edge(f"v{n1.uid}", f"v{n2.uid}{n2.op.name}")

    if filename is not None:
        dot.save(filename)

    return dot
