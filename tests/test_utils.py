from graphviz import Digraph

from ugrad.engine import Value
from ugrad.utils import draw_dot, trace


def test_trace_nodes_and_edges():
    x = Value(2.0)
    y = Value(3.0)
    xy = x * y
    z = xy + x
    nodes, edges = trace(z)
    assert nodes == {x, y, xy, z}
    assert edges == {(x, xy), (y, xy), (xy, z), (x, z)}


def test_trace_does_not_mutate():
    x = Value(2.0)
    z = (x * 3.0).tanh()
    z.backward()
    before = [(v.data, v.grad) for v in (x, z)]
    trace(z)
    assert [(v.data, v.grad) for v in (x, z)] == before


def test_trace_leaf():
    x = Value(1.0)
    assert trace(x) == ({x}, set())


def test_draw_dot():
    x = Value(1.0, label='x')
    y = (x * 2.0 + 1.0).relu()
    y.backward()
    dot = draw_dot(y)
    assert isinstance(dot, Digraph)
    src = dot.source
    assert 'rankdir=LR' in src
    assert 'ReLU' in src
    assert 'x | data 1.0000 | grad 2.0000' in src
    assert f'v{y.uid}RELU -> v{y.uid}' in src


def test_draw_dot_is_deterministic():
    x = Value(1.0)
    y = (x * x).exp()
    assert draw_dot(y).source == draw_dot(y).source


def test_draw_dot_writes_file(tmp_path):
    x = Value(-1.0)
    y = x.tanh()
    path = tmp_path / "tanh.dot"
    draw_dot(y, rankdir='TB', filename=str(path))
    text = path.read_text()
    assert 'digraph' in text
    assert 'rankdir=TB' in text
    assert 'tanh' in text
