import itertools
import logging

from ugrad import ops
from ugrad.ops import Op

logger = logging.getLogger(__name__)

_uids = itertools.count()


class Value:
    """
    A single scalar in a computational graph, plus the gradient flowing back into it.

    Every arithmetic operation between Values creates a new Value that remembers
    its operands and the operation that produced it. The graph is evaluated
    eagerly: ``data`` is computed immediately. Calling ``backward()`` on a node
    fills in ``grad`` for that node and every node it was built from.

    Example:
        >>> x = Value(2.0)
        >>> y = Value(3.0)
        >>> z = x * y + x
        >>> z.backward()  # Compute gradients
        >>> print(x.grad)  # dz/dx = y + 1 = 4.0
    """

    __slots__ = ('_data', '_grad', '_operands', '_op', '_uid', 'label')

    def __init__(self, data, _operands=(), _op=None, label=""):
        """
        Initialize a Value object.

        Args:
            data: The scalar value
            _operands: Values this node was computed from (internal use for autograd)
            _op: The Op that created this Value, None for a leaf (internal)
            label: Optional name for debugging and visualization
        """
        self._data = float(data)
        self._grad = 0.0
        self._operands = tuple(_operands)
        self._op = _op
        # Identity for graph bookkeeping, never derived from the numbers
        self._uid = next(_uids)
        self.label = label

    # Observers

    @property
    def data(self):
        return self._data

    @property
    def grad(self):
        return self._grad

    @property
    def operands(self):
        return self._operands

    @property
    def op(self):
        return self._op

    @property
    def uid(self):
        return self._uid

    def is_leaf(self):
        return self._op is None

    # Mutators

    def overwrite_data(self, value):
        """
        Replace the data of a leaf, e.g. a parameter updated by an optimizer.

        Nodes built from this one are not recomputed. Using this on a node that
        has an operation makes the graph inconsistent; only call it on leaves.
        """
        self._data = float(value)

    def zero_grad(self):
        """Reset the gradient to 0. Gradients accumulate across backward() calls."""
        self._grad = 0.0

    def _accumulate_grad(self, contribution):
        self._grad += contribution

    # Graph builders

    @classmethod
    def _apply(cls, op, *operands):
        operands = tuple(v if isinstance(v, Value) else cls(v) for v in operands)
        return cls(ops.forward(op, *(v.data for v in operands)), operands, op)

    def __add__(self, other):
        """Addition: d(a+b)/da = 1, d(a+b)/db = 1"""
        return Value._apply(Op.ADD, self, other)

    def __mul__(self, other):
        """Multiplication: d(a*b)/da = b, d(a*b)/db = a"""
        return Value._apply(Op.MUL, self, other)

    def pow(self, exponent):
        """
        Power operation with the exponent as a graph node.

        Operands are recorded as [base, exponent]. Only the base receives a
        gradient; the exponent is treated as a constant.

        Example:
            >>> x = Value(3.0)
            >>> y = x.pow(2)  # y.data = 9.0
        """
        return Value._apply(Op.POW, self, exponent)

    def __pow__(self, other):
        return self.pow(other)

    def __rpow__(self, other):
        return Value(other).pow(self)

    def tanh(self):
        """Hyperbolic tangent: d(tanh(x))/dx = 1 - tanh(x)^2"""
        return Value._apply(Op.TANH, self)

    def exp(self):
        """Exponential: d(e^x)/dx = e^x"""
        return Value._apply(Op.EXP, self)

    def relu(self):
        """
        ReLU (Rectified Linear Unit) activation: max(0, x)

        The gradient only flows through when the output is positive.
        """
        return Value._apply(Op.RELU, self)

    # Derived operations, expressed with the primitives above

    def __neg__(self):
        """Negation: -x = x * -1"""
        return self * Value(-1.0)

    def __radd__(self, other):
        """Right addition: other + self (when other is not a Value)"""
        return Value(other) + self

    def __sub__(self, other):
        """Subtraction: a - b = a + b * -1"""
        other = other if isinstance(other, Value) else Value(other)
        return self + (-other)

    def __rsub__(self, other):
        """Right subtraction: other - self"""
        return Value(other) + (-self)

    def __rmul__(self, other):
        """Right multiplication: other * self (when other is not a Value)"""
        return Value(other) * self

    def __truediv__(self, other):
        """Division: a / b = a * b^(-1)"""
        other = other if isinstance(other, Value) else Value(other)
        return self * other.pow(-1.0)

    def __rtruediv__(self, other):
        """Right division: other / self"""
        return Value(other) * self.pow(-1.0)

    # Backpropagation

    def backward(self):
        """
        Perform backpropagation: compute gradients for all Values in the graph.

        The root gradient is set to 1 (dL/dL = 1), then every reachable node,
        visited in reverse topological order, pushes its finished gradient into
        its operands. Gradients of all other nodes are added to, so call
        ``zero_grad()`` on reused nodes between passes.

        Example:
            >>> x = Value(2.0)
            >>> y = x * 3 + 1
            >>> y.backward()
            >>> print(x.grad)  # dy/dx = 3.0
        """
        topo = topological_order(self)
        logger.debug("backward from %r over %d nodes", self, len(topo))

        self._grad = 1.0
        for v in reversed(topo):
            ops.backward(v)

    def __repr__(self):
        """Return a readable string representation of the Value."""
        label_str = f"'{self.label}' " if self.label else ""
        op_str = f" from {self._op}" if self._op else ""
        return f"Value({label_str}data={self._data}, grad={self._grad}{op_str})"


def topological_order(root):
    """
    Order every node reachable from ``root`` so that each node comes after all of its operands.

    Depth-first post-order over operands in their recorded order, using an
    explicit stack of (node, next operand index) frames so the depth of the
    graph is not limited by the interpreter's recursion limit. Each node
    appears exactly once, even when several paths lead to it.
    """
    topo = []
    visited = {root.uid}
    stack = [(root, 0)]

    while stack:
        node, i = stack[-1]
        if i < len(node.operands):
            stack[-1] = (node, i + 1)
            child = node.operands[i]
            if child.uid not in visited:
                visited.add(child.uid)
                stack.append((child, 0))
        else:
            stack.pop()
            topo.append(node)

    return topo
