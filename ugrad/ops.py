"""
The closed set of operations a Value can be built from.

Every operation has a forward formula (how the node's data is computed from
its operands' data) and a local backward rule (how the node's gradient is
pushed into its operands' gradients). Backward rules always accumulate with
``+=`` so that a value used by several nodes receives the sum of every path.
"""

import enum

import numpy as np


class Op(enum.Enum):
    """Operation tag of a non-leaf Value. The value is the display symbol."""

    ADD = '+'
    MUL = '*'
    TANH = 'tanh'
    EXP = 'exp'
    POW = 'pow'
    RELU = 'ReLU'

    def __str__(self):
        return self.value


ARITY = {
    Op.ADD: 2,
    Op.MUL: 2,
    Op.TANH: 1,
    Op.EXP: 1,
    Op.POW: 2,
    Op.RELU: 1,
}


# Forward formulas

def _relu(x):
    # np.maximum keeps NaN as NaN
    return np.maximum(x, 0.0)


FORWARD = {
    Op.ADD: lambda a, b: a + b,
    Op.MUL: lambda a, b: a * b,
    Op.TANH: np.tanh,
    Op.EXP: np.exp,
    Op.POW: np.power,
    Op.RELU: _relu,
}


def forward(op, *operand_data):
    """
    Evaluate the forward formula of ``op`` on raw operand data.

    Invalid situations (0 ** -1, exp overflow, negative base to a fractional
    power) follow IEEE-754 and come back as inf or nan.
    """
    assert len(operand_data) == ARITY[op], f"{op.name} takes {ARITY[op]} operands, got {len(operand_data)}"
    with np.errstate(all='ignore'):
        return float(FORWARD[op](*(np.float64(d) for d in operand_data)))


# Backward rules. Each reads the node's final gradient and adds into operands.

def _add_backward(out):
    a, b = out.operands
    a._accumulate_grad(out.grad)
    b._accumulate_grad(out.grad)


def _mul_backward(out):
    a, b = out.operands
    a._accumulate_grad(b.data * out.grad)
    b._accumulate_grad(a.data * out.grad)


def _tanh_backward(out):
    a, = out.operands
    a._accumulate_grad((1.0 - out.data * out.data) * out.grad)


def _exp_backward(out):
    a, = out.operands
    a._accumulate_grad(out.data * out.grad)


def _pow_backward(out):
    """d(x^n)/dx = n * x^(n-1). The exponent is held constant: it gets no gradient."""
    assert len(out.operands) == 2, f"pow needs [base, exponent], got {len(out.operands)} operands"
    base, exponent = out.operands
    local = exponent.data * np.power(np.float64(base.data), exponent.data - 1.0)
    base._accumulate_grad(float(local * out.grad))


def _relu_backward(out):
    a, = out.operands
    a._accumulate_grad(out.grad if out.data > 0 else 0.0)


BACKWARD = {
    Op.ADD: _add_backward,
    Op.MUL: _mul_backward,
    Op.TANH: _tanh_backward,
    Op.EXP: _exp_backward,
    Op.POW: _pow_backward,
    Op.RELU: _relu_backward,
}

assert set(FORWARD) == set(Op) == set(BACKWARD) == set(ARITY), "every Op needs forward and backward rules"


def backward(node):
    """Apply the local backward rule of ``node``. Leaves have nothing to propagate."""
    if node.op is None:
        return
    assert len(node.operands) == ARITY[node.op], \
        f"{node.op.name} node has {len(node.operands)} operands, expected {ARITY[node.op]}"
    with np.errstate(all='ignore'):
        BACKWARD[node.op](node)
