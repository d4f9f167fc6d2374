import pytest

from ugrad.engine import Value
from ugrad.losses import hinge, l2, squared_error
from ugrad.optim import SGD


def test_sgd_step():
    w = Value(1.0)
    b = Value(-2.0)
    loss = w * 3.0 + b
    loss.backward()
    opt = SGD([w, b], lr=0.1)
    opt.step()
    assert w.data == pytest.approx(1.0 - 0.1 * 3.0)
    assert b.data == pytest.approx(-2.0 - 0.1 * 1.0)


def test_sgd_zero_grad():
    w = Value(1.0)
    (w * w).backward()
    opt = SGD([w], lr=0.5)
    opt.zero_grad()
    assert w.grad == 0.0
    assert w.data == 1.0


def test_sgd_rejects_empty_params():
    with pytest.raises(ValueError):
        SGD([], lr=0.1)


def test_sgd_rejects_bad_lr():
    with pytest.raises(ValueError):
        SGD([Value(1.0)], lr=0.0)


def test_sgd_refuses_non_leaf():
    a = Value(1.0)
    opt = SGD([a * 2.0], lr=0.1)
    with pytest.raises(AssertionError):
        opt.step()


def test_sgd_minimizes_quadratic():
    x = Value(5.0)
    opt = SGD([x], lr=0.1)
    for _ in range(100):
        opt.zero_grad()
        ((x - 3.0) ** 2).backward()
        opt.step()
    assert x.data == pytest.approx(3.0, abs=1e-4)


def test_squared_error():
    p = [Value(1.0), Value(2.0)]
    loss = squared_error(p, [0.0, 4.0])
    assert loss.data == pytest.approx(1.0 + 4.0)
    loss.backward()
    assert p[0].grad == pytest.approx(2.0)
    assert p[1].grad == pytest.approx(-4.0)


def test_hinge():
    s = [Value(2.0), Value(0.5), Value(0.5)]
    loss = hinge(s, [1.0, 1.0, -1.0])
    # relu(1-2) + relu(1-0.5) + relu(1+0.5), averaged
    assert loss.data == pytest.approx((0.0 + 0.5 + 1.5) / 3)
    loss.backward()
    assert s[0].grad == 0.0
    assert s[1].grad == pytest.approx(-1.0 / 3)
    assert s[2].grad == pytest.approx(1.0 / 3)


def test_l2():
    params = [Value(1.0), Value(-2.0)]
    loss = l2(params, alpha=0.5)
    assert loss.data == pytest.approx(2.5)
    loss.backward()
    assert params[0].grad == pytest.approx(1.0)
    assert params[1].grad == pytest.approx(-2.0)
