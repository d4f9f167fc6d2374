import logging

logger = logging.getLogger(__name__)


class SGD:
    """
    Plain stochastic gradient descent over leaf parameters.

    Reads each parameter's gradient and writes ``data - lr * grad`` back with
    ``overwrite_data``. The learning rate may be changed between steps.

    Example:
        >>> opt = SGD(mlp.parameters(), lr=0.1)
        >>> opt.zero_grad()
        >>> loss.backward()
        >>> opt.step()
    """

    def __init__(self, params, lr):
        self.params = list(params)
        if not self.params:
            raise ValueError("SGD got an empty parameter list.")
        if lr <= 0:
            raise ValueError(f"learning rate must be positive, got {lr}")
        self.lr = lr

    def step(self):
        logger.debug("SGD step over %d params, lr=%g", len(self.params), self.lr)
        for p in self.params:
            assert p.is_leaf(), f"SGD can only update leaf values, got {p!r}"
            p.overwrite_data(p.data - self.lr * p.grad)

    def zero_grad(self):
        for p in self.params:
            p.zero_grad()

    def __repr__(self):
        return f"SGD({len(self.params)} params, lr={self.lr})"
