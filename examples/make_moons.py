"""
Train a small MLP to separate two interleaving half circles.

Max-margin (hinge) loss with L2 regularization, plain SGD with a linearly
decaying learning rate, and an ASCII plot of the decision boundary at the end.
"""

import argparse
import logging

import numpy as np

from ugrad.losses import hinge, l2
from ugrad.nn import MLP, Layer
from ugrad.optim import SGD

logger = logging.getLogger(__name__)


def make_moons(n_samples, noise, rng):
    """
    Two interleaving half circles, like scikit-learn's make_moons.

    Returns (X, y) with X of shape (2 * n_samples, 2) and labels y in {-1, +1}.
    """
    r = np.arange(n_samples) * np.pi / n_samples
    outer = np.stack([np.cos(r), np.sin(r)], axis=1)
    inner = np.stack([1.0 - np.cos(r), 1.0 - np.sin(r) - 0.5], axis=1)
    X = np.concatenate([outer, inner]) + rng.normal(0.0, noise, (2 * n_samples, 2))
    y = np.concatenate([-np.ones(n_samples), np.ones(n_samples)])
    order = rng.permutation(2 * n_samples)
    return X[order], y[order]


def build_model():
    # 2 -> 16 -> 16 -> 1, linear output score
    return (MLP.from_layer(Layer(2, 16))
            .add_layer(Layer(16, 16))
            .add_layer(Layer(16, 1, nonlin=False)))


def loss_and_accuracy(model, X, y, alpha=1e-4):
    # plain floats: numpy scalars on the left of a Value would not dispatch to it
    scores = [model([float(v) for v in xi])[0] for xi in X]
    loss = hinge(scores, [float(v) for v in y]) + l2(model.parameters(), alpha)
    acc = np.mean([(s.data > 0) == (yi > 0) for s, yi in zip(scores, y)])
    return loss, acc


def draw_decision_boundary(model, steps=15):
    rows = []
    for i in range(steps, -steps - 1, -1):
        yy = 2.0 * i / steps
        row = ["-" if model([2.0 * s / steps, yy])[0].data > 0 else "*" for s in range(-steps, steps + 1)]
        rows.append(" ".join(row))
    return "\n".join(rows)


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument('--samples', type=int, default=50, help='points per moon')
    parser.add_argument('--noise', type=float, default=0.1, help='std of gaussian noise')
    parser.add_argument('--epochs', type=int, default=100)
    parser.add_argument('--seed', type=int, default=1337)
    parser.add_argument('--verbose', action='store_true', help='log engine debug output')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    rng = np.random.default_rng(args.seed)
    np.random.seed(args.seed)
    X, y = make_moons(args.samples, args.noise, rng)
    model = build_model()
    logger.info("%s with %d parameters", model, len(model.parameters()))

    opt = SGD(model.parameters(), lr=1.0)
    for k in range(args.epochs):
        loss, acc = loss_and_accuracy(model, X, y)
        opt.zero_grad()
        loss.backward()

        opt.lr = 1.0 - 0.9 * k / args.epochs
        opt.step()
        logger.info("step %d loss %.6f accuracy %.1f%%", k, loss.data, acc * 100)

    print(draw_decision_boundary(model))


if __name__ == '__main__':
    main()
