"""
Loss functions built from Value operations, so they take part in backward().
"""

from ugrad.engine import Value


def squared_error(preds, targets):
    """Sum of squared differences: sum((t - p)^2)"""
    assert len(preds) == len(targets), f"{len(preds)} predictions for {len(targets)} targets"
    return sum(((t - p) ** 2 for p, t in zip(preds, targets)), Value(0.0))


def hinge(scores, labels):
    """
    SVM max-margin loss: mean(relu(1 - label * score))

    Labels are +1 / -1. A score on the right side of the margin costs nothing.
    """
    assert len(scores) == len(labels), f"{len(scores)} scores for {len(labels)} labels"
    assert scores, "hinge loss of an empty batch"
    losses = [(1 - yi * si).relu() for si, yi in zip(scores, labels)]
    return sum(losses, Value(0.0)) / len(losses)


def l2(params, alpha=1e-4):
    """L2 regularization: alpha * sum(p^2)"""
    return alpha * sum((p * p for p in params), Value(0.0))
