"""
ugrad: a minimal scalar reverse-mode autograd engine.

This package builds a graph of scalar operations as they execute and computes
exact gradients with a single backward pass, plus a small neural network
library on top of it.
"""

from ugrad.engine import Value, topological_order
from ugrad.ops import Op
from ugrad import nn
from ugrad.utils import draw_dot

__version__ = "0.1.0"
__all__ = ["Value", "Op", "topological_order", "nn", "draw_dot"]
