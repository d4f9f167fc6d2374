"""
Neural network building blocks for ugrad.

Neurons, layers and multi-layer perceptrons built purely out of scalar Values,
so the whole forward pass is a graph that backward() can differentiate.
"""

import numpy as np
from ugrad.engine import Value


class Module:
    """
    Base class for all neural network modules.

    Provides common functionality for managing parameters and gradients.
    """

    def zero_grad(self):
        """
        Reset all gradients to zero.

        Call this before each backward pass to avoid accumulating gradients
        from multiple backward passes.
        """
        for p in self.parameters():
            p.zero_grad()

    def parameters(self):
        """
        Return a list of all trainable parameters (weights and biases).

        Override this in subclasses to return actual parameters.
        """
        return []


class Neuron(Module):
    """
    A single neuron: tanh(sum(w_i * x_i) + b)

    Weights and bias are leaf Values drawn uniformly from [-1, 1] unless given.

    Args:
        nin: Number of inputs
        nonlin: If True, apply tanh to the weighted sum (default: True)
        weights: Optional initial weights (nin values)
        bias: Optional initial bias

    Example:
        >>> n = Neuron(2)
        >>> y = n([1.0, -2.0])  # Value in (-1, 1)
    """

    def __init__(self, nin, nonlin=True, weights=None, bias=None):
        if weights is None:
            weights = np.random.uniform(-1.0, 1.0, nin)
        assert len(weights) == nin, f"expected {nin} weights, got {len(weights)}"
        if bias is None:
            bias = np.random.uniform(-1.0, 1.0)

        self.w = [Value(wi, label=f"w{i}") for i, wi in enumerate(weights)]
        self.b = Value(bias, label="b")
        self.nonlin = nonlin

    @property
    def nin(self):
        return len(self.w)

    def __call__(self, x):
        assert len(x) == self.nin, f"neuron takes {self.nin} inputs, got {len(x)}"
        act = sum((wi * xi for wi, xi in zip(self.w, x)), self.b)
        return act.tanh() if self.nonlin else act

    def parameters(self):
        return self.w + [self.b]

    def __repr__(self):
        return f"{'Tanh' if self.nonlin else 'Linear'}Neuron({self.nin})"


class Layer(Module):
    """
    A fully-connected layer: nout neurons that all read the same nin inputs.

    Args:
        nin: Number of inputs
        nout: Number of neurons (outputs)
        **kwargs: Passed to each Neuron (e.g. nonlin=False)
    """

    def __init__(self, nin, nout, **kwargs):
        self.neurons = [Neuron(nin, **kwargs) for _ in range(nout)]
        self._nin = nin

    @property
    def nin(self):
        return self._nin

    @property
    def nout(self):
        return len(self.neurons)

    def __call__(self, x):
        """Forward pass: one output Value per neuron."""
        return [n(x) for n in self.neurons]

    def parameters(self):
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer({self.nin} → {self.nout})"


class MLP(Module):
    """
    Multi-Layer Perceptron: a sequence of fully-connected tanh layers.

    Args:
        nin: Number of input features
        nouts: List of output sizes for each layer
               Example: [16, 16, 1] creates 3 layers: input→16→16→1

    Example:
        >>> mlp = MLP(3, [4, 4, 1])
        >>> y = mlp([2.0, 3.0, -1.0])  # list with one Value
        >>> mlp.zero_grad()  # Reset gradients
        >>> y[0].backward()  # Compute gradients
        >>> for p in mlp.parameters():
        ...     p.overwrite_data(p.data - 0.1 * p.grad)
    """

    def __init__(self, nin, nouts):
        self.nin = nin
        layer_sizes = [nin] + list(nouts)
        self.layers = [Layer(layer_sizes[i], layer_sizes[i + 1]) for i in range(len(nouts))]

    @classmethod
    def from_layer(cls, layer):
        """Start an MLP from a single layer; grow it with add_layer()."""
        return cls(layer.nin, []).add_layer(layer)

    def add_layer(self, layer):
        """Append a layer. Its input size must match the current output size."""
        nout = self.layers[-1].nout if self.layers else self.nin
        assert layer.nin == nout, f"layer takes {layer.nin} inputs but the MLP produces {nout}"
        self.layers.append(layer)
        return self

    def __call__(self, x):
        """Forward pass: pass input through all layers sequentially."""
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        """Return all trainable parameters from all layers."""
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        layer_str = ' → '.join(str(layer) for layer in self.layers)
        return f"MLP[\n  {layer_str}\n]"
