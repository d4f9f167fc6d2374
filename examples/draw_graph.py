"""Write dot files for a small relu expression and a single neuron."""

import logging

from ugrad.engine import Value
from ugrad.nn import Neuron
from ugrad.utils import draw_dot

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(message)s')

    x = Value(1.0, label='x')
    y = (x * 2.0 + 1.0).relu()
    y.label = 'y'
    y.backward()
    draw_dot(y, filename='relu.dot')
    logger.info("wrote relu.dot (y=%.4f, dy/dx=%.4f)", y.data, x.grad)

    n = Neuron(2, nonlin=False)
    y = n([Value(1.0, label='x0'), Value(-2.0, label='x1')])
    y.backward()
    draw_dot(y, filename='neuron.dot')
    logger.info("wrote neuron.dot (y=%.4f)", y.data)


if __name__ == '__main__':
    main()
