"""
Activation function catalog.

Each member of `Activation` is a named (apply, derivative) pair. Name lookups
go through the enum itself (`Activation["TANH"]`) and back through `.name`,
which keeps the catalog stable for serialization.
"""

from enum import Enum
from typing import Callable, Dict, Tuple

import numpy as np

# Constants from the self-normalizing network paper
SELU_ALPHA = 1.6732632423543772848170429916717
SELU_SCALE = 1.0507009873554804934193349852946


def _logistic(x: float) -> float:
    return 1.0 / (1.0 + np.exp(-x))


def _logistic_derivative(x: float) -> float:
    fx = _logistic(x)
    return fx * (1.0 - fx)


def _tanh_derivative(x: float) -> float:
    return 1.0 - np.tanh(x) ** 2


def _softsign(x: float) -> float:
    return x / (1.0 + abs(x))


def _softsign_derivative(x: float) -> float:
    d = 1.0 + abs(x)
    return 1.0 / (d * d)


def _gaussian(x: float) -> float:
    return np.exp(-(x**2))


def _gaussian_derivative(x: float) -> float:
    return -2.0 * x * np.exp(-(x**2))


def _bent_identity(x: float) -> float:
    return (np.sqrt(x**2 + 1.0) - 1.0) / 2.0 + x


def _bent_identity_derivative(x: float) -> float:
    return x / (2.0 * np.sqrt(x**2 + 1.0)) + 1.0


def _bipolar_sigmoid(x: float) -> float:
    return 2.0 / (1.0 + np.exp(-x)) - 1.0


def _bipolar_sigmoid_derivative(x: float) -> float:
    e = np.exp(-x)
    return (2.0 * e) / ((1.0 + e) ** 2)


def _selu(x: float) -> float:
    fx = x if x > 0 else SELU_ALPHA * np.exp(x) - SELU_ALPHA
    return fx * SELU_SCALE


def _selu_derivative(x: float) -> float:
    if x > 0:
        return SELU_SCALE
    return (SELU_ALPHA * np.exp(x)) * SELU_SCALE


_Pair = Tuple[Callable[[float], float], Callable[[float], float]]

_FUNCTIONS: Dict[str, _Pair] = {
    "LOGISTIC": (_logistic, _logistic_derivative),
    "TANH": (np.tanh, _tanh_derivative),
    "IDENTITY": (lambda x: x, lambda x: 1.0),
    "STEP": (lambda x: 1.0 if x > 0 else 0.0, lambda x: 0.0),
    "RELU": (lambda x: x if x > 0 else 0.0, lambda x: 1.0 if x > 0 else 0.0),
    "SOFTSIGN": (_softsign, _softsign_derivative),
    "SINUSOID": (np.sin, np.cos),
    "GAUSSIAN": (_gaussian, _gaussian_derivative),
    "BENT_IDENTITY": (_bent_identity, _bent_identity_derivative),
    "BIPOLAR": (lambda x: 1.0 if x > 0 else -1.0, lambda x: 0.0),
    "BIPOLAR_SIGMOID": (_bipolar_sigmoid, _bipolar_sigmoid_derivative),
    "HARD_TANH": (
        lambda x: max(-1.0, min(1.0, x)),
        lambda x: 1.0 if -1.0 < x < 1.0 else 0.0,
    ),
    "ABSOLUTE": (abs, lambda x: -1.0 if x < 0 else 1.0),
    "INVERSE": (lambda x: 1.0 - x, lambda x: -1.0),
    "SELU": (_selu, _selu_derivative),
}


class Activation(Enum):
    """Named squashing functions usable as a node's `squash`."""

    LOGISTIC = "LOGISTIC"
    TANH = "TANH"
    IDENTITY = "IDENTITY"
    STEP = "STEP"
    RELU = "RELU"
    SOFTSIGN = "SOFTSIGN"
    SINUSOID = "SINUSOID"
    GAUSSIAN = "GAUSSIAN"
    BENT_IDENTITY = "BENT_IDENTITY"
    BIPOLAR = "BIPOLAR"
    BIPOLAR_SIGMOID = "BIPOLAR_SIGMOID"
    HARD_TANH = "HARD_TANH"
    ABSOLUTE = "ABSOLUTE"
    INVERSE = "INVERSE"
    SELU = "SELU"

    def apply(self, x: float) -> float:
        return float(_FUNCTIONS[self.value][0](x))

    def derivative(self, x: float) -> float:
        return float(_FUNCTIONS[self.value][1](x))

    def __call__(self, x: float, derivate: bool = False) -> float:
        return self.derivative(x) if derivate else self.apply(x)


def get_activation(name: str) -> Activation:
    """
    Resolve an activation function by its catalog name.

    Raises:
        KeyError: If no activation with that name exists
    """
    try:
        return Activation[name]
    except KeyError:
        raise KeyError(
            f"Unknown activation '{name}'. "
            f"Valid options: {list_activations()}"
        ) from None


def list_activations() -> list[str]:
    """Return the names of every catalogued activation function."""
    return [member.name for member in Activation]
