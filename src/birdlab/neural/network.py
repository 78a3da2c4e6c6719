from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Sequence, Tuple

from ..errors import InvalidArgument
from ..genetic.chromosome import Chromosome

if TYPE_CHECKING:
    from ..sim.core.rng import DeterministicRng


def relu(value: float) -> float:
    return value if value > 0.0 else 0.0


def parameter_count(topology: Sequence[int]) -> int:
    return sum((inputs + 1) * outputs for inputs, outputs in zip(topology, topology[1:]))


def _check_topology(topology: Sequence[int]) -> None:
    if len(topology) < 2:
        raise InvalidArgument(f"Topology needs at least 2 layers, got {list(topology)}")
    if any(width < 1 for width in topology):
        raise InvalidArgument(f"Layer widths must be positive, got {list(topology)}")


class Neuron:
    __slots__ = ("_bias", "_weights")

    def __init__(self, bias: float, weights: Iterable[float]):
        weights = tuple(float(weight) for weight in weights)
        if not weights:
            raise InvalidArgument("Neuron weights must not be empty")
        self._bias = float(bias)
        self._weights = weights

    @staticmethod
    def random(rng: "DeterministicRng", input_size: int) -> "Neuron":
        bias = rng.next_range(-1.0, 1.0)
        weights = [rng.next_range(-1.0, 1.0) for _ in range(input_size)]
        return Neuron(bias, weights)

    @property
    def bias(self) -> float:
        return self._bias

    @property
    def weights(self) -> List[float]:
        return list(self._weights)

    @property
    def input_size(self) -> int:
        return len(self._weights)

    def propagate(self, inputs: Sequence[float]) -> float:
        if len(inputs) != len(self._weights):
            raise InvalidArgument(f"Expected {len(self._weights)} inputs, got {len(inputs)}")
        total = self._bias
        for value, weight in zip(inputs, self._weights):
            total += value * weight
        return relu(total)

    def __repr__(self) -> str:
        return f"Neuron(bias={self._bias!r}, weights={list(self._weights)!r})"


class Layer:
    __slots__ = ("_neurons",)

    def __init__(self, neurons: Iterable[Neuron]):
        neurons = tuple(neurons)
        if not neurons:
            raise InvalidArgument("Layer needs at least one neuron")
        input_size = neurons[0].input_size
        if any(neuron.input_size != input_size for neuron in neurons):
            raise InvalidArgument("All neurons in a layer must share the same input width")
        self._neurons = neurons

    @staticmethod
    def random(rng: "DeterministicRng", input_size: int, output_size: int) -> "Layer":
        return Layer(Neuron.random(rng, input_size) for _ in range(output_size))

    @staticmethod
    def from_weights(input_size: int, output_size: int, weights: Sequence[float]) -> "Layer":
        expected = (input_size + 1) * output_size
        if len(weights) != expected:
            raise InvalidArgument(
                f"Expected {expected} weights for a layer with {input_size} inputs and "
                f"{output_size} outputs, got {len(weights)}"
            )
        stride = input_size + 1
        return Layer(
            Neuron(weights[offset], weights[offset + 1 : offset + stride])
            for offset in range(0, expected, stride)
        )

    @property
    def neurons(self) -> Tuple[Neuron, ...]:
        return self._neurons

    @property
    def input_size(self) -> int:
        return self._neurons[0].input_size

    @property
    def output_size(self) -> int:
        return len(self._neurons)

    def propagate(self, inputs: Sequence[float]) -> List[float]:
        return [neuron.propagate(inputs) for neuron in self._neurons]

    def weights(self) -> List[float]:
        flat: List[float] = []
        for neuron in self._neurons:
            flat.append(neuron.bias)
            flat.extend(neuron.weights)
        return flat


class NeuralNetwork:
    """Fully connected feed-forward network with ReLU on every neuron.

    The flat weight encoding is shared with the genetic side: per layer, per output
    neuron, one bias followed by ``input_size`` weights. ``from_weights`` and
    ``weights`` walk that order strictly, so the two are exact inverses.
    """

    __slots__ = ("_layers",)

    def __init__(self, layers: Iterable[Layer]):
        layers = tuple(layers)
        if not layers:
            raise InvalidArgument("Network needs at least one layer")
        for current, following in zip(layers, layers[1:]):
            if current.output_size != following.input_size:
                raise InvalidArgument(
                    f"Layer output width {current.output_size} does not match next input width {following.input_size}"
                )
        self._layers = layers

    @staticmethod
    def random(rng: "DeterministicRng", topology: Sequence[int]) -> "NeuralNetwork":
        _check_topology(topology)
        return NeuralNetwork(
            Layer.random(rng, inputs, outputs) for inputs, outputs in zip(topology, topology[1:])
        )

    @staticmethod
    def from_weights(topology: Sequence[int], weights: Sequence[float]) -> "NeuralNetwork":
        _check_topology(topology)
        weights = list(weights)
        expected = parameter_count(topology)
        if len(weights) != expected:
            raise InvalidArgument(f"Topology {list(topology)} needs {expected} weights, got {len(weights)}")
        layers = []
        offset = 0
        for inputs, outputs in zip(topology, topology[1:]):
            size = (inputs + 1) * outputs
            layers.append(Layer.from_weights(inputs, outputs, weights[offset : offset + size]))
            offset += size
        return NeuralNetwork(layers)

    @staticmethod
    def from_chromosome(chromosome: Chromosome, topology: Sequence[int]) -> "NeuralNetwork":
        return NeuralNetwork.from_weights(topology, chromosome.genes)

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return self._layers

    @property
    def topology(self) -> List[int]:
        return [self._layers[0].input_size] + [layer.output_size for layer in self._layers]

    def propagate(self, inputs: Sequence[float]) -> List[float]:
        expected = self._layers[0].input_size
        if len(inputs) != expected:
            raise InvalidArgument(f"Network expects {expected} inputs, got {len(inputs)}")
        values = list(inputs)
        for layer in self._layers:
            values = layer.propagate(values)
        return values

    def weights(self) -> List[float]:
        flat: List[float] = []
        for layer in self._layers:
            flat.extend(layer.weights())
        return flat

    def to_chromosome(self) -> Chromosome:
        return Chromosome.from_network(self)

    def matches_topology(self, topology: Sequence[int]) -> bool:
        if len(topology) != len(self._layers) + 1:
            return False
        for layer, inputs, outputs in zip(self._layers, topology, topology[1:]):
            if layer.input_size != inputs or layer.output_size != outputs:
                return False
            if any(len(neuron.weights) != inputs for neuron in layer.neurons):
                return False
        return True

    def __repr__(self) -> str:
        return f"NeuralNetwork(topology={self.topology})"
