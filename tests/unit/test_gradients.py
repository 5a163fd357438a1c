"""Finite-difference checks of the analytic backpropagation gradients."""

import numpy as np
import pytest

from backpropnets.core.types import Sample
from backpropnets.training.builder import NetworkBuilder

EPS = 1e-6


def _network(cost: str):
    network = NetworkBuilder().set_input_size(3).set_cost_function(cost).set_seed(5).build()
    network.add_layer(NetworkBuilder.create_layer(4, "logistic"))
    network.add_layer(NetworkBuilder.create_layer(2, "logistic"))
    return network


def _cost(network, x, y) -> float:
    return network.cost_function.calculate(network.feed_forward(x), y)


def _numeric_gradient(network, param, x, y):
    grad = np.zeros_like(param)
    for idx in np.ndindex(param.shape):
        original = param[idx]
        param[idx] = original + EPS
        plus = _cost(network, x, y)
        param[idx] = original - EPS
        minus = _cost(network, x, y)
        param[idx] = original
        grad[idx] = (plus - minus) / (2 * EPS)
    return grad


@pytest.mark.parametrize("cost", ["quadratic", "crossentropy"])
def test_backprop_matches_central_differences(cost):
    network = _network(cost)
    x = np.array([0.3, -0.8, 0.5])
    y = np.array([1.0, 0.0])

    grad_biases, grad_weights = network.back_propagate(x, y)

    for layer, grad_b, grad_w in zip(network.layers, grad_biases, grad_weights):
        assert grad_b.shape == layer.bias.shape
        assert grad_w.shape == layer.weight.shape
        numeric_b = _numeric_gradient(network, layer.bias, x, y)
        numeric_w = _numeric_gradient(network, layer.weight, x, y)
        assert np.allclose(grad_b, numeric_b, rtol=1e-5, atol=1e-8)
        assert np.allclose(grad_w, numeric_w, rtol=1e-5, atol=1e-8)


def test_update_parameters_sums_sample_gradients():
    network = _network("quadratic")
    samples = [
        (np.array([0.1, 0.2, 0.3]), np.array([1.0, 0.0])),
        (np.array([-0.5, 0.4, 0.9]), np.array([0.0, 1.0])),
    ]
    batch = [Sample.from_values(x, y) for x, y in samples]
    before = network.state_dict()
    expected_b = [np.zeros(layer.size) for layer in network.layers]
    expected_w = [np.zeros_like(layer.weight) for layer in network.layers]
    for sample in batch:
        grad_b, grad_w = network.back_propagate(sample.features, sample.label)
        for idx in range(network.number_of_layers):
            expected_b[idx] += grad_b[idx]
            expected_w[idx] += grad_w[idx]

    network.update_parameters(batch, lr_ratio=-0.5, reg_ratio=-0.01)

    for idx, layer in enumerate(network.layers):
        w0 = before[f"W{idx}"]
        assert np.allclose(layer.bias, before[f"b{idx}"] - 0.5 * expected_b[idx])
        assert np.allclose(layer.weight, w0 - 0.5 * expected_w[idx] - 0.01 * w0)
