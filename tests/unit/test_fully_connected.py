import numpy as np
import pytest

from annkit.core.errors import InvalidConfigurationError, ShapeMismatchError
from annkit.core.parameters import ParameterView
from annkit.core.types import OutputInfo
from annkit.layers import FullyConnected


def _layer(I, J, *, bias=True, activation="logistic", std_dev=0.5, seed=0):
    layer = FullyConnected(
        OutputInfo.of(I),
        J,
        bias=bias,
        activation=activation,
        std_dev=std_dev,
        rng=np.random.default_rng(seed),
    )
    params = ParameterView()
    info = layer.initialize(params)
    return layer, params, info


def test_scalar_scenario_forward_and_backward():
    layer, params, info = _layer(2, 1, bias=False, activation="linear")
    assert info.units == 1
    params["W"].value[...] = [[2.0, -1.0]]

    y = layer.forward_propagate(np.array([3.0, 4.0]))
    assert np.array_equal(y, [2.0])

    eout = layer.backpropagate(np.array([1.0]))
    assert np.array_equal(params["W"].grad, [[3.0, 4.0]])
    assert np.array_equal(eout, [2.0, -1.0])


@pytest.mark.parametrize("bias", [True, False])
@pytest.mark.parametrize("I,J", [(1, 1), (3, 5), (7, 2)])
def test_output_and_error_sizes(I, J, bias):
    layer, params, _ = _layer(I, J, bias=bias)
    y = layer.forward_propagate(np.ones(I))
    assert y.shape == (J,)
    e = layer.backpropagate(np.ones(J))
    assert e.shape == (I,)
    assert params["W"].value.shape == (J, I + 1 if bias else I)


def test_bias_column_gets_delta_but_no_upstream_error():
    layer, params, _ = _layer(2, 2, bias=True, activation="linear")
    params["W"].value[...] = [[1.0, 2.0, 10.0], [3.0, 4.0, -10.0]]

    y = layer.forward_propagate(np.array([1.0, 1.0]))
    assert np.allclose(y, [13.0, -3.0])

    e = layer.backpropagate(np.array([0.5, -1.0]))
    assert np.allclose(params["W"].grad[:, 2], [0.5, -1.0])
    assert np.allclose(params["W"].grad[:, :2], [[0.5, 0.5], [-1.0, -1.0]])
    assert np.allclose(e, [1.0 * 0.5 - 3.0, 2.0 * 0.5 - 4.0])


def test_forward_is_bit_identical_with_fixed_weights():
    layer, _, _ = _layer(4, 3, bias=False, activation="tanh", seed=3)
    x = np.array([0.1, -0.2, 0.3, 0.7])
    first = np.array(layer.forward_propagate(x), copy=True)
    for _ in range(5):
        assert np.array_equal(layer.forward_propagate(x), first)


def test_gradient_is_overwritten_not_accumulated():
    layer, params, _ = _layer(2, 1, bias=False, activation="linear")
    params["W"].value[...] = [[1.0, 1.0]]
    for _ in range(3):
        layer.forward_propagate(np.array([1.0, 2.0]))
        layer.backpropagate(np.array([1.0]))
    assert np.array_equal(params["W"].grad, [[1.0, 2.0]])


def test_propagation_never_touches_weights():
    layer, params, _ = _layer(3, 2, seed=5)
    before = params["W"].value.copy()
    layer.forward_propagate(np.array([1.0, -1.0, 2.0]))
    layer.backpropagate(np.array([0.3, -0.4]))
    assert np.array_equal(params["W"].value, before)


def test_buffers_are_reused_and_outputs_read_only():
    layer, _, _ = _layer(2, 2)
    y1 = layer.forward_propagate(np.array([1.0, 2.0]))
    snapshot = np.array(y1, copy=True)
    y2 = layer.forward_propagate(np.array([-3.0, 0.5]))
    assert np.shares_memory(y1, y2)
    assert not np.array_equal(y1, snapshot)
    with pytest.raises(ValueError):
        y2[0] = 1.0


def test_registered_slot_aliases_layer_weights():
    layer, params, _ = _layer(2, 1, bias=False, activation="linear")
    params["W"].value[0, 0] = 5.0
    params["W"].value[0, 1] = 0.0
    assert np.array_equal(layer.forward_propagate(np.array([2.0, 9.0])), [10.0])
    assert layer.weights[0, 0] == 5.0


def test_zero_std_dev_yields_zero_weights():
    _, params, _ = _layer(3, 2, std_dev=0.0)
    assert not params["W"].value.any()


def test_weights_drawn_with_requested_std_dev():
    _, params, _ = _layer(50, 40, std_dev=0.2, seed=11)
    assert params["W"].value.std() == pytest.approx(0.2, rel=0.1)
    assert abs(params["W"].value.mean()) < 0.02


@pytest.mark.parametrize("units", [0, -3])
def test_non_positive_units_fail_at_construction(units):
    with pytest.raises(InvalidConfigurationError):
        FullyConnected(OutputInfo.of(2), units)


def test_non_positive_input_fails_at_construction():
    with pytest.raises(InvalidConfigurationError):
        FullyConnected(0, 2)


@pytest.mark.parametrize("std_dev", [-0.1, float("nan"), float("inf")])
def test_invalid_std_dev_fails_at_construction(std_dev):
    with pytest.raises(InvalidConfigurationError):
        FullyConnected(2, 2, std_dev=std_dev)


def test_unknown_activation_fails_at_construction():
    with pytest.raises(InvalidConfigurationError):
        FullyConnected(2, 2, activation="swish")


@pytest.mark.parametrize("bad", [np.ones(3), np.ones(1), np.ones((2, 1)), np.ones((1, 2))])
def test_input_shape_mismatch_fails_loudly(bad):
    layer, _, _ = _layer(2, 2)
    with pytest.raises(ShapeMismatchError):
        layer.forward_propagate(bad)


def test_error_shape_mismatch_fails_loudly():
    layer, _, _ = _layer(2, 3)
    layer.forward_propagate(np.ones(2))
    with pytest.raises(ShapeMismatchError):
        layer.backpropagate(np.ones(2))
