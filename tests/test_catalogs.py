"""
Tests for the activation and mutation catalogs.
"""

from dataclasses import replace

import pytest

from tracenet import (
    MOD_ACTIVATION,
    MOD_BIAS,
    MUTATIONS,
    Activation,
    MutationMethod,
    get_activation,
    is_known,
    list_activations,
    list_mutations,
)


class TestActivationCatalog:
    """Tests for activation lookups and math."""

    def test_logistic_values(self):
        assert Activation.LOGISTIC.apply(0.0) == pytest.approx(0.5)
        assert Activation.LOGISTIC.derivative(0.0) == pytest.approx(0.25)

    def test_callable_with_derivate_flag(self):
        fn = Activation.TANH
        assert fn(0.5) == pytest.approx(fn.apply(0.5))
        assert fn(0.5, derivate=True) == pytest.approx(fn.derivative(0.5))

    def test_piecewise_functions(self):
        assert Activation.RELU.apply(-2.0) == 0.0
        assert Activation.RELU.apply(2.0) == 2.0
        assert Activation.STEP.apply(0.1) == 1.0
        assert Activation.BIPOLAR.apply(-0.1) == -1.0
        assert Activation.HARD_TANH.apply(3.0) == 1.0
        assert Activation.INVERSE.apply(0.25) == 0.75
        assert Activation.ABSOLUTE.apply(-0.5) == 0.5

    def test_returns_python_floats(self):
        for fn in Activation:
            assert type(fn.apply(0.3)) is float
            assert type(fn.derivative(0.3)) is float

    @pytest.mark.parametrize("fn", list(Activation))
    @pytest.mark.parametrize("x", [0.3, -0.7])
    def test_derivative_matches_finite_difference(self, fn, x):
        h = 1e-6
        numeric = (fn.apply(x + h) - fn.apply(x - h)) / (2 * h)
        assert fn.derivative(x) == pytest.approx(numeric, rel=1e-4, abs=1e-6)

    def test_name_round_trip(self):
        for fn in Activation:
            assert get_activation(fn.name) is fn
        assert set(list_activations()) == {fn.name for fn in Activation}

    def test_unknown_name(self):
        with pytest.raises(KeyError, match="Unknown activation"):
            get_activation("SWISH")


class TestMutationCatalog:
    """Tests for mutation method records."""

    def test_catalog_contents(self):
        assert set(list_mutations()) == {"MOD_ACTIVATION", "MOD_BIAS"}
        assert MUTATIONS["MOD_BIAS"] is MOD_BIAS
        assert MOD_BIAS.min == -1.0 and MOD_BIAS.max == 1.0
        assert set(MOD_ACTIVATION.allowed) == set(Activation)

    def test_membership_by_name(self):
        assert is_known(MOD_BIAS)
        assert is_known(replace(MOD_BIAS, min=-0.1, max=0.1))
        assert not is_known(MutationMethod(name="ADD_NODE"))
        assert not is_known(None)

    def test_records_are_frozen(self):
        with pytest.raises(AttributeError):
            MOD_BIAS.min = 0.0
