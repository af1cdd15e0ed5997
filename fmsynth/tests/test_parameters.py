"""
Tests for parameter definitions and the parameter store.
"""

import math
from unittest.mock import MagicMock, call

import numpy as np
import pytest

from fmsynth.core.exceptions import ParameterDefinitionError
from fmsynth.parameters import (
    PARAMETER_DEFINITIONS,
    STARTUP_VALUES,
    ParameterDefinition,
    ParameterStore,
    build_definitions,
)


EXPECTED_CATALOG = {
    'carrierFreqX': (0.1, 10, 2.0, False),
    'carrierFreqY': (0.1, 10, 2.0, False),
    'modulatorFreq': (0.1, 10, 1.0, False),
    'modulationIndex': (0, 5, 2.0, False),
    'amplitudeModulationIndex': (0, 5, 1.0, False),
    'modulationCenterX': (-1, 1, 0.0, False),
    'modulationCenterY': (-1, 1, 0.0, False),
    'speedLevel': (1, 5, 1, True),
    'intensityLevel': (1, 5, 3, True),
    'lfoFrequency': (0, 10, 0.1, False),
    'lfoAmplitude': (0, 10, 0.5, False),
}

PROBE_VALUES = [-1e9, -3.0, -1.0, -0.5, 0.0, 0.05, 0.49, 0.5, 1.5, 2.5, 3.7, 4.5, 9.99, 10.0, 42.0, 1e9,
                math.inf, -math.inf]


class TestParameterDefinition:
    """Test parameter definitions."""

    def test_catalog_matches_contract(self):
        """Test the definitions table matches the UI contract."""
        assert list(PARAMETER_DEFINITIONS) == list(EXPECTED_CATALOG)
        for name, (lo, hi, default, is_integer) in EXPECTED_CATALOG.items():
            definition = PARAMETER_DEFINITIONS[name]
            assert definition.name == name
            assert definition.min == lo
            assert definition.max == hi
            assert definition.default == default
            assert definition.is_integer == is_integer

    def test_startup_values_are_valid(self):
        """Test startup values cover every parameter and are in range."""
        assert set(STARTUP_VALUES) == set(PARAMETER_DEFINITIONS)
        for name, value in STARTUP_VALUES.items():
            assert PARAMETER_DEFINITIONS[name].contains(value)

    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ParameterDefinitionError):
            ParameterDefinition('bad', 5, 1, 3)

    def test_default_out_of_range_rejected(self):
        with pytest.raises(ParameterDefinitionError):
            ParameterDefinition('bad', 0, 1, 2)

    def test_fractional_integer_default_rejected(self):
        with pytest.raises(ParameterDefinitionError):
            ParameterDefinition('bad', 0, 5, 2.5, is_integer=True)

    def test_non_finite_bound_rejected(self):
        with pytest.raises(ParameterDefinitionError):
            ParameterDefinition('bad', 0, math.inf, 1)

    def test_duplicate_names_rejected(self):
        with pytest.raises(ParameterDefinitionError):
            build_definitions([
                ParameterDefinition('a', 0, 1, 0.5),
                ParameterDefinition('a', 0, 2, 0.5),
            ])

    def test_clamp(self):
        """Test clamping and half-up integer rounding."""
        speed = PARAMETER_DEFINITIONS['speedLevel']
        assert speed.clamp(11) == 5
        assert speed.clamp(-3) == 1
        assert speed.clamp(2.5) == 3
        assert speed.clamp(2.49) == 2
        assert isinstance(speed.clamp(3.2), int)

        center = PARAMETER_DEFINITIONS['modulationCenterX']
        assert center.clamp(1.7) == 1.0
        assert center.clamp(-0.25) == -0.25
        assert isinstance(center.clamp(0), float)


class TestParameterStore:
    """Test parameter store behaviour."""

    @pytest.fixture
    def store(self):
        return ParameterStore()

    @pytest.fixture
    def subscriber(self, store):
        callback = MagicMock()
        store.subscribe(callback)
        return callback

    def test_initial_values_are_defaults(self, store):
        """Test a store without initial values starts at defaults."""
        for name, definition in PARAMETER_DEFINITIONS.items():
            assert store.get(name) == definition.default

    def test_initial_values_override_and_clamp(self):
        """Test initial values are clamped and unknown keys ignored."""
        store = ParameterStore({'carrierFreqX': 0.5, 'speedLevel': 9, 'bogus': 1.0})

        assert store.get('carrierFreqX') == 0.5
        assert store.get('speedLevel') == 5
        assert 'bogus' not in store
        assert len(store) == len(PARAMETER_DEFINITIONS)

    def test_speed_level_clamps_to_max(self):
        """Test store initialized with speedLevel=1 clamps 1+10 to 5."""
        store = ParameterStore({'speedLevel': 1})
        store.set('speedLevel', 1 + 10)
        assert store.get('speedLevel') == 5

    @pytest.mark.parametrize('name', list(EXPECTED_CATALOG))
    def test_clamping_property(self, store, name):
        """Test every write lands inside the parameter's bounds."""
        definition = PARAMETER_DEFINITIONS[name]
        for value in PROBE_VALUES:
            store.set(name, value)
            result = store.get(name)
            assert definition.min <= result <= definition.max
            if definition.is_integer:
                assert result == int(result)
                assert isinstance(result, int)

    def test_numpy_values_accepted(self, store):
        """Test numpy scalars are stored as plain Python numbers."""
        store.set('modulationIndex', np.float64(3.25))
        store.set('intensityLevel', np.int64(4))

        assert store.get('modulationIndex') == 3.25
        assert type(store.get('modulationIndex')) is float
        assert store.get('intensityLevel') == 4
        assert type(store.get('intensityLevel')) is int

    def test_same_value_does_not_notify(self, store, subscriber):
        """Test writing the current value triggers no notification."""
        for name in store.keys():
            store.set(name, store.get(name))
        subscriber.assert_not_called()

    def test_rounded_to_same_value_does_not_notify(self, store, subscriber):
        """Test an integer write that rounds to the current value is a no-op."""
        store.set('speedLevel', 1.2)
        subscriber.assert_not_called()

    def test_change_notification_contract(self, store, subscriber):
        """Test a change notifies once with (key, clamped, previous)."""
        store.set('modulationIndex', 10)

        subscriber.assert_called_once_with('modulationIndex', 5.0, 2.0)
        assert store.get('modulationIndex') == 5.0

    def test_every_subscriber_notified_in_order(self, store):
        """Test subscribers are called in registration order."""
        order = []
        store.subscribe(lambda key, new, old: order.append('first'))
        store.subscribe(lambda key, new, old: order.append('second'))

        store.set('carrierFreqY', 3.0)

        assert order == ['first', 'second']

    def test_unsubscribe(self, store):
        """Test an unsubscribed callback receives nothing further."""
        callback = MagicMock()
        unsubscribe = store.subscribe(callback)

        store.set('carrierFreqX', 3.0)
        unsubscribe()
        store.set('carrierFreqX', 4.0)

        callback.assert_called_once_with('carrierFreqX', 3.0, 2.0)
        assert store.subscriber_count == 0

    def test_unsubscribe_is_idempotent(self, store):
        """Test calling unsubscribe twice only removes one registration."""
        callback = MagicMock()
        unsubscribe_a = store.subscribe(callback)
        store.subscribe(callback)

        unsubscribe_a()
        unsubscribe_a()
        assert store.subscriber_count == 1

        store.set('carrierFreqX', 3.0)
        callback.assert_called_once()

    def test_unsubscribe_during_delivery(self, store):
        """Test a subscriber removed mid-delivery is not called that round."""
        late = MagicMock()
        handles = {}

        def early(key, new, old):
            handles['late']()

        store.subscribe(early)
        handles['late'] = store.subscribe(late)

        store.set('carrierFreqX', 3.0)

        late.assert_not_called()

    def test_unknown_key(self, store, subscriber):
        """Test unknown keys fail softly."""
        before = store.get_all()

        assert store.get('carrierFreqZ') is None
        store.set('carrierFreqZ', 1.0)
        store.reset('carrierFreqZ')

        assert store.get_all() == before
        subscriber.assert_not_called()

    @pytest.mark.parametrize('value', ['abc', None, True, math.nan, [1.0]])
    def test_invalid_value_rejected(self, store, subscriber, value):
        """Test non-numeric and NaN writes leave state untouched."""
        store.set('carrierFreqX', value)

        assert store.get('carrierFreqX') == 2.0
        subscriber.assert_not_called()

    def test_get_all_returns_copy(self, store):
        """Test mutating a snapshot does not affect the store."""
        snapshot = store.get_all()
        snapshot['carrierFreqX'] = 999
        snapshot['extra'] = 1
        del snapshot['speedLevel']

        assert store.get('carrierFreqX') == 2.0
        assert 'extra' not in store.get_all()
        assert store.get('speedLevel') == 1
        assert list(store.get_all()) == list(PARAMETER_DEFINITIONS)

    def test_set_multiple(self, store, subscriber):
        """Test batch writes apply in mapping order with independent clamping."""
        store.set_multiple({
            'carrierFreqX': 3.0,
            'speedLevel': 99,
            'unknown': 5.0,
            'modulationCenterY': -0.5,
        })

        assert subscriber.call_args_list == [
            call('carrierFreqX', 3.0, 2.0),
            call('speedLevel', 5, 1),
            call('modulationCenterY', -0.5, 0.0),
        ]

    def test_reset(self, store, subscriber):
        """Test reset restores the default through the normal set path."""
        store.set('lfoAmplitude', 7.0)
        subscriber.reset_mock()

        store.reset('lfoAmplitude')

        assert store.get('lfoAmplitude') == 0.5
        subscriber.assert_called_once_with('lfoAmplitude', 0.5, 7.0)

    def test_reset_all(self):
        """Test reset_all only notifies parameters that differ from defaults."""
        store = ParameterStore(STARTUP_VALUES)
        callback = MagicMock()
        store.subscribe(callback)

        store.reset_all()

        for name, definition in PARAMETER_DEFINITIONS.items():
            assert store.get(name) == definition.default
        changed = [c.args[0] for c in callback.call_args_list]
        assert changed == [
            'carrierFreqX',
            'carrierFreqY',
            'modulatorFreq',
            'modulationIndex',
        ]

    def test_subscriber_failure_is_isolated(self, store):
        """Test one failing subscriber does not block the others."""
        failing = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        store.subscribe(failing)
        store.subscribe(healthy)

        store.set('modulatorFreq', 4.0)

        failing.assert_called_once()
        healthy.assert_called_once_with('modulatorFreq', 4.0, 1.0)
        assert store.get('modulatorFreq') == 4.0

    def test_reentrant_set_is_bounded(self):
        """Test a subscriber that keeps writing its own key cannot recurse forever."""
        store = ParameterStore(max_notification_depth=5)
        calls = []

        def feedback(key, new, old):
            calls.append(new)
            store.set(key, new + 0.01)

        store.subscribe(feedback)
        store.set('carrierFreqX', 3.0)

        assert len(calls) == 5
        assert store.get('carrierFreqX') == pytest.approx(3.05)

    def test_reentrant_set_on_other_key(self, store):
        """Test a subscriber can derive one parameter from another."""
        def follow(key, new, old):
            if key == 'carrierFreqX':
                store.set('carrierFreqY', new)

        store.subscribe(follow)
        store.set('carrierFreqX', 6.0)

        assert store.get('carrierFreqY') == 6.0

    def test_definition_lookup(self, store):
        assert store.definition('speedLevel').is_integer
        assert store.definition('nope') is None
        assert store.has('lfoFrequency')
        assert not store.has('nope')
