"""
Parameter store.

Single source of truth for synthesizer parameter values. UI controls read
and write through it, the LFO engine writes through it, and the shader
bridge reads snapshots from it.
"""

import math
import numbers
from typing import Callable, Dict, List, Mapping, Optional

from fmsynth.core.config import settings
from fmsynth.core.logging import get_logger
from fmsynth.parameters.definitions import (
    PARAMETER_DEFINITIONS,
    Number,
    ParameterDefinition,
)

logger = get_logger(__name__)

Subscriber = Callable[[str, Number, Number], None]


class _Subscription:
    """Registration handle; identity distinguishes repeated callbacks."""

    __slots__ = ('callback',)

    def __init__(self, callback: Subscriber):
        self.callback = callback


class ParameterStore:
    """
    Owns all parameter state.

    Every write is clamped to the parameter's definition, so the stored
    values are valid at all times. Subscribers are notified synchronously,
    in registration order, with (key, new_value, old_value) whenever a
    write actually changes a value.
    """

    def __init__(
        self,
        initial_values: Optional[Mapping[str, Number]] = None,
        definitions: Mapping[str, ParameterDefinition] = PARAMETER_DEFINITIONS,
        max_notification_depth: Optional[int] = None
    ):
        """
        Initialize parameter store.

        Args:
            initial_values: Starting values overriding definition defaults
            definitions: Parameter definitions keyed by name
            max_notification_depth: Nesting limit for set() calls made from
                inside subscribers (defaults to settings)
        """
        self._definitions: Dict[str, ParameterDefinition] = dict(definitions)
        self._params: Dict[str, Number] = {
            name: definition.clamp(definition.default)
            for name, definition in self._definitions.items()
        }
        self._subscribers: List[_Subscription] = []
        self._notify_depth = 0
        self.max_notification_depth = (
            settings.max_notification_depth
            if max_notification_depth is None
            else max_notification_depth
        )

        for key, value in (initial_values or {}).items():
            if key not in self._definitions:
                logger.warning("unknown_initial_parameter", key=key)
                continue
            if not self._is_valid_number(value):
                logger.warning("invalid_initial_value", key=key, value=value)
                continue
            self._params[key] = self._definitions[key].clamp(value)

        logger.debug(
            "parameter_store_initialized",
            n_parameters=len(self._params)
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[Number]:
        """
        Get a parameter value.

        Args:
            key: Parameter name

        Returns:
            Current value, or None if the parameter does not exist
        """
        if key not in self._definitions:
            logger.warning("unknown_parameter", key=key, operation="get")
            return None
        return self._params[key]

    def get_all(self) -> Dict[str, Number]:
        """
        Get all parameters.

        Returns:
            Shallow copy of the parameter set, in definition order
        """
        return dict(self._params)

    def keys(self) -> List[str]:
        """Parameter names in definition order."""
        return list(self._definitions)

    def has(self, key: str) -> bool:
        """Check whether a parameter exists."""
        return key in self._definitions

    def definition(self, key: str) -> Optional[ParameterDefinition]:
        """Get the static definition of a parameter, or None."""
        return self._definitions.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    @property
    def subscriber_count(self) -> int:
        """Number of active subscriptions."""
        return len(self._subscribers)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, key: str, value: Number) -> None:
        """
        Set a parameter value with validation.

        The value is clamped to [min, max] and rounded for integer
        parameters. Subscribers are only notified if the stored value
        changes.

        Args:
            key: Parameter name
            value: Requested value
        """
        definition = self._definitions.get(key)
        if definition is None:
            logger.warning("unknown_parameter", key=key, operation="set")
            return

        if not self._is_valid_number(value):
            logger.warning("invalid_parameter_value", key=key, value=value)
            return

        new_value = definition.clamp(value)
        if new_value != value:
            logger.debug(
                "parameter_value_clamped",
                key=key,
                requested=value,
                value=new_value
            )

        old_value = self._params[key]
        if new_value == old_value:
            return

        self._params[key] = new_value

        if self._notify_depth >= self.max_notification_depth:
            logger.warning(
                "parameter_notification_suppressed",
                key=key,
                depth=self._notify_depth
            )
            return

        self._notify_depth += 1
        try:
            self._notify(key, new_value, old_value)
        finally:
            self._notify_depth -= 1

    def set_multiple(self, updates: Mapping[str, Number]) -> None:
        """
        Set several parameters, in mapping order.

        Each entry is validated independently; there is no atomicity
        across the batch.

        Args:
            updates: Parameter name -> requested value
        """
        for key, value in updates.items():
            self.set(key, value)

    def reset(self, key: str) -> None:
        """
        Reset a parameter to its default value.

        Args:
            key: Parameter name
        """
        definition = self._definitions.get(key)
        if definition is None:
            logger.warning("unknown_parameter", key=key, operation="reset")
            return
        self.set(key, definition.default)

    def reset_all(self) -> None:
        """Reset all parameters to defaults."""
        for key in self._definitions:
            self.reset(key)

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Subscribe to parameter changes.

        Args:
            callback: Called with (key, new_value, old_value)

        Returns:
            Unsubscribe function; calling it more than once is safe
        """
        subscription = _Subscription(callback)
        self._subscribers.append(subscription)

        def unsubscribe() -> None:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)

        return unsubscribe

    def _notify(self, key: str, new_value: Number, old_value: Number) -> None:
        """Notify subscribers of a parameter change."""
        # Snapshot so subscribers may (un)subscribe during delivery
        for subscription in list(self._subscribers):
            if subscription not in self._subscribers:
                continue
            try:
                subscription.callback(key, new_value, old_value)
            except Exception:
                logger.exception(
                    "parameter_subscriber_failed",
                    key=key,
                    new_value=new_value,
                    old_value=old_value
                )

    @staticmethod
    def _is_valid_number(value: object) -> bool:
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            return False
        return not math.isnan(value)
