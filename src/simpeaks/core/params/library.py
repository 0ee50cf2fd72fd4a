"""In-process parameter library with change notification.

Holds every setting the simulation reads, typed per :mod:`simpeaks.core.params.keys`.
Each read and write is individually locked; there is no multi-field
transaction, so a frame may observe one field before and the next after a
concurrent update.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from simpeaks.core.params.keys import PARAMETERS, ParamKey
from simpeaks.core.shared.events import EventDispatcher, EventType, ParameterChangedEvent
from simpeaks.core.shared.exceptions import ParameterError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from simpeaks.core.params.keys import ParamDef, ParamKind
    from simpeaks.core.shared.events import Event

_CASTS: dict[str, type] = {"int": int, "float": float, "string": str}


class ParameterLibrary:
    """Typed key/value store with one slot per peak for addressable keys.

    Args:
        max_peaks: Length of the per-peak arrays
        definitions: Parameter definitions (defaults to all known keys)
    """

    def __init__(self, max_peaks: int = 1, definitions: Iterable[ParamDef] = PARAMETERS) -> None:
        if max_peaks < 1:
            msg = f"max_peaks must be at least 1, got {max_peaks}"
            raise ParameterError(msg)
        self.max_peaks = max_peaks
        self.events = EventDispatcher()
        self._lock = threading.RLock()
        self._defs: dict[ParamKey, ParamDef] = {}
        self._values: dict[ParamKey, list[Any]] = {}
        for definition in definitions:
            self._defs[definition.key] = definition
            slots = max_peaks if definition.per_peak else 1
            self._values[definition.key] = [definition.default] * slots

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _definition(self, key: ParamKey | str) -> ParamDef:
        try:
            return self._defs[ParamKey(key)]
        except (KeyError, ValueError):
            msg = f"Unknown parameter: {key!r}"
            raise ParameterError(msg) from None

    def _check(self, key: ParamKey | str, index: int, kind: ParamKind) -> ParamDef:
        definition = self._definition(key)
        if definition.kind != kind:
            msg = f"Parameter {definition.key.value} is {definition.kind}, not {kind}"
            raise ParameterError(msg)
        size = len(self._values[definition.key])
        if not 0 <= index < size:
            msg = f"Index {index} out of range for {definition.key.value} (size {size})"
            raise ParameterError(msg)
        return definition

    def __contains__(self, key: object) -> bool:
        try:
            return ParamKey(key) in self._defs
        except ValueError:
            return False

    def kind(self, key: ParamKey | str) -> ParamKind:
        """Value type of a parameter."""
        return self._definition(key).kind

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _get(self, key: ParamKey | str, index: int, kind: ParamKind) -> Any:
        definition = self._check(key, index, kind)
        with self._lock:
            return self._values[definition.key][index]

    def get_int(self, key: ParamKey | str, index: int = 0) -> int:
        return self._get(key, index, "int")

    def get_float(self, key: ParamKey | str, index: int = 0) -> float:
        return self._get(key, index, "float")

    def get_string(self, key: ParamKey | str, index: int = 0) -> str:
        return self._get(key, index, "string")

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _set(self, key: ParamKey | str, value: Any, index: int, kind: ParamKind) -> None:
        definition = self._check(key, index, kind)
        try:
            value = _CASTS[kind](value)
        except (TypeError, ValueError):
            msg = f"Cannot store {value!r} in {kind} parameter {definition.key.value}"
            raise ParameterError(msg) from None

        with self._lock:
            slots = self._values[definition.key]
            changed = slots[index] != value
            slots[index] = value

        # Notify outside the lock so handlers may read or write freely
        if changed:
            self.events.dispatch(
                ParameterChangedEvent(
                    EventType.PARAMETER_CHANGED, key=definition.key.value, index=index, value=value
                )
            )

    def set_int(self, key: ParamKey | str, value: int, index: int = 0) -> None:
        self._set(key, value, index, "int")

    def set_float(self, key: ParamKey | str, value: float, index: int = 0) -> None:
        self._set(key, value, index, "float")

    def set_string(self, key: ParamKey | str, value: str, index: int = 0) -> None:
        self._set(key, value, index, "string")

    def set_value(self, key: ParamKey | str, value: Any, index: int = 0) -> None:
        """Write a value through the setter matching the parameter's type."""
        self._set(key, value, index, self.kind(key))

    # ------------------------------------------------------------------
    # Notification and inspection
    # ------------------------------------------------------------------

    def subscribe(self, callback: Callable[[Event], None]) -> None:
        """Call ``callback`` with a :class:`ParameterChangedEvent` on every change."""
        self.events.subscribe(EventType.PARAMETER_CHANGED, callback)

    def unsubscribe(self, callback: Callable[[Event], None]) -> None:
        self.events.unsubscribe(EventType.PARAMETER_CHANGED, callback)

    def as_dict(self) -> dict[str, Any]:
        """Copy of all values; per-peak keys map to lists."""
        with self._lock:
            return {
                key.value: (list(values) if self._defs[key].per_peak else values[0])
                for key, values in self._values.items()
            }


__all__ = ["ParameterLibrary"]
