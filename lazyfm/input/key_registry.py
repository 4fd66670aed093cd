"""Per-mode key tables mapping key tokens to controller actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """One action reachable through any of ``combos``."""

    combos: tuple[str, ...]
    handler: Callable[[], None]


class KeyComboRegistry:
    """Exact-match dispatch table for one interaction mode.

    A key may be bound once per table; :meth:`extended` derives a new table
    that may rebind keys of the base, so shared movement keys are declared
    once and reused by several modes.
    """

    def __init__(self, *bindings: KeyComboBinding) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}
        for binding in bindings:
            self._add(binding, allow_override=False)

    def _add(self, binding: KeyComboBinding, allow_override: bool) -> None:
        for combo in binding.combos:
            if not allow_override and combo in self._handlers:
                raise ValueError(f"key {combo!r} bound twice")
            self._handlers[combo] = binding.handler

    def extended(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        table = KeyComboRegistry()
        table._handlers = dict(self._handlers)
        for binding in bindings:
            table._add(binding, allow_override=True)
        return table

    def dispatch(self, key: str) -> bool:
        """Run the action bound to ``key``; ``False`` when the key is unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True
