"""Dispatch table for tutorial step actions.

Pages register one handler per `ActionKind` they support (open a modal,
switch a settings tab, prefill a form field...). The tutorial service hands
every newly activated step's action to ``dispatch``. Unregistered kinds are
ignored so a tour authored for a page never fails because a handler is
missing; a failing handler is logged and the tour continues.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from gui.design.onboarding_tour import ActionKind, StepAction

__all__ = ["ActionHandler", "StepActionDispatcher"]

_logger = logging.getLogger(__name__)

ActionHandler = Callable[[StepAction], None]


class StepActionDispatcher:
    def __init__(self) -> None:
        self._handlers: Dict[ActionKind, ActionHandler] = {}

    def register(
        self, kind: ActionKind, handler: ActionHandler, *, allow_override: bool = False
    ) -> None:
        if kind is ActionKind.NONE:
            raise ValueError("ActionKind.NONE cannot have a handler")
        if kind in self._handlers and not allow_override:
            raise ValueError(f"Handler already registered for {kind.value}")
        self._handlers[kind] = handler

    def unregister(self, kind: ActionKind) -> None:
        self._handlers.pop(kind, None)

    def has_handler(self, kind: ActionKind) -> bool:
        return kind in self._handlers

    def dispatch(self, action: StepAction) -> bool:
        """Run the handler for ``action``. Returns True if a handler ran cleanly."""
        if action.is_noop:
            return False
        handler = self._handlers.get(action.kind)
        if handler is None:
            _logger.debug("No handler for step action %s (%s)", action.kind.value, action.target)
            return False
        try:
            handler(action)
        except Exception:  # noqa: BLE001
            _logger.exception("Step action %s failed for %s", action.kind.value, action.target)
            return False
        return True
