"""Onboarding tour definition model.

Provides the immutable step / tour data types consumed by the tutorial
service, plus a registry so pages can look up the tour they own by feature.
Step side effects are expressed as tagged ``StepAction`` values instead of
closures so that a tour can be serialized, compared and tested headless.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

__all__ = [
    "Feature",
    "Placement",
    "ActionKind",
    "StepAction",
    "NO_ACTION",
    "TutorialStep",
    "TourDefinition",
    "register_tour",
    "get_tour",
    "list_tours",
    "clear_tours",
]


class Feature(str, Enum):
    """Named onboarding tours, one per application area."""

    DASHBOARD = "dashboard"
    TIMETABLE = "timetable"
    TODO = "todo"
    REMINDERS = "reminders"
    STUDY_ROOM_JOIN = "studyRoomJoin"
    STUDY_ROOM_CREATE = "studyRoomCreate"
    STUDY_ROOM_IN_ROOM = "studyRoomInRoom"
    SETTINGS = "settings"


class Placement(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"

    @property
    def opposite(self) -> "Placement":
        return _OPPOSITES[self]


_OPPOSITES = {
    Placement.TOP: Placement.BOTTOM,
    Placement.BOTTOM: Placement.TOP,
    Placement.LEFT: Placement.RIGHT,
    Placement.RIGHT: Placement.LEFT,
    Placement.CENTER: Placement.CENTER,
}


class ActionKind(str, Enum):
    NONE = "none"
    OPEN_MODAL = "open_modal"
    CLOSE_MODAL = "close_modal"
    SWITCH_TAB = "switch_tab"
    PREFILL_STATE = "prefill_state"
    CLICK = "click"


@dataclass(frozen=True)
class StepAction:
    """Side effect run when a step becomes active.

    ``target`` names the thing acted upon (modal id, tab id, state key, widget
    selector); ``value`` carries an optional payload for ``prefill_state``.
    """

    kind: ActionKind = ActionKind.NONE
    target: Optional[str] = None
    value: Any = None

    @classmethod
    def open_modal(cls, modal_id: str) -> "StepAction":
        return cls(ActionKind.OPEN_MODAL, modal_id)

    @classmethod
    def close_modal(cls, modal_id: str) -> "StepAction":
        return cls(ActionKind.CLOSE_MODAL, modal_id)

    @classmethod
    def switch_tab(cls, tab_id: str) -> "StepAction":
        return cls(ActionKind.SWITCH_TAB, tab_id)

    @classmethod
    def prefill(cls, key: str, value: Any) -> "StepAction":
        return cls(ActionKind.PREFILL_STATE, key, value)

    @classmethod
    def click(cls, selector: str) -> "StepAction":
        return cls(ActionKind.CLICK, selector)

    @property
    def is_noop(self) -> bool:
        return self.kind is ActionKind.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "target": self.target, "value": self.value}

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "StepAction":
        return cls(
            kind=ActionKind(obj.get("kind", ActionKind.NONE.value)),
            target=obj.get("target"),
            value=obj.get("value"),
        )


NO_ACTION = StepAction()


@dataclass(frozen=True)
class TutorialStep:
    title: str
    content: str
    selector: Optional[str] = None  # "#objectName" of the target widget
    placement: Placement = Placement.BOTTOM
    action: StepAction = NO_ACTION
    path: Optional[str] = None  # route the step lives on
    desktop_only: bool = False
    mobile_only: bool = False
    is_welcome: bool = False
    next_path: Optional[str] = None

    def __post_init__(self) -> None:
        if self.desktop_only and self.mobile_only:
            raise ValueError(f"Step '{self.title}' cannot be both desktop_only and mobile_only")
        # accept plain strings for placement
        if not isinstance(self.placement, Placement):
            object.__setattr__(self, "placement", Placement(self.placement))

    @property
    def is_centered(self) -> bool:
        return self.placement is Placement.CENTER or not self.selector

    def is_visible_on(self, desktop: bool) -> bool:
        if self.desktop_only and not desktop:
            return False
        if self.mobile_only and desktop:
            return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "selector": self.selector,
            "placement": self.placement.value,
            "action": self.action.to_dict(),
            "path": self.path,
            "desktop_only": self.desktop_only,
            "mobile_only": self.mobile_only,
            "is_welcome": self.is_welcome,
            "next_path": self.next_path,
        }

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "TutorialStep":
        return cls(
            title=str(obj["title"]),
            content=str(obj.get("content", "")),
            selector=obj.get("selector"),
            placement=Placement(obj.get("placement", Placement.BOTTOM.value)),
            action=StepAction.from_dict(obj.get("action") or {}),
            path=obj.get("path"),
            desktop_only=bool(obj.get("desktop_only", False)),
            mobile_only=bool(obj.get("mobile_only", False)),
            is_welcome=bool(obj.get("is_welcome", False)),
            next_path=obj.get("next_path"),
        )


@dataclass(frozen=True)
class TourDefinition:
    feature: Feature
    steps: Sequence[TutorialStep] = field(default_factory=tuple)
    description: str = ""

    def titles(self) -> List[str]:  # convenience
        return [s.title for s in self.steps]


_registry: Dict[Feature, TourDefinition] = {}


def register_tour(defn: TourDefinition) -> None:
    if defn.feature in _registry:
        raise ValueError(f"Tour already registered: {defn.feature.value}")
    if not defn.steps:
        raise ValueError(f"Tour {defn.feature.value} has no steps")
    _registry[defn.feature] = TourDefinition(
        feature=defn.feature, steps=tuple(defn.steps), description=defn.description
    )


def get_tour(feature: Feature | str) -> TourDefinition:
    return _registry[Feature(feature)]


def list_tours() -> List[TourDefinition]:
    return list(_registry.values())


def clear_tours() -> None:
    _registry.clear()
