"""Cascading academic selection.

The selection narrows ``year → semester → branch → subject → material_type``.
Changing a level clears every level below it, so a field below an unset
field is always unset.  The rules live in the pure :func:`transition`
function; :class:`NavigationState` binds it to ``context.user_data`` the way
the bot keeps all per-user state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple, Union

from ..catalog.types import ResourceBucket

logger = logging.getLogger(__name__)

NAV_KEY = "academic"

LEVELS: Tuple[str, ...] = ("year", "semester", "branch", "subject", "material")

# level name -> SelectionState field
LEVEL_TO_FIELD: Dict[str, str] = {
    "year": "year",
    "semester": "semester",
    "branch": "branch",
    "subject": "subject",
    "material": "material_type",
}


class SelectionInvariantError(RuntimeError):
    """A level was set while a level above it is unset."""


@dataclass(frozen=True)
class SelectionState:
    year: Optional[int] = None
    semester: Optional[int] = None
    branch: Optional[str] = None
    subject: Optional[str] = None
    material_type: Optional[str] = None

    def values(self) -> Tuple:
        return tuple(getattr(self, LEVEL_TO_FIELD[level]) for level in LEVELS)

    def is_consistent(self) -> bool:
        seen_unset = False
        for value in self.values():
            if value is None:
                seen_unset = True
            elif seen_unset:
                return False
        return True

    def clamped(self) -> "SelectionState":
        """Return the longest valid prefix of this state."""
        kept = {}
        for level, value in zip(LEVELS, self.values()):
            if value is None:
                break
            kept[LEVEL_TO_FIELD[level]] = value
        return SelectionState(**kept)

    def deepest_level(self) -> Optional[str]:
        deepest = None
        for level, value in zip(LEVELS, self.values()):
            if value is None:
                break
            deepest = level
        return deepest

    @property
    def bucket(self) -> Optional[ResourceBucket]:
        if self.subject is None or self.material_type is None:
            return None
        return ResourceBucket(self.subject, self.material_type)


@dataclass(frozen=True)
class Select:
    level: str
    value: Union[int, str]


@dataclass(frozen=True)
class Reset:
    level: Optional[str] = None


Action = Union[Select, Reset]


def _check_level(level: str) -> int:
    try:
        return LEVELS.index(level)
    except ValueError:
        raise ValueError(f"unknown selection level: {level!r}") from None


def _cleared_from(state: SelectionState, index: int) -> SelectionState:
    return replace(state, **{LEVEL_TO_FIELD[lvl]: None for lvl in LEVELS[index:]})


def transition(
    state: SelectionState, action: Action, *, strict: bool = False
) -> SelectionState:
    """Apply ``action`` to ``state`` and return the new state.

    ``Select(level, value)`` sets ``level`` and clears everything below it.
    ``Reset(level)`` clears ``level`` and everything below it; ``Reset()``
    and ``Reset("year")`` clear everything.

    Selecting a level whose parent is unset breaks the cascade.  With
    ``strict`` this raises :class:`SelectionInvariantError` and the caller
    keeps the old state; otherwise the result is clamped to its longest
    valid prefix.
    """

    if isinstance(action, Reset):
        if action.level is None:
            return SelectionState()
        return _cleared_from(state, _check_level(action.level))

    index = _check_level(action.level)
    new_state = replace(
        _cleared_from(state, index + 1), **{LEVEL_TO_FIELD[action.level]: action.value}
    )
    if new_state.is_consistent():
        return new_state
    if strict:
        raise SelectionInvariantError(
            f"cannot set {action.level} while a parent level is unset: {state}"
        )
    logger.warning("selection %s clamped after setting %s", new_state, action.level)
    return new_state.clamped()


@dataclass
class NavigationState:
    """Per-user selection stored in ``context.user_data``."""

    user_data: Dict
    strict: bool = False

    def __post_init__(self) -> None:
        current = self.user_data.get(NAV_KEY)
        if not isinstance(current, SelectionState):
            current = SelectionState()
        elif not current.is_consistent():
            current = current.clamped()
        self.user_data[NAV_KEY] = current

    # ------------------------------------------------------------------
    @property
    def state(self) -> SelectionState:
        return self.user_data[NAV_KEY]

    def dispatch(self, action: Action) -> SelectionState:
        new_state = transition(self.state, action, strict=self.strict)
        self.user_data[NAV_KEY] = new_state
        return new_state

    # ------------------------------------------------------------------
    # Setters for the hierarchy levels
    def set_year(self, year: int) -> SelectionState:
        return self.dispatch(Select("year", year))

    def set_semester(self, semester: int) -> SelectionState:
        return self.dispatch(Select("semester", semester))

    def set_branch(self, branch: str) -> SelectionState:
        return self.dispatch(Select("branch", branch))

    def set_subject(self, subject: str) -> SelectionState:
        return self.dispatch(Select("subject", subject))

    def set_material(self, material_type: str) -> SelectionState:
        return self.dispatch(Select("material", material_type))

    def reset(self, level: Optional[str] = None) -> SelectionState:
        return self.dispatch(Reset(level))

    def back_one(self) -> SelectionState:
        deepest = self.state.deepest_level()
        if deepest is None:
            return self.state
        return self.reset(deepest)


__all__ = [
    "NAV_KEY",
    "LEVELS",
    "LEVEL_TO_FIELD",
    "SelectionInvariantError",
    "SelectionState",
    "Select",
    "Reset",
    "Action",
    "transition",
    "NavigationState",
]
