from .state import (
    LEVELS,
    NAV_KEY,
    NavigationState,
    SelectionInvariantError,
    SelectionState,
    Select,
    Reset,
    transition,
)
from .merge import merge_files, merge_subject_materials
from .session import ResourceSession

__all__ = [
    "LEVELS",
    "NAV_KEY",
    "NavigationState",
    "SelectionInvariantError",
    "SelectionState",
    "Select",
    "Reset",
    "transition",
    "merge_files",
    "merge_subject_materials",
    "ResourceSession",
]
