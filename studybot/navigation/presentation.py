"""User-facing projections of the selection and of merged file lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

from ..catalog import MATERIAL_LABELS, ORIGIN_STORAGE, Catalog, FileResource
from ..utils.formatting import file_display_name, file_type
from .state import LEVEL_TO_FIELD, LEVELS, Reset, SelectionState

EMPTY_SELECTION_TEXT = "No files available for this selection."


@dataclass(frozen=True)
class Crumb:
    level: str
    label: str
    reset: Reset


def level_label(level: str, value: Any, catalog: Catalog) -> str:
    if level == "year":
        return f"Year {value}"
    if level == "semester":
        return f"Semester {value}"
    if level == "branch":
        branch = catalog.branch(value)
        return branch.display_name if branch else str(value)
    if level == "subject":
        subject = catalog.subject(value)
        return f"{value} {subject.name}" if subject else str(value)
    return MATERIAL_LABELS.get(value, str(value))


def breadcrumbs(state: SelectionState, catalog: Catalog) -> List[Crumb]:
    """Project the set levels, in hierarchy order, into clickable crumbs.

    Following a crumb dispatches ``Reset(level)`` for that crumb's level.
    """

    crumbs: List[Crumb] = []
    for level in LEVELS:
        value = getattr(state, LEVEL_TO_FIELD[level])
        if value is None:
            break
        crumbs.append(Crumb(level, level_label(level, value, catalog), Reset(level)))
    return crumbs


def path_text(crumbs: Iterable[Crumb]) -> str:
    return " / ".join(crumb.label for crumb in crumbs if crumb.label)


def group_by_material(files: Iterable[FileResource]) -> Dict[str, List[FileResource]]:
    """Group files by ``material_type`` keeping first-appearance order."""

    groups: Dict[str, List[FileResource]] = {}
    for resource in files:
        groups.setdefault(resource.material_type, []).append(resource)
    return groups


def empty_message(state: SelectionState) -> str:
    if state.subject is None:
        return EMPTY_SELECTION_TEXT
    return f"🚧 Material for {state.subject} will be updated soon!"


def file_label(resource: FileResource) -> str:
    """Button caption: ``"<name> (1.2 MB)"``."""
    if resource.size:
        return f"{resource.name} ({resource.size})"
    return resource.name


def public_files_overview(
    rows: Iterable[Mapping[str, Any]], public_url
) -> Dict[str, List[FileResource]]:
    """Turn ``user_files`` rows into resources grouped by material type.

    ``public_url`` maps a stored object path to its public URL.
    """

    resources = []
    for row in rows:
        url = public_url(row["file_path"])
        resources.append(
            FileResource(
                id=f"user_file_{row['id']}",
                name=file_display_name(row["name"]),
                view_url=url,
                download_url=url,
                origin=ORIGIN_STORAGE,
                material_type=row["material_type"],
                file_type=file_type(row["name"]),
                upload_date=(row.get("created_at") or "")[:10],
                path=row["file_path"],
            )
        )
    return group_by_material(resources)


__all__ = [
    "EMPTY_SELECTION_TEXT",
    "Crumb",
    "level_label",
    "breadcrumbs",
    "path_text",
    "group_by_material",
    "empty_message",
    "file_label",
    "public_files_overview",
]
