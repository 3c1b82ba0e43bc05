"""Value types shared by the catalog, the storage resolver and the merge engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Optional

ORIGIN_CATALOG = "catalog"
ORIGIN_STORAGE = "storage"

# Closed set, in display order
MATERIAL_TYPES = ("syllabus", "assignments", "practicals", "labwork", "pyq")

MATERIAL_LABELS = {
    "syllabus": "Syllabus",
    "assignments": "Assignments",
    "practicals": "Practicals",
    "labwork": "Lab Work",
    "pyq": "PYQ",
}


def normalize_material_type(value: str) -> str:
    """Map legacy spellings (``"Syllabus"``) onto the canonical lowercase id."""
    return (value or "").strip().lower()


@dataclass(frozen=True)
class Branch:
    id: str
    display_name: str


@dataclass(frozen=True)
class Subject:
    code: str
    name: str


@dataclass(frozen=True)
class FileResource:
    """A downloadable file inside one ``(subject, material_type)`` bucket.

    ``id`` is the dedup key used by :func:`studybot.navigation.merge.merge_files`.
    ``path`` is the object path in the blob store and is only set for
    storage-backed entries.
    """

    id: str
    name: str
    view_url: str
    download_url: str
    origin: str
    material_type: str = ""
    file_type: str = "other"
    size: str = ""
    upload_date: str = ""
    path: Optional[str] = None


class ResourceBucket(NamedTuple):
    subject_code: str
    material_type: str


__all__ = [
    "ORIGIN_CATALOG",
    "ORIGIN_STORAGE",
    "MATERIAL_TYPES",
    "MATERIAL_LABELS",
    "normalize_material_type",
    "Branch",
    "Subject",
    "FileResource",
    "ResourceBucket",
]
