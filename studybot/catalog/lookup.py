"""Read access to the static curriculum.

:class:`Catalog` never raises for unknown combinations; callers receive an
empty list (or ``None`` for single lookups) and are expected to render an
explicit "nothing here yet" message instead.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .types import (
    ORIGIN_CATALOG,
    Branch,
    FileResource,
    Subject,
    normalize_material_type,
)


def _to_resource(raw: Mapping[str, Any], material_type: str) -> FileResource:
    view_url = raw.get("url") or raw.get("view_url") or ""
    return FileResource(
        id=str(raw["id"]),
        name=str(raw.get("name", "")).strip(),
        view_url=view_url,
        download_url=raw.get("download_url") or view_url,
        origin=ORIGIN_CATALOG,
        material_type=material_type,
        file_type=raw.get("type", "other"),
        size=raw.get("size", ""),
        upload_date=raw.get("upload_date", ""),
    )


class Catalog:
    """Immutable view over ``{year → semester → branch → subjects}`` and
    ``{subject → material type → files}``.

    The raw mappings are injected so tests can substitute fixtures;
    :meth:`default` loads the bundled data.
    """

    def __init__(
        self,
        branches: Iterable[Tuple[str, str]],
        branch_subjects: Mapping[int, Mapping[int, Mapping[str, Sequence[Tuple[str, str]]]]],
        subject_materials: Mapping[str, Mapping[str, Sequence[Mapping[str, Any]]]] | None = None,
    ) -> None:
        self._branches: Dict[str, Branch] = {
            bid: Branch(bid, label) for bid, label in branches
        }
        self._subjects: Dict[Tuple[int, int, str], Tuple[Subject, ...]] = {}
        self._by_code: Dict[str, Subject] = {}
        for year, semesters in branch_subjects.items():
            for semester, per_branch in semesters.items():
                for branch_id, subjects in per_branch.items():
                    seen: Dict[str, Subject] = {}
                    for code, name in subjects:
                        # duplicate rows in the source data collapse by code
                        seen.setdefault(code, Subject(code, name))
                        self._by_code.setdefault(code, seen[code])
                    self._subjects[(int(year), int(semester), branch_id)] = tuple(
                        seen.values()
                    )

        self._files: Dict[Tuple[str, str], Tuple[FileResource, ...]] = {}
        for code, per_type in (subject_materials or {}).items():
            for raw_type, entries in per_type.items():
                material_type = normalize_material_type(raw_type)
                key = (code, material_type)
                self._files[key] = self._files.get(key, ()) + tuple(
                    _to_resource(entry, material_type) for entry in entries
                )

    @classmethod
    def default(cls) -> "Catalog":
        from . import data

        return cls(data.BRANCHES, data.BRANCH_SUBJECTS, data.SUBJECT_MATERIALS)

    # ------------------------------------------------------------------
    # Hierarchy
    def years(self) -> List[int]:
        return sorted({year for year, _, _ in self._subjects})

    def semesters_for(self, year: int | None) -> List[int]:
        return sorted({sem for y, sem, _ in self._subjects if y == year})

    def branches_for(self, year: int | None, semester: int | None) -> List[Branch]:
        """Branches with at least one subject in ``(year, semester)``, in
        catalog order."""
        ids = {b for y, s, b in self._subjects if y == year and s == semester}
        return [branch for bid, branch in self._branches.items() if bid in ids]

    def subjects_for(
        self, year: int | None, semester: int | None, branch: str | None
    ) -> List[Subject]:
        return list(self._subjects.get((year, semester, branch), ()))  # type: ignore[arg-type]

    def files_for(self, subject_code: str | None, material_type: str | None) -> List[FileResource]:
        if not subject_code or not material_type:
            return []
        key = (subject_code, normalize_material_type(material_type))
        return list(self._files.get(key, ()))

    # ------------------------------------------------------------------
    # Single lookups
    def branch(self, branch_id: str | None) -> Optional[Branch]:
        return self._branches.get(branch_id or "")

    def subject(self, code: str | None) -> Optional[Subject]:
        return self._by_code.get(code or "")


__all__ = ["Catalog"]
