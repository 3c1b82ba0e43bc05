from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from ..catalog.types import FileResource


def merge_files(
    catalog_files: Iterable[FileResource], storage_files: Iterable[FileResource]
) -> List[FileResource]:
    """Combine catalog and storage files of one bucket, deduplicated by ``id``.

    Catalog entries are inserted first and storage entries second, so a
    storage entry replaces a catalog entry with the same ``id`` while
    keeping that entry's original position.  Order is the first-insertion
    order of ids; there is no secondary sort.
    """

    merged: Dict[str, FileResource] = {}
    for resource in catalog_files:
        merged[resource.id] = resource
    for resource in storage_files:
        merged[resource.id] = resource
    return list(merged.values())


def merge_subject_materials(
    catalog_map: Mapping[str, Iterable[FileResource]],
    storage_map: Mapping[str, Iterable[FileResource]],
) -> Dict[str, List[FileResource]]:
    """Apply :func:`merge_files` per material type.

    Material types appear in catalog order followed by any type only the
    storage side knows about.
    """

    result: Dict[str, List[FileResource]] = {}
    for material_type in list(catalog_map) + [t for t in storage_map if t not in catalog_map]:
        result[material_type] = merge_files(
            catalog_map.get(material_type, ()), storage_map.get(material_type, ())
        )
    return result


__all__ = ["merge_files", "merge_subject_materials"]
