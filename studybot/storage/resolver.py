"""Resolve storage-backed files for a ``(subject, material_type)`` bucket.

Objects live under ``<material_root>/<subject_code>/<material_type>/``.
Listing failures never escape this module: a missing or unreachable
bucket is logged and degrades to an empty file list so the rest of the
page keeps working.
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import time
from typing import Dict, Iterable, List, Optional

from ..catalog.types import MATERIAL_TYPES, ORIGIN_STORAGE, FileResource
from ..utils.formatting import compact_code, file_display_name, file_type, human_size
from .client import ObjectMeta, StorageError

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL_ROOT = "academic"
PLACEHOLDER_NAME = ".keep"


def storage_file_id(subject_code: str, material_type: str, object_name: str) -> str:
    """Stable id derived from the logical location, not the store's own id."""
    return f"storage_{compact_code(subject_code)}_{material_type}_{object_name}"


class StorageResolver:
    def __init__(self, store, material_root: str = DEFAULT_MATERIAL_ROOT) -> None:
        self.store = store
        self.material_root = material_root.strip("/")

    def folder_for(self, subject_code: str, material_type: str) -> str:
        return f"{self.material_root}/{subject_code}/{material_type}"

    def to_resource(
        self, meta: ObjectMeta, subject_code: str, material_type: str
    ) -> FileResource:
        path = f"{self.folder_for(subject_code, material_type)}/{meta.name}"
        url = self.store.public_url(path)
        return FileResource(
            id=storage_file_id(subject_code, material_type, meta.name),
            name=file_display_name(meta.name),
            view_url=url,
            download_url=url,
            origin=ORIGIN_STORAGE,
            material_type=material_type,
            file_type=file_type(meta.name),
            size=human_size(meta.size),
            upload_date=(meta.created_at or "")[:10],
            path=path,
        )

    # ------------------------------------------------------------------
    async def list_bucket_files(
        self, subject_code: str, material_type: str
    ) -> List[FileResource]:
        folder = self.folder_for(subject_code, material_type)
        try:
            objects = await self.store.list(folder)
            return [
                self.to_resource(meta, subject_code, material_type)
                for meta in objects
                if not meta.is_placeholder
            ]
        except StorageError as exc:
            logger.error("listing %s failed: %s", folder, exc)
        except Exception:
            logger.exception("listing %s failed", folder)
        return []

    async def list_subject_files(
        self, subject_code: str, material_types: Iterable[str] = MATERIAL_TYPES
    ) -> Dict[str, List[FileResource]]:
        """Resolve every material type of a subject concurrently."""

        types = list(material_types)
        results = await asyncio.gather(
            *(self.list_bucket_files(subject_code, mt) for mt in types)
        )
        return dict(zip(types, results))

    async def upload_material(
        self,
        subject_code: str,
        material_type: str,
        filename: str,
        data: bytes,
        *,
        content_type: Optional[str] = None,
    ) -> Optional[FileResource]:
        """Upload ``data`` into the bucket folder; ``None`` when the store fails."""

        folder = self.folder_for(subject_code, material_type)
        object_name = f"{int(time.time() * 1000)}_{'_'.join(filename.split())}"
        content_type = (
            content_type
            or mimetypes.guess_type(filename)[0]
            or "application/octet-stream"
        )
        try:
            # the placeholder keeps the folder listed even after every file is removed
            await self.store.upload(
                f"{folder}/{PLACEHOLDER_NAME}", b"", content_type="text/plain", upsert=True
            )
        except StorageError as exc:
            logger.debug("placeholder for %s not written: %s", folder, exc)
        try:
            meta = await self.store.upload(
                f"{folder}/{object_name}", data, content_type=content_type
            )
        except StorageError as exc:
            logger.error("upload to %s failed: %s", folder, exc)
            return None
        meta = ObjectMeta(
            name=object_name,
            id=meta.id,
            size=meta.size or len(data),
            mimetype=content_type,
            created_at=time.strftime("%Y-%m-%d"),
        )
        return self.to_resource(meta, subject_code, material_type)

    async def delete_material(self, resource: FileResource) -> bool:
        if resource.origin != ORIGIN_STORAGE or not resource.path:
            logger.warning("refusing to delete non-storage resource %s", resource.id)
            return False
        try:
            await self.store.remove(resource.path)
        except StorageError as exc:
            logger.error("removing %s failed: %s", resource.path, exc)
            return False
        return True


async def list_bucket_files(
    store, subject_code: str, material_type: str, *, material_root: str = DEFAULT_MATERIAL_ROOT
) -> List[FileResource]:
    """Functional shortcut for :meth:`StorageResolver.list_bucket_files`."""
    return await StorageResolver(store, material_root).list_bucket_files(
        subject_code, material_type
    )


__all__ = [
    "PLACEHOLDER_NAME",
    "storage_file_id",
    "StorageResolver",
    "list_bucket_files",
]
