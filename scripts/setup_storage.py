#!/usr/bin/env python3
"""Create the storage bucket and the per-subject material folders.

Run once per deployment after filling STORAGE_URL and STORAGE_KEY in .env.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from studybot.catalog import MATERIAL_TYPES, Catalog  # noqa: E402
from studybot.config import config  # noqa: E402
from studybot.storage import PLACEHOLDER_NAME, StorageError, StorageResolver, build_store  # noqa: E402
from studybot.utils.logging import setup_logging  # noqa: E402

logger = logging.getLogger("setup_storage")


def _subject_codes(catalog: Catalog) -> list[str]:
    codes: list[str] = []
    for year in catalog.years():
        for semester in catalog.semesters_for(year):
            for branch in catalog.branches_for(year, semester):
                for subject in catalog.subjects_for(year, semester, branch.id):
                    if subject.code not in codes:
                        codes.append(subject.code)
    return codes


async def main() -> int:
    if not config.storage_configured:
        logger.error("missing %s in .env", ", ".join(config.missing_storage_keys()))
        return 1

    async with build_store(config) as store:
        try:
            created = await store.ensure_bucket()
        except StorageError as exc:
            logger.error("bucket setup failed: %s", exc)
            return 1
        print(f"bucket {config.STORAGE_BUCKET}: {'created' if created else 'exists'}")

        resolver = StorageResolver(store, config.MATERIAL_ROOT)
        failures = 0
        for code in _subject_codes(Catalog.default()):
            for material_type in MATERIAL_TYPES:
                path = f"{resolver.folder_for(code, material_type)}/{PLACEHOLDER_NAME}"
                try:
                    await store.upload(path, b"", content_type="text/plain", upsert=True)
                except StorageError as exc:
                    failures += 1
                    logger.warning("could not create %s: %s", path, exc)
        print(f"folders ready, {failures} failure(s)")
    return 1 if failures else 0


if __name__ == "__main__":
    setup_logging()
    sys.exit(asyncio.run(main()))
