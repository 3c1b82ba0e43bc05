"""Repository helpers for the ``user_files`` table.

Every upload made through the bot is recorded here next to its object path
in the blob store, so files can be listed per subject without walking the
whole bucket.
"""
from __future__ import annotations

from typing import List, Optional

from . import RepoConstraintError, RepoNotFound, connect, translate_errors
from ..catalog.types import MATERIAL_TYPES

_FIELDS = (
    "id",
    "user_id",
    "subject_code",
    "material_type",
    "name",
    "file_path",
    "size",
    "is_public",
    "created_at",
)
_COLUMNS = ", ".join(_FIELDS)


def _row_to_dict(row) -> dict | None:
    if row is None:
        return None
    data = dict(zip(_FIELDS, tuple(row)))
    data["is_public"] = bool(data["is_public"])
    return data


@translate_errors
async def insert_user_file(
    user_id: int,
    subject_code: str,
    material_type: str,
    name: str,
    file_path: str,
    *,
    size: int | None = None,
    is_public: bool = True,
) -> int:
    """Record an uploaded file and return its id.

    Raises:
        RepoConstraintError: unknown material type or duplicate ``file_path``.
    """

    if material_type not in MATERIAL_TYPES:
        raise RepoConstraintError(f"unknown material type: {material_type!r}")

    async with connect() as db:
        cur = await db.execute(
            """INSERT INTO user_files (
                    user_id, subject_code, material_type, name, file_path, size, is_public
                ) VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (user_id, subject_code, material_type, name, file_path, size, int(is_public)),
        )
        await db.commit()
        return cur.lastrowid


@translate_errors
async def get_user_file(file_id: int) -> Optional[dict]:
    async with connect() as db:
        cur = await db.execute(
            f"SELECT {_COLUMNS} FROM user_files WHERE id = ?", (file_id,)
        )
        return _row_to_dict(await cur.fetchone())


@translate_errors
async def list_public_files(
    subject_code: str, material_type: str | None = None
) -> List[dict]:
    """Public uploads for a subject, oldest first."""

    sql = f"SELECT {_COLUMNS} FROM user_files WHERE subject_code = ? AND is_public = 1"
    params: list = [subject_code]
    if material_type is not None:
        sql += " AND material_type = ?"
        params.append(material_type)
    sql += " ORDER BY created_at, id"
    async with connect() as db:
        cur = await db.execute(sql, params)
        return [_row_to_dict(row) for row in await cur.fetchall()]


@translate_errors
async def list_user_uploads(user_id: int) -> List[dict]:
    async with connect() as db:
        cur = await db.execute(
            f"SELECT {_COLUMNS} FROM user_files WHERE user_id = ? ORDER BY id DESC",
            (user_id,),
        )
        return [_row_to_dict(row) for row in await cur.fetchall()]


@translate_errors
async def delete_user_file(file_id: int) -> dict:
    """Delete a row and return it.

    Raises:
        RepoNotFound: no row with ``file_id``.
    """

    async with connect() as db:
        cur = await db.execute(
            f"SELECT {_COLUMNS} FROM user_files WHERE id = ?", (file_id,)
        )
        row = _row_to_dict(await cur.fetchone())
        if row is None:
            raise RepoNotFound(f"user file {file_id} not found")
        await db.execute("DELETE FROM user_files WHERE id = ?", (file_id,))
        await db.commit()
        return row


__all__ = [
    "insert_user_file",
    "get_user_file",
    "list_public_files",
    "list_user_uploads",
    "delete_user_file",
]
