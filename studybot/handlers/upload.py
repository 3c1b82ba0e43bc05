"""Uploads sent to the bot in private chat and the ``/myuploads`` listing."""

from __future__ import annotations

import logging
from typing import List

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import (
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from ..catalog import MATERIAL_LABELS, ORIGIN_STORAGE, FileResource
from ..config import config
from ..db import RepoError, RepoNotFound
from ..db.user_files import (
    delete_user_file,
    get_user_file,
    insert_user_file,
    list_user_uploads,
)
from ..keyboards import build_files_keyboard
from ..navigation.presentation import breadcrumbs, file_label, public_files_overview
from .common import APOLOGY_TEXT, get_catalog, get_resolver, get_session

logger = logging.getLogger(__name__)

UPLOAD_PREFIX = "upl"

NO_BUCKET_TEXT = (
    "Pick a subject and a material type with /start first, then send the file again."
)
TOO_LARGE_TEXT = "That file is larger than {limit} MB and cannot be uploaded."
UPLOAD_FAILED_TEXT = "The upload failed. File storage may be unavailable right now."
DELETE_FAILED_TEXT = "Could not delete the file, try again later."
NO_UPLOADS_TEXT = "You have not uploaded any files yet."


async def upload_document(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Store a document in the bucket the user is currently viewing."""

    message = update.effective_message
    user = update.effective_user
    document = message.document if message else None
    if not document or not user:
        return

    session = get_session(context)
    bucket = session.active_bucket
    if bucket is None:
        await message.reply_text(NO_BUCKET_TEXT)
        return

    limit = config.MAX_UPLOAD_MB * 1024 * 1024
    if document.file_size and document.file_size > limit:
        await message.reply_text(TOO_LARGE_TEXT.format(limit=config.MAX_UPLOAD_MB))
        return

    filename = document.file_name or f"{document.file_unique_id}.bin"
    try:
        tg_file = await document.get_file()
        data = bytes(await tg_file.download_as_bytearray())
    except Exception:
        await message.reply_text(APOLOGY_TEXT)
        logger.exception("downloading %s from Telegram failed", filename)
        return

    resource = await get_resolver(context).upload_material(
        bucket.subject_code,
        bucket.material_type,
        filename,
        data,
        content_type=document.mime_type,
    )
    if resource is None:
        await message.reply_text(UPLOAD_FAILED_TEXT)
        return

    try:
        await insert_user_file(
            user.id,
            bucket.subject_code,
            bucket.material_type,
            filename,
            resource.path,
            size=len(data),
        )
    except RepoError:
        # the object is already in storage and will still be listed
        logger.exception("recording upload %s failed", resource.path)

    logger.info(
        "upload user=%s bucket=%s/%s path='%s' size=%d",
        user.id,
        bucket.subject_code,
        bucket.material_type,
        resource.path,
        len(data),
    )
    files = await session.refresh()
    crumbs = breadcrumbs(session.state, get_catalog(context))
    await message.reply_text(
        f"✅ Uploaded {resource.name}",
        reply_markup=build_files_keyboard(files, crumbs=crumbs),
    )


def _uploads_keyboard(groups) -> InlineKeyboardMarkup:
    rows: List[List[InlineKeyboardButton]] = []
    for files in groups.values():
        for resource in files:
            row_id = resource.id.rsplit("_", 1)[-1]
            row = []
            if resource.download_url:
                row.append(
                    InlineKeyboardButton(text=file_label(resource), url=resource.download_url)
                )
            row.append(
                InlineKeyboardButton(
                    text=f"🗑 {resource.name}" if not row else "🗑",
                    callback_data=f"{UPLOAD_PREFIX}:del:{row_id}",
                )
            )
            rows.append(row)
    return InlineKeyboardMarkup(rows)


async def my_uploads(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    user = update.effective_user
    if not user:
        return
    try:
        rows = await list_user_uploads(user.id)
    except RepoError:
        await update.effective_message.reply_text(APOLOGY_TEXT)
        logger.exception("listing uploads of %s failed", user.id)
        return

    groups = public_files_overview(rows, get_resolver(context).store.public_url)
    if not groups:
        await update.effective_message.reply_text(NO_UPLOADS_TEXT)
        return

    lines = ["📤 Your uploads:"]
    for material_type, files in groups.items():
        lines.append(f"{MATERIAL_LABELS.get(material_type, material_type)}: {len(files)}")
    await update.effective_message.reply_text(
        "\n".join(lines), reply_markup=_uploads_keyboard(groups)
    )


async def delete_upload_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Remove one of the caller's own uploads from storage and the table."""

    query = update.callback_query
    parts = (query.data or "").split(":")
    try:
        file_id = int(parts[2])
    except (IndexError, ValueError):
        await query.answer()
        return

    try:
        row = await get_user_file(file_id)
    except RepoError:
        await query.answer(APOLOGY_TEXT)
        logger.exception("loading upload %s failed", file_id)
        return
    if row is None or row["user_id"] != query.from_user.id:
        await query.answer("File not found.")
        return

    resource = FileResource(
        id=f"user_file_{row['id']}",
        name=row["name"],
        view_url="",
        download_url="",
        origin=ORIGIN_STORAGE,
        material_type=row["material_type"],
        path=row["file_path"],
    )
    if not await get_resolver(context).delete_material(resource):
        await query.answer(DELETE_FAILED_TEXT)
        return
    try:
        await delete_user_file(file_id)
    except RepoNotFound:
        logger.debug("user file %s already gone", file_id)

    logger.info("delete user=%s path='%s'", query.from_user.id, row["file_path"])
    session = get_session(context)
    if session.active_bucket == (row["subject_code"], row["material_type"]):
        await session.refresh()
    await query.answer("Deleted.")
    await query.edit_message_text(f"🗑 Deleted {row['name']}")


upload_handler = MessageHandler(
    filters.Document.ALL & filters.ChatType.PRIVATE, upload_document
)
my_uploads_handler = CommandHandler("myuploads", my_uploads, filters.ChatType.PRIVATE)
delete_upload_handler = CallbackQueryHandler(
    delete_upload_callback, pattern=f"^{UPLOAD_PREFIX}:del:"
)

__all__ = [
    "upload_document",
    "my_uploads",
    "delete_upload_callback",
    "upload_handler",
    "my_uploads_handler",
    "delete_upload_handler",
]
