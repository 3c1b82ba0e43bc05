from __future__ import annotations

"""Handlers for browsing study material via inline keyboards.

Navigation flow: year → semester → branch → subject → material type.
Once a material type is picked the bucket is resolved and its files are
listed as URL buttons.
"""

from typing import List, Optional, Tuple
import time
import logging

from telegram import InlineKeyboardButton, Update
from telegram.ext import CallbackQueryHandler, CommandHandler, ContextTypes, filters

from ..catalog import MATERIAL_LABELS, MATERIAL_TYPES, Catalog
from ..db import RepoError
from ..db.user_files import list_public_files
from ..keyboards import CALLBACK_PREFIX, build_choice_keyboard, build_files_keyboard, callback
from ..navigation import LEVELS, Reset, Select, SelectionState
from ..navigation.merge import merge_subject_materials
from ..navigation.presentation import (
    breadcrumbs,
    empty_message,
    file_label,
    level_label,
    path_text,
)
from .common import APOLOGY_TEXT, get_catalog, get_resolver, get_session, show

logger = logging.getLogger(__name__)

WELCOME_TEXT = "👋 Welcome! Pick your year to browse study material:"
OUTDATED_TEXT = "This menu is outdated, showing the current one."

_PROMPTS = {
    None: "Choose your year:",
    "year": "Choose a semester:",
    "semester": "Choose your branch:",
    "branch": "Choose a subject:",
    "subject": "Choose a material type:",
}

_INT_LEVELS = {"year", "semester"}


def next_level(state: SelectionState) -> Optional[str]:
    """Level the user is asked to pick next, ``None`` once a bucket is complete."""

    deepest = state.deepest_level()
    if deepest is None:
        return LEVELS[0]
    index = LEVELS.index(deepest)
    return LEVELS[index + 1] if index + 1 < len(LEVELS) else None


def level_choices(
    state: SelectionState, catalog: Catalog
) -> List[Tuple[str, int | str, str]]:
    level = next_level(state)
    if level == "year":
        values = catalog.years()
    elif level == "semester":
        values = catalog.semesters_for(state.year)
    elif level == "branch":
        values = [b.id for b in catalog.branches_for(state.year, state.semester)]
    elif level == "subject":
        values = [
            s.code for s in catalog.subjects_for(state.year, state.semester, state.branch)
        ]
    elif level == "material":
        values = list(MATERIAL_TYPES)
    else:
        return []
    return [(level, value, level_label(level, value, catalog)) for value in values]


def _parse_value(level: str, raw: str) -> int | str:
    return int(raw) if level in _INT_LEVELS else raw


async def _render(
    update: Update,
    context: ContextTypes.DEFAULT_TYPE,
    page: int = 1,
    action: str = "selection",
    *,
    refresh: bool = False,
    notice: Optional[str] = None,
) -> None:
    """Render the current selection: a choice menu or the bucket's files."""

    session = get_session(context)
    catalog = get_catalog(context)
    state = session.state
    crumbs = breadcrumbs(state, catalog)
    header = path_text(crumbs)

    fetch_time = 0.0
    bucket = state.bucket
    if bucket is None:
        choices = level_choices(state, catalog)
        prompt = _PROMPTS.get(state.deepest_level(), "")
        extra_rows = []
        if next_level(state) == "material":
            extra_rows.append(
                [InlineKeyboardButton(text="📚 All materials", callback_data=callback("all"))]
            )
        if choices:
            text = f"{header}\n\n{prompt}" if header else prompt
        else:
            text = f"{header}\n\n{empty_message(state)}" if header else empty_message(state)
        keyboard = build_choice_keyboard(
            choices,
            page,
            crumbs=crumbs,
            include_back=state.year is not None,
            extra_rows=extra_rows,
        )
    else:
        if refresh or session.loaded_bucket != bucket:
            fetch_start = time.perf_counter()
            await session.refresh()
            fetch_time = time.perf_counter() - fetch_start
            if session.active_bucket != bucket:
                # a newer selection owns the message now
                if update.callback_query:
                    await update.callback_query.answer(notice)
                return
        files = session.files
        if files:
            body = f"{len(files)} file(s) available:"
        else:
            body = empty_message(state)
        text = f"{header}\n\n{body}"
        keyboard = build_files_keyboard(files, page, crumbs=crumbs)

    if update.callback_query:
        await update.callback_query.answer(notice)

    message_start = time.perf_counter()
    if not await show(update, text, keyboard):
        return
    message_edit_time = time.perf_counter() - message_start

    logger.info(
        "%s path='%s' fetch_time=%.3fms message_edit_time=%.3fms",
        action,
        header,
        fetch_time * 1000,
        message_edit_time * 1000,
    )


async def _render_all(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Show every material type of the selected subject at once."""

    session = get_session(context)
    catalog = get_catalog(context)
    state = session.state
    subject = state.subject
    if subject is None:
        await _render(update, context)
        return

    fetch_start = time.perf_counter()
    storage_map = await get_resolver(context).list_subject_files(subject)
    try:
        uploads = await list_public_files(subject)
    except RepoError:
        logger.exception("listing public uploads of %s failed", subject)
        uploads = []
    fetch_time = time.perf_counter() - fetch_start
    if session.state.subject != subject:
        if update.callback_query:
            await update.callback_query.answer()
        return

    catalog_map = {mt: catalog.files_for(subject, mt) for mt in MATERIAL_TYPES}
    groups = merge_subject_materials(catalog_map, storage_map)

    crumbs = breadcrumbs(state, catalog)
    lines = [path_text(crumbs), ""]
    buttons: List[List[InlineKeyboardButton]] = []
    for material_type in MATERIAL_TYPES:
        files = groups.get(material_type) or []
        if not files:
            continue
        label = MATERIAL_LABELS[material_type]
        lines.append(f"{label}: {len(files)}")
        buttons.extend(
            [InlineKeyboardButton(text=f"{label} · {file_label(f)}", url=f.download_url)]
            for f in files
            if f.download_url
        )
    if not buttons:
        lines.append(empty_message(state))
    if uploads:
        lines.append(f"👥 Student uploads: {len(uploads)}")

    keyboard = build_choice_keyboard([], crumbs=crumbs, extra_rows=buttons)
    if update.callback_query:
        await update.callback_query.answer()
    await show(update, "\n".join(lines), keyboard)
    logger.info(
        "all path='%s' files=%d fetch_time=%.3fms",
        path_text(crumbs),
        sum(len(v) for v in groups.values()),
        fetch_time * 1000,
    )


async def browse_start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Start browsing from the year menu."""

    get_session(context).dispatch(Reset())
    try:
        await update.effective_message.reply_text(WELCOME_TEXT)
        await _render(update, context, 1, action="start")
    except Exception:
        await update.effective_message.reply_text(APOLOGY_TEXT)
        logger.exception("browse_start failed")


async def browse_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    data = query.data or ""
    _prefix, _, rest = data.partition(":")
    cmd, _, arg = rest.partition(":")
    session = get_session(context)

    try:
        if cmd in LEVELS:
            if next_level(session.state) != cmd:
                await _render(update, context, 1, action="outdated", notice=OUTDATED_TEXT)
                return
            session.dispatch(Select(cmd, _parse_value(cmd, arg)))
            await _render(update, context, 1, action="push")
        elif cmd == "reset":
            session.dispatch(Reset(arg or None))
            await _render(update, context, 1, action="reset")
        elif cmd == "back":
            session.back_one()
            await _render(update, context, 1, action="back")
        elif cmd == "page":
            await _render(update, context, int(arg), action="page")
        elif cmd == "refresh":
            await _render(update, context, 1, action="refresh", refresh=True)
        elif cmd == "all":
            await _render_all(update, context)
        else:
            await query.answer()
    except Exception:
        await query.message.reply_text(APOLOGY_TEXT)
        logger.exception("Error handling callback %r", data)


browse_handler = CommandHandler("start", browse_start, filters.ChatType.PRIVATE)
browse_callback_handler = CallbackQueryHandler(browse_callback, pattern=f"^{CALLBACK_PREFIX}:")

__all__ = [
    "browse_start",
    "browse_callback",
    "browse_handler",
    "browse_callback_handler",
    "level_choices",
    "next_level",
]
