from __future__ import annotations

from math import ceil
from typing import List, Sequence, Tuple

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from ..catalog import FileResource
from ..config import PER_PAGE
from ..navigation.presentation import Crumb, file_label

CALLBACK_PREFIX = "acad"
# Telegram rejects callback_data longer than 64 bytes
MAX_CALLBACK_BYTES = 64


def callback(*parts: object) -> str:
    data = ":".join([CALLBACK_PREFIX, *(str(p) for p in parts)])
    if len(data.encode("utf-8")) > MAX_CALLBACK_BYTES:
        raise ValueError(f"callback data too long: {data!r}")
    return data


def _page_window(total: int, page: int, per_page: int | None) -> Tuple[int, int, int, int]:
    if per_page is None:
        per_page = PER_PAGE
    if per_page <= 0:
        per_page = total or 1
    pages = max(1, ceil(total / per_page))
    page = max(1, min(page, pages))
    start = (page - 1) * per_page
    return page, pages, start, start + per_page


def _footer(
    page: int, pages: int, crumbs: Sequence[Crumb], include_back: bool
) -> List[List[InlineKeyboardButton]]:
    rows: List[List[InlineKeyboardButton]] = []
    nav_row: List[InlineKeyboardButton] = []
    if page > 1:
        nav_row.append(InlineKeyboardButton(text="◀", callback_data=callback("page", page - 1)))
    if page < pages:
        nav_row.append(InlineKeyboardButton(text="▶", callback_data=callback("page", page + 1)))
    if nav_row:
        rows.append(nav_row)

    # the deepest crumb is the current screen, so it is not offered as a link
    trail = [
        InlineKeyboardButton(text=c.label, callback_data=callback("reset", c.level))
        for c in crumbs[:-1]
    ]
    if trail:
        rows.append(trail)

    if include_back:
        rows.append([InlineKeyboardButton(text="🔙", callback_data=callback("back"))])
    return rows


def build_choice_keyboard(
    choices: Sequence[Tuple[str, int | str, str]],
    page: int = 1,
    *,
    crumbs: Sequence[Crumb] = (),
    per_page: int | None = None,
    include_back: bool = True,
    row_width: int = 2,
    extra_rows: Sequence[Sequence[InlineKeyboardButton]] = (),
) -> InlineKeyboardMarkup:
    """Build a paginated inline keyboard selecting the next hierarchy level.

    Parameters
    ----------
    choices:
        Sequence of triples ``(level, value, label)``.
    page:
        One-based page number to render.
    crumbs:
        Breadcrumb trail; all but the last become reset buttons.
    per_page:
        Number of choices per page.  Defaults to the configured
        :data:`PER_PAGE` when ``None``.
    row_width:
        Maximum number of choice buttons in each row.
    """

    page, pages, start, end = _page_window(len(choices), page, per_page)
    if row_width <= 0:
        row_width = 1

    keyboard: List[List[InlineKeyboardButton]] = []
    row: List[InlineKeyboardButton] = []
    for idx, (level, value, label) in enumerate(choices[start:end], start=1):
        row.append(InlineKeyboardButton(text=label, callback_data=callback(level, value)))
        if idx % row_width == 0:
            keyboard.append(row)
            row = []
    if row:
        keyboard.append(row)
    keyboard.extend(list(r) for r in extra_rows)
    keyboard.extend(_footer(page, pages, crumbs, include_back))
    return InlineKeyboardMarkup(keyboard)


def build_files_keyboard(
    files: Sequence[FileResource],
    page: int = 1,
    *,
    crumbs: Sequence[Crumb] = (),
    per_page: int | None = None,
) -> InlineKeyboardMarkup:
    """One URL button per file plus refresh, pagination and navigation rows."""

    page, pages, start, end = _page_window(len(files), page, per_page)
    keyboard: List[List[InlineKeyboardButton]] = [
        [InlineKeyboardButton(text=file_label(f), url=f.download_url)]
        for f in files[start:end]
        if f.download_url
    ]
    keyboard.append([InlineKeyboardButton(text="🔄 Refresh", callback_data=callback("refresh"))])
    keyboard.extend(_footer(page, pages, crumbs, include_back=True))
    return InlineKeyboardMarkup(keyboard)


__all__ = [
    "CALLBACK_PREFIX",
    "callback",
    "build_choice_keyboard",
    "build_files_keyboard",
]
