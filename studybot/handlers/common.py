"""Helpers shared by the handler modules."""

from __future__ import annotations

import logging

from telegram import InlineKeyboardMarkup, Update
from telegram.error import BadRequest
from telegram.ext import ContextTypes

from ..catalog import Catalog
from ..config import config
from ..navigation import ResourceSession
from ..storage import StorageResolver

logger = logging.getLogger(__name__)

CATALOG_KEY = "catalog"
RESOLVER_KEY = "resolver"

APOLOGY_TEXT = "Sorry, something went wrong. Please try again later."


def get_catalog(context: ContextTypes.DEFAULT_TYPE) -> Catalog:
    catalog = context.bot_data.get(CATALOG_KEY)
    if catalog is None:
        catalog = context.bot_data[CATALOG_KEY] = Catalog.default()
    return catalog


def get_resolver(context: ContextTypes.DEFAULT_TYPE) -> StorageResolver:
    return context.bot_data[RESOLVER_KEY]


def get_session(context: ContextTypes.DEFAULT_TYPE) -> ResourceSession:
    return ResourceSession.for_user(
        context.user_data,
        get_catalog(context),
        get_resolver(context),
        strict=config.STRICT_SELECTION,
    )


async def show(
    update: Update, text: str, keyboard: InlineKeyboardMarkup | None = None
) -> bool:
    """Edit the callback message in place, or reply when there is none.

    Returns ``False`` when Telegram reported the message as unchanged.
    """

    query = update.callback_query
    if query:
        current = query.message
        if current and current.text == text and current.reply_markup == keyboard:
            return False
        try:
            await query.edit_message_text(text, reply_markup=keyboard)
        except BadRequest as err:
            if "Message is not modified" not in err.message:
                raise
            return False
    else:
        await update.effective_message.reply_text(text, reply_markup=keyboard)
    return True


__all__ = [
    "CATALOG_KEY",
    "RESOLVER_KEY",
    "APOLOGY_TEXT",
    "get_catalog",
    "get_resolver",
    "get_session",
    "show",
]
