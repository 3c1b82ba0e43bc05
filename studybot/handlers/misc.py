from telegram import Update
from telegram.ext import CommandHandler, ContextTypes, filters

from ..config import START_TIME, VERSION, config


async def version(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    storage = "enabled" if config.storage_configured else "disabled"
    text = (
        f"Version: {VERSION}\n"
        f"Started: {START_TIME.strftime('%Y-%m-%d %H:%M:%S')}\n"
        f"File storage: {storage}"
    )
    await update.message.reply_text(text)


version_handler = CommandHandler("version", version, filters.ChatType.PRIVATE)

__all__ = ["version_handler"]
