# main.py
# Bot entry point: wires the browse/upload handlers and the shared services

import os
import asyncio
import logging

from telegram.ext import Application, ApplicationBuilder

from studybot.catalog import Catalog
from studybot.config import BOT_TOKEN, config
from studybot.db import init_db
from studybot.storage import StorageResolver, build_store
from studybot.utils.logging import setup_logging
from .handlers import (
    CATALOG_KEY,
    RESOLVER_KEY,
    browse_handler,
    browse_callback_handler,
    upload_handler,
    my_uploads_handler,
    delete_upload_handler,
    version_handler,
)

setup_logging()
logger = logging.getLogger(__name__)


async def _post_init(app: Application) -> None:
    store = build_store(config)
    app.bot_data[CATALOG_KEY] = Catalog.default()
    app.bot_data[RESOLVER_KEY] = StorageResolver(store, config.MATERIAL_ROOT)
    logger.info(
        "services ready storage=%s bucket=%s root=%s",
        "on" if config.storage_configured else "off",
        config.STORAGE_BUCKET,
        config.MATERIAL_ROOT,
    )


async def _post_shutdown(app: Application) -> None:
    resolver = app.bot_data.get(RESOLVER_KEY)
    if resolver is not None:
        await resolver.store.aclose()


def build_application() -> Application:
    app = (
        ApplicationBuilder()
        .token(BOT_TOKEN)
        .post_init(_post_init)
        .post_shutdown(_post_shutdown)
        .build()
    )

    # private commands
    app.add_handler(browse_handler)
    app.add_handler(my_uploads_handler)
    app.add_handler(version_handler)

    # inline keyboards
    app.add_handler(delete_upload_handler)
    app.add_handler(browse_callback_handler)

    # documents sent in private chat
    app.add_handler(upload_handler)
    return app


def main():
    # selector loop policy for windows
    if os.name == "nt":
        try:
            asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
        except Exception as e:
            logging.debug("windows policy failed: %s", e)

    # make sure the main thread has an event loop (needed on python 3.12)
    try:
        loop = asyncio.get_event_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)

    loop.run_until_complete(init_db(config.DB_PATH))

    app = build_application()

    print(
        "\n".join(
            [
                "📟 bot wiring:",
                "  /start -> private",
                "  /myuploads -> private",
                "  /version -> private",
                "  documents -> private",
            ]
        )
    )
    app.run_polling()


if __name__ == "__main__":
    try:
        main()

    except KeyboardInterrupt:
        print("\nBot stopped by user")
