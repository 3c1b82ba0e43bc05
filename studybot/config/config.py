# studybot/config/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List

from dotenv import load_dotenv
from ..db.base import DEFAULT_DB_PATH
from .constants import (
    ENV_FILE,
    DEFAULT_BUCKET,
    DEFAULT_MATERIAL_ROOT,
    DEFAULT_MAX_UPLOAD_MB,
    DEFAULT_PER_PAGE,
    DEFAULT_STORAGE_RETRIES,
    DEFAULT_STORAGE_TIMEOUT,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    # required to run the bot
    BOT_TOKEN: str

    # storage (both missing -> degraded mode)
    STORAGE_URL: Optional[str]
    STORAGE_KEY: Optional[str]
    STORAGE_BUCKET: str
    MATERIAL_ROOT: str
    STORAGE_TIMEOUT: float
    STORAGE_RETRIES: int

    # optional
    DB_PATH: str
    VERSION: str
    START_TIME: datetime
    PER_PAGE: int
    MAX_UPLOAD_MB: int
    STRICT_SELECTION: bool

    @property
    def storage_configured(self) -> bool:
        return bool(self.STORAGE_URL and self.STORAGE_KEY)

    def missing_storage_keys(self) -> List[str]:
        missing = []
        if not self.STORAGE_URL:
            missing.append("STORAGE_URL")
        if not self.STORAGE_KEY:
            missing.append("STORAGE_KEY")
        return missing

    @staticmethod
    def _to_int(key: str, *, required: bool = False) -> Optional[int]:
        val = os.getenv(key)
        if val is None or not str(val).strip():
            if required:
                raise RuntimeError(f"{key} is missing in .env")
            return None
        try:
            return int(str(val).strip())
        except ValueError as e:
            raise RuntimeError(f"{key} must be an integer, got: {val!r}") from e

    @staticmethod
    def _to_float(key: str, default: float) -> float:
        val = os.getenv(key)
        if val is None or not str(val).strip():
            return default
        try:
            return float(str(val).strip())
        except ValueError as e:
            raise RuntimeError(f"{key} must be a number, got: {val!r}") from e

    @staticmethod
    def _to_bool(key: str) -> bool:
        val = os.getenv(key, "").strip().lower()
        return val in {"1", "true", "yes", "on"}

    @staticmethod
    def _to_str(key: str) -> Optional[str]:
        val = os.getenv(key)
        if val is None or not val.strip():
            return None
        return val.strip()

    @classmethod
    def from_env(cls) -> "Config":
        # load .env once
        load_dotenv(ENV_FILE)

        bot_token = os.getenv("BOT_TOKEN")
        if not bot_token:
            raise RuntimeError("BOT_TOKEN is missing in .env")

        storage_url = cls._to_str("STORAGE_URL")
        if storage_url:
            storage_url = storage_url.rstrip("/")
        storage_key = cls._to_str("STORAGE_KEY")

        retries = cls._to_int("STORAGE_RETRIES")
        config = cls(
            BOT_TOKEN=bot_token,
            STORAGE_URL=storage_url,
            STORAGE_KEY=storage_key,
            STORAGE_BUCKET=cls._to_str("STORAGE_BUCKET") or DEFAULT_BUCKET,
            MATERIAL_ROOT=(cls._to_str("MATERIAL_ROOT") or DEFAULT_MATERIAL_ROOT).strip("/"),
            STORAGE_TIMEOUT=cls._to_float("STORAGE_TIMEOUT", DEFAULT_STORAGE_TIMEOUT),
            STORAGE_RETRIES=DEFAULT_STORAGE_RETRIES if retries is None else max(1, retries),
            DB_PATH=cls._to_str("DB_PATH") or DEFAULT_DB_PATH,
            VERSION=os.getenv("COMMIT_SHA", "dev"),
            START_TIME=datetime.now(),
            PER_PAGE=cls._to_int("PER_PAGE") or DEFAULT_PER_PAGE,
            MAX_UPLOAD_MB=cls._to_int("MAX_UPLOAD_MB") or DEFAULT_MAX_UPLOAD_MB,
            STRICT_SELECTION=cls._to_bool("STRICT_SELECTION"),
        )

        if not config.storage_configured:
            logger.warning(
                "storage disabled, missing %s; file listings will be empty",
                ", ".join(config.missing_storage_keys()),
            )
        return config
