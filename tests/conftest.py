import asyncio
from pathlib import Path
import sys
import os

import pytest

# Ensure repository root is on the import path so ``studybot`` package is found
sys.path.append(str(Path(__file__).resolve().parent.parent))

# Provide dummy environment variables required by studybot.config when importing
os.environ.setdefault("BOT_TOKEN", "test")
os.environ.setdefault("STORAGE_URL", "")
os.environ.setdefault("STORAGE_KEY", "")

from studybot.db import base


@pytest.fixture()
def repo_db(tmp_path, monkeypatch):
    """Create a temporary sqlite database with the ``user_files`` schema."""
    db_path = tmp_path / "test.db"
    monkeypatch.setattr(base, "DB_PATH", str(db_path))
    asyncio.run(base.init_db(str(db_path)))
    return str(db_path)


