import os
import aiosqlite

DEFAULT_DB_PATH = "database/studybot.db"
DB_PATH = DEFAULT_DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS user_files (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL,
    subject_code TEXT NOT NULL,
    material_type TEXT NOT NULL CHECK(material_type IN (
        'syllabus','assignments','practicals','labwork','pyq'
    )),
    name TEXT NOT NULL,
    file_path TEXT NOT NULL UNIQUE,
    size INTEGER,
    is_public INTEGER NOT NULL DEFAULT 1,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE INDEX IF NOT EXISTS idx_user_files_subject
    ON user_files(subject_code, is_public);
CREATE INDEX IF NOT EXISTS idx_user_files_user
    ON user_files(user_id);
"""


async def init_db(path: str | None = None) -> None:
    """Ensure the database folder exists and create the schema."""
    global DB_PATH
    if path:
        DB_PATH = path
    folder = os.path.dirname(DB_PATH)
    if folder:
        os.makedirs(folder, exist_ok=True)
    async with aiosqlite.connect(DB_PATH) as db:
        await db.executescript(SCHEMA)
        await db.commit()
