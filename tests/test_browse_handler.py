import os
import asyncio
import logging
from importlib import import_module
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

os.environ.setdefault("BOT_TOKEN", "test")

from studybot.catalog import ORIGIN_STORAGE, Catalog, FileResource
from studybot.db import RepoError, user_files
from studybot.handlers import CATALOG_KEY, RESOLVER_KEY
from studybot.navigation import SelectionState
from studybot.navigation.session import SESSION_KEY


class DummyMessage:
    def __init__(self):
        self.sent = []
        self.text = None
        self.reply_markup = None

    async def reply_text(self, text, reply_markup=None):
        self.sent.append((text, reply_markup))

    async def edit_message_text(self, text, reply_markup=None):
        self.sent.append((text, reply_markup))


class DummyQuery:
    def __init__(self, data, message):
        self.data = data
        self.message = message
        self.answer = AsyncMock()

    async def edit_message_text(self, text, reply_markup=None):
        await self.message.edit_message_text(text, reply_markup)


class FakeResolver:
    def __init__(self, files=None, error=None):
        self.files = files or {}
        self.error = error
        self.calls = []

    async def list_bucket_files(self, subject_code, material_type):
        self.calls.append((subject_code, material_type))
        if self.error:
            raise self.error
        return list(self.files.get((subject_code, material_type), []))

    async def list_subject_files(self, subject_code, material_types=None):
        return {
            mt: list(files)
            for (code, mt), files in self.files.items()
            if code == subject_code
        }


def _uploaded(name):
    return FileResource(
        id=f"storage_CSA103_labwork_{name}",
        name=name,
        view_url=f"https://cdn.example/{name}",
        download_url=f"https://cdn.example/{name}",
        origin=ORIGIN_STORAGE,
        material_type="labwork",
        size="1 KB",
    )


@pytest.fixture
def browse():
    return import_module("studybot.handlers.browse")


@pytest.fixture
def context():
    resolver = FakeResolver({("CSA 103", "labwork"): [_uploaded("exp-9.pdf")]})
    return SimpleNamespace(
        user_data={},
        bot_data={CATALOG_KEY: Catalog.default(), RESOLVER_KEY: resolver},
    )


def _click(browse, context, data):
    message = DummyMessage()
    query = DummyQuery(data, message)
    update = SimpleNamespace(callback_query=query, effective_user=None, effective_message=message)
    asyncio.run(browse.browse_callback(update, context))
    return query, message


def _callbacks(markup):
    return [b.callback_data for row in markup.inline_keyboard for b in row if b.callback_data]


def _state(context):
    return context.user_data[SESSION_KEY].state


def test_start_shows_year_menu(browse, context):
    message = DummyMessage()
    update = SimpleNamespace(callback_query=None, effective_user=None, effective_message=message)

    asyncio.run(browse.browse_start(update, context))

    assert message.sent[0][0] == browse.WELCOME_TEXT
    text, markup = message.sent[-1]
    assert text == "Choose your year:"
    assert _callbacks(markup) == ["acad:year:1", "acad:year:2", "acad:year:3", "acad:year:4"]


def test_full_selection_lists_merged_files(browse, context, caplog):
    for data in ("acad:year:1", "acad:semester:2", "acad:branch:cse"):
        _click(browse, context, data)

    _, message = _click(browse, context, "acad:subject:CSA 103")
    text, markup = message.sent[-1]
    assert text.endswith("Choose a material type:")
    assert "acad:material:labwork" in _callbacks(markup)
    assert "acad:all" in _callbacks(markup)

    with caplog.at_level(logging.INFO):
        query, message = _click(browse, context, "acad:material:labwork")

    assert _state(context) == SelectionState(1, 2, "cse", "CSA 103", "labwork")
    text, markup = message.sent[-1]
    assert text.startswith("Year 1 / Semester 2 / CSE / CSA 103")
    urls = [b.url for row in markup.inline_keyboard for b in row if b.url]
    assert len(urls) == 3
    assert urls[-1] == "https://cdn.example/exp-9.pdf"
    assert "acad:refresh" in _callbacks(markup)
    query.answer.assert_awaited()
    assert any("fetch_time=" in r.message for r in caplog.records)


def test_paging_reuses_loaded_files(browse, context):
    for data in (
        "acad:year:1",
        "acad:semester:2",
        "acad:branch:cse",
        "acad:subject:CSA 103",
        "acad:material:labwork",
    ):
        _click(browse, context, data)
    resolver = context.bot_data[RESOLVER_KEY]
    assert len(resolver.calls) == 1

    _click(browse, context, "acad:page:1")
    assert len(resolver.calls) == 1

    _click(browse, context, "acad:refresh")
    assert len(resolver.calls) == 2


def test_empty_bucket_shows_placeholder_message(browse, context):
    for data in ("acad:year:1", "acad:semester:2", "acad:branch:cse", "acad:subject:CSA 104"):
        _click(browse, context, data)
    _, message = _click(browse, context, "acad:material:pyq")
    text, _ = message.sent[-1]
    assert text.endswith("🚧 Material for CSA 104 will be updated soon!")


def test_outdated_button_keeps_selection(browse, context):
    _click(browse, context, "acad:year:2")
    query, message = _click(browse, context, "acad:subject:CSA 103")

    assert _state(context) == SelectionState(year=2)
    query.answer.assert_awaited_once_with(browse.OUTDATED_TEXT)
    assert message.sent[-1][0].endswith("Choose a semester:")


def test_back_and_reset(browse, context):
    for data in ("acad:year:1", "acad:semester:2", "acad:branch:cse"):
        _click(browse, context, data)

    _click(browse, context, "acad:back")
    assert _state(context) == SelectionState(1, 2)

    _click(browse, context, "acad:reset:semester")
    assert _state(context) == SelectionState(year=1)

    _click(browse, context, "acad:reset:year")
    assert _state(context) == SelectionState()


def test_all_materials_view(browse, context, repo_db):
    asyncio.run(
        user_files.insert_user_file(7, "CSA 103", "labwork", "exp-9.pdf", "academic/CSA 103/labwork/exp-9.pdf")
    )
    asyncio.run(
        user_files.insert_user_file(8, "CSA 103", "pyq", "old.pdf", "academic/CSA 103/pyq/old.pdf", is_public=False)
    )
    for data in ("acad:year:1", "acad:semester:2", "acad:branch:cse", "acad:subject:CSA 103"):
        _click(browse, context, data)

    _, message = _click(browse, context, "acad:all")

    text, markup = message.sent[-1]
    assert "Syllabus: 1" in text
    assert "Lab Work: 3" in text
    assert text.splitlines()[-1] == "👥 Student uploads: 1"
    labels = [b.text for row in markup.inline_keyboard for b in row if b.url]
    assert labels[0].startswith("Syllabus · ")
    assert len(labels) == 7


def test_all_materials_view_without_upload_table(browse, context, monkeypatch, caplog):
    monkeypatch.setattr(browse, "list_public_files", AsyncMock(side_effect=RepoError("no such table")))
    for data in ("acad:year:1", "acad:semester:2", "acad:branch:cse", "acad:subject:CSA 103"):
        _click(browse, context, data)

    with caplog.at_level(logging.ERROR):
        _, message = _click(browse, context, "acad:all")

    text, _ = message.sent[-1]
    assert "Lab Work: 3" in text
    assert "Student uploads" not in text
    assert any("listing public uploads of CSA 103 failed" in r.message for r in caplog.records)


def test_back_from_files_drops_loaded_listing(browse, context):
    for data in (
        "acad:year:1",
        "acad:semester:2",
        "acad:branch:cse",
        "acad:subject:CSA 103",
        "acad:material:labwork",
    ):
        _click(browse, context, data)
    session = context.user_data[SESSION_KEY]
    assert len(session.files) == 3

    _, message = _click(browse, context, "acad:back")

    assert _state(context) == SelectionState(1, 2, "cse", "CSA 103")
    assert session.files == []
    assert session.loaded_bucket is None
    assert message.sent[-1][0].endswith("Choose a material type:")


def test_errors_are_reported_to_user(browse, context, caplog):
    context.bot_data[RESOLVER_KEY] = FakeResolver(error=RuntimeError("boom"))
    for data in ("acad:year:1", "acad:semester:2", "acad:branch:cse", "acad:subject:CSA 103"):
        _click(browse, context, data)

    with caplog.at_level(logging.ERROR):
        _, message = _click(browse, context, "acad:material:labwork")

    assert message.sent[-1][0] == browse.APOLOGY_TEXT
    assert any("Error handling callback" in r.message for r in caplog.records)


def test_next_level(browse):
    assert browse.next_level(SelectionState()) == "year"
    assert browse.next_level(SelectionState(1, 2, "cse")) == "subject"
    assert browse.next_level(SelectionState(1, 2, "cse", "CSA 103", "pyq")) is None
