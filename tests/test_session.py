import asyncio

from studybot.catalog import ORIGIN_STORAGE, Catalog, FileResource
from studybot.navigation import Reset, Select, SelectionState
from studybot.navigation.session import SESSION_KEY, ResourceSession
from studybot.storage import DisabledStore, StorageResolver


def _storage(id_, material_type="labwork"):
    return FileResource(
        id=id_,
        name=id_,
        view_url=f"https://cdn.example/{id_}",
        download_url=f"https://cdn.example/{id_}",
        origin=ORIGIN_STORAGE,
        material_type=material_type,
    )


class ScriptedResolver:
    """Each listing waits for its own event and returns the scripted result."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.events = []
        self.calls = []

    async def list_bucket_files(self, subject_code, material_type):
        event = asyncio.Event()
        self.events.append(event)
        self.calls.append((subject_code, material_type))
        index = len(self.events) - 1
        await event.wait()
        return self.responses[index]


class InstantResolver:
    def __init__(self, files):
        self.files = files

    async def list_bucket_files(self, subject_code, material_type):
        return list(self.files)


def _select_bucket(session, material="labwork"):
    for action in (
        Select("year", 1),
        Select("semester", 2),
        Select("branch", "cse"),
        Select("subject", "CSA 103"),
        Select("material", material),
    ):
        session.dispatch(action)


def test_session_is_stored_in_user_data():
    user_data = {}
    resolver = InstantResolver([])
    session = ResourceSession.for_user(user_data, Catalog.default(), resolver)
    assert user_data[SESSION_KEY] is session
    assert ResourceSession.for_user(user_data, Catalog.default(), resolver) is session


def test_refresh_merges_catalog_then_storage():
    session = ResourceSession.for_user({}, Catalog.default(), InstantResolver([_storage("s1")]))
    _select_bucket(session)

    files = asyncio.run(session.refresh())

    assert [f.id for f in files] == ["ds_labwork1", "ds_labwork2", "s1"]
    assert session.loaded_bucket == ("CSA 103", "labwork")


def test_refresh_without_bucket_clears_files():
    session = ResourceSession.for_user({}, Catalog.default(), InstantResolver([_storage("s1")]))
    session.dispatch(Select("year", 1))
    assert asyncio.run(session.refresh()) == []
    assert session.loaded_bucket is None


def test_degraded_storage_keeps_selection_and_catalog_files():
    resolver = StorageResolver(DisabledStore())
    session = ResourceSession.for_user({}, Catalog.default(), resolver)
    _select_bucket(session)
    before = session.state

    files = asyncio.run(session.refresh())

    assert session.state == before
    assert [f.id for f in files] == ["ds_labwork1", "ds_labwork2"]


def test_response_for_previous_bucket_is_dropped():
    resolver = ScriptedResolver([_storage("old")], [_storage("new", "pyq")])
    session = ResourceSession.for_user({}, Catalog.default(), resolver)
    _select_bucket(session, "labwork")

    async def run():
        stale = asyncio.create_task(session.refresh())
        await asyncio.sleep(0)
        session.dispatch(Select("material", "pyq"))
        fresh = asyncio.create_task(session.refresh())
        await asyncio.sleep(0)

        resolver.events[1].set()
        await fresh
        resolver.events[0].set()
        await stale

    asyncio.run(run())

    assert resolver.calls == [("CSA 103", "labwork"), ("CSA 103", "pyq")]
    assert session.loaded_bucket == ("CSA 103", "pyq")
    assert [f.id for f in session.files] == ["ds_pyq1", "new"]


def test_late_response_after_selection_change_is_not_applied():
    resolver = ScriptedResolver([_storage("old")])
    session = ResourceSession.for_user({}, Catalog.default(), resolver)
    _select_bucket(session, "labwork")

    async def run():
        task = asyncio.create_task(session.refresh())
        await asyncio.sleep(0)
        session.dispatch(Reset("subject"))
        resolver.events[0].set()
        return await task

    result = asyncio.run(run())

    assert result == []
    assert session.files == []
    assert session.loaded_bucket is None
    assert session.state == SelectionState(1, 2, "cse")


def test_older_refresh_of_same_bucket_does_not_overwrite_newer():
    resolver = ScriptedResolver([_storage("first")], [_storage("second")])
    session = ResourceSession.for_user({}, Catalog.default(), resolver)
    _select_bucket(session)

    async def run():
        older = asyncio.create_task(session.refresh())
        await asyncio.sleep(0)
        newer = asyncio.create_task(session.refresh())
        await asyncio.sleep(0)
        resolver.events[1].set()
        await newer
        resolver.events[0].set()
        return await older

    result = asyncio.run(run())

    assert [f.id for f in result] == ["ds_labwork1", "ds_labwork2", "second"]
    assert [f.id for f in session.files] == ["ds_labwork1", "ds_labwork2", "second"]


def test_dispatch_bumps_generation_only_on_bucket_change():
    session = ResourceSession.for_user({}, Catalog.default(), InstantResolver([]))
    session.dispatch(Select("year", 1))
    assert session.generation == 0
    _select_bucket(session)
    generation = session.generation
    assert generation > 0
    session.dispatch(Select("material", "pyq"))
    assert session.generation == generation + 1


def test_back_one_while_listing_is_in_flight():
    resolver = ScriptedResolver([_storage("late")])
    session = ResourceSession.for_user({}, Catalog.default(), resolver)
    _select_bucket(session)

    async def run():
        task = asyncio.create_task(session.refresh())
        await asyncio.sleep(0)
        generation = session.generation
        session.back_one()
        assert session.generation == generation + 1
        resolver.events[0].set()
        return await task

    assert asyncio.run(run()) == []
    assert session.state == SelectionState(1, 2, "cse", "CSA 103")
    assert session.loaded_bucket is None


def test_back_one_without_selection_is_a_no_op():
    session = ResourceSession.for_user({}, Catalog.default(), InstantResolver([]))
    assert session.back_one() == SelectionState()
    assert session.generation == 0
