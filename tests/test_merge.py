from studybot.catalog import ORIGIN_CATALOG, ORIGIN_STORAGE, Catalog, FileResource
from studybot.navigation import merge_files, merge_subject_materials


def _res(id_, origin=ORIGIN_CATALOG, name=None, material_type="labwork"):
    return FileResource(
        id=id_,
        name=name or id_,
        view_url=f"https://example.com/{id_}",
        download_url=f"https://example.com/{id_}?dl=1",
        origin=origin,
        material_type=material_type,
    )


def test_merge_is_deterministic():
    catalog = [_res("a"), _res("b")]
    storage = [_res("c", ORIGIN_STORAGE)]
    assert merge_files(catalog, storage) == merge_files(catalog, storage)


def test_storage_entry_overrides_catalog_entry_in_place():
    catalog = [_res("a"), _res("b"), _res("c")]
    storage = [_res("b", ORIGIN_STORAGE, name="fresh b"), _res("d", ORIGIN_STORAGE)]

    merged = merge_files(catalog, storage)

    assert [r.id for r in merged] == ["a", "b", "c", "d"]
    assert merged[1].origin == ORIGIN_STORAGE
    assert merged[1].name == "fresh b"


def test_merge_has_unique_ids():
    merged = merge_files([_res("a"), _res("a")], [_res("a", ORIGIN_STORAGE)])
    assert len(merged) == 1
    assert merged[0].origin == ORIGIN_STORAGE


def test_merge_empty_inputs():
    assert merge_files([], []) == []
    assert merge_files([_res("a")], []) == [_res("a")]
    assert merge_files([], [_res("s", ORIGIN_STORAGE)]) == [_res("s", ORIGIN_STORAGE)]


def test_catalog_only_labwork_for_data_structures():
    catalog = Catalog.default()
    merged = merge_files(catalog.files_for("CSA 103", "labwork"), [])
    assert [r.id for r in merged] == ["ds_labwork1", "ds_labwork2"]
    assert all(r.origin == ORIGIN_CATALOG for r in merged)


def test_merge_subject_materials_per_type():
    catalog_map = {"syllabus": [_res("s1", material_type="syllabus")], "pyq": []}
    storage_map = {
        "pyq": [_res("p1", ORIGIN_STORAGE, material_type="pyq")],
        "labwork": [_res("l1", ORIGIN_STORAGE)],
    }

    merged = merge_subject_materials(catalog_map, storage_map)

    assert list(merged) == ["syllabus", "pyq", "labwork"]
    assert [r.id for r in merged["syllabus"]] == ["s1"]
    assert [r.id for r in merged["pyq"]] == ["p1"]
    assert [r.id for r in merged["labwork"]] == ["l1"]


def test_uploaded_syllabus_is_listed_after_catalog_syllabus():
    catalog = Catalog.default().files_for("CSA 103", "syllabus")
    upload = _res("storage_CSA103_syllabus_x.pdf", ORIGIN_STORAGE, material_type="syllabus")

    merged = merge_files(catalog, [upload])

    assert len(merged) == 2
    assert [r.id for r in merged] == ["ds_syllabus", "storage_CSA103_syllabus_x.pdf"]
    assert [r.origin for r in merged] == [ORIGIN_CATALOG, ORIGIN_STORAGE]
