import pytest

from agency_cms import store
from agency_cms.application.home.fetch_home_page import fetch_home_page
from agency_cms.application.home.save_home_page import save_home_page
from agency_cms.domain import edit_state as es
from agency_cms.domain.errors import Unauthenticated, UploadError, WriteError
from agency_cms.domain.invariants.exceptions import InvariantViolation
from agency_cms.domain.session import ANONYMOUS
from agency_cms.models.hero_image import HeroImage
from agency_cms.models.home_content import HomeContent
from agency_cms.models.home_stat import HomeStat


class FakeUpload:
    def __init__(self, url="https://cdn.test/uploaded.png"):
        self.url = url
        self.calls = []

    def __call__(self, file, *, session):
        self.calls.append(file)
        return self.url


def _without_ids(items):
    return [{k: v for k, v in item.items() if k != "id"} for item in items]


def _sample_state(session):
    state = es.from_view_model(fetch_home_page(session=session))
    state = es.set_content_field(state, "hero_title", "We build brands")
    state = es.set_content_field(state, "cta_title", "Let's talk")
    state = es.add_hero_image(state, url="https://cdn.test/one.png")
    state = es.add_hero_image(state, url="https://cdn.test/two.png")
    state = es.add_stat(state, number="10+", label="Years", icon="Award")
    state = es.add_stat(state, number="250", label="Clients", icon="Users")
    state = es.add_service_preview(
        state, title="Branding", description="Logos", image_url="https://cdn.test/b.png"
    )
    return state


def test_round_trip_matches_next_fetch(app, session):
    state = _sample_state(session)

    save_home_page(state=state, session=session)
    view = fetch_home_page(session=session)

    assert view["content"]["hero_title"] == "We build brands"
    assert [i["image_url"] for i in view["hero_images"]] == [
        "https://cdn.test/one.png",
        "https://cdn.test/two.png",
    ]
    assert [i["display_order"] for i in view["hero_images"]] == [1, 2]
    assert [(s["number"], s["label"], s["icon"]) for s in view["stats"]] == [
        ("10+", "Years", "Award"),
        ("250", "Clients", "Users"),
    ]
    assert view["services_preview"][0]["image"] == {"url": "https://cdn.test/b.png"}


def test_saving_twice_is_idempotent(app, session):
    state = _sample_state(session)

    first = save_home_page(state=state, session=session)
    second = save_home_page(state=state, session=session)

    assert first["content"] == second["content"]
    for name in ("hero_images", "stats", "services_preview"):
        assert _without_ids(first[name]) == _without_ids(second[name])
    assert HeroImage.query.count() == 2
    assert HomeStat.query.count() == 2


def test_resaving_fetched_state_updates_rows_in_place(app, session):
    saved = save_home_page(state=_sample_state(session), session=session)
    ids_before = [i["id"] for i in saved["hero_images"]]

    state = es.from_view_model(saved)
    state = es.set_hero_image_value(state, state.hero_images[1].key, "https://cdn.test/new.png")
    resaved = save_home_page(state=state, session=session)

    assert [i["id"] for i in resaved["hero_images"]] == ids_before
    assert resaved["hero_images"][1]["image_url"] == "https://cdn.test/new.png"


def test_reordering_recomputes_display_order(app, session):
    saved = save_home_page(state=_sample_state(session), session=session)
    state = es.from_view_model(saved)
    first, second = state.stats
    state = es.HomeEditState(
        content=state.content,
        hero_images=state.hero_images,
        stats=(second, first),
        services_preview=state.services_preview,
    )

    resaved = save_home_page(state=state, session=session)

    assert [(s["label"], s["display_order"]) for s in resaved["stats"]] == [
        ("Clients", 1),
        ("Years", 2),
    ]


def test_empty_lists_clear_collections(app, session):
    saved = save_home_page(state=_sample_state(session), session=session)

    state = es.from_view_model(saved)
    state = es.HomeEditState(content=state.content)
    save_home_page(state=state, session=session)
    view = fetch_home_page(session=session)

    assert view["hero_images"] == []
    assert view["stats"] == []
    assert view["services_preview"] == []
    assert view["content"]["hero_title"] == "We build brands"


def test_pending_hero_file_is_uploaded_once(app, session, upload_file):
    upload = FakeUpload("https://cdn.test/hero-upload.png")
    state = es.from_view_model(fetch_home_page(session=session))
    state = es.add_hero_image(state)
    key = state.hero_images[0].key
    state = es.set_hero_image_type(state, key, "file")
    state = es.set_hero_image_value(state, key, upload_file())

    save_home_page(state=state, session=session, upload=upload)

    assert len(upload.calls) == 1
    rows = HeroImage.query.all()
    assert len(rows) == 1
    assert rows[0].image_url == "https://cdn.test/hero-upload.png"
    assert rows[0].display_order == 1


def test_pending_files_upload_sequentially_in_list_order(app, session, upload_file):
    upload = FakeUpload()
    state = es.empty_state()
    state = es.add_hero_image(state)
    state = es.add_service_preview(state, title="Web")
    hero_key = state.hero_images[0].key
    service_key = state.services_preview[0].key
    hero_file = upload_file("hero.png")
    service_file = upload_file("service.png")
    state = es.set_hero_image_type(state, hero_key, "file")
    state = es.set_hero_image_value(state, hero_key, hero_file)
    state = es.set_service_image_type(state, service_key, "file")
    state = es.set_service_image_value(state, service_key, service_file)

    save_home_page(state=state, session=session, upload=upload)

    assert upload.calls == [hero_file, service_file]


def test_save_without_session_fails_before_any_write(app, monkeypatch):
    calls = []
    for name in ("delete_all", "delete_row", "insert_rows", "update_row", "insert_content", "update_content"):
        monkeypatch.setattr(store, name, lambda *a, _name=name, **kw: calls.append(_name))
    upload = FakeUpload()

    state = es.add_stat(es.add_hero_image(es.empty_state(), url="x.png"), number="1", label="One")

    with pytest.raises(Unauthenticated):
        save_home_page(state=state, session=ANONYMOUS, upload=upload)

    assert calls == []
    assert upload.calls == []


def test_failed_upload_aborts_save(app, session, upload_file):
    save_home_page(state=_sample_state(session), session=session)

    def failing_upload(file, *, session):
        raise UploadError("bucket unavailable")

    state = es.from_view_model(fetch_home_page(session=session))
    state = es.set_content_field(state, "hero_title", "Changed")
    state = es.add_hero_image(state)
    key = state.hero_images[-1].key
    state = es.set_hero_image_type(state, key, "file")
    state = es.set_hero_image_value(state, key, upload_file())

    with pytest.raises(UploadError):
        save_home_page(state=state, session=session, upload=failing_upload)

    view = fetch_home_page(session=session)
    assert view["content"]["hero_title"] == "We build brands"
    assert len(view["hero_images"]) == 2


def test_write_failure_rolls_back_every_collection(app, session, monkeypatch):
    save_home_page(state=_sample_state(session), session=session)
    original_insert = store.insert_rows

    def insert_rows(collection, rows, *, session):
        if collection == "services_preview":
            raise WriteError("insert rejected")
        return original_insert(collection, rows, session=session)

    monkeypatch.setattr(store, "insert_rows", insert_rows)

    state = es.HomeEditState(content=fetch_home_page(session=session)["content"])
    state = es.add_hero_image(state, url="https://cdn.test/replacement.png")
    state = es.add_service_preview(state, title="New")

    with pytest.raises(WriteError):
        save_home_page(state=state, session=session)

    monkeypatch.undo()
    view = fetch_home_page(session=session)
    assert [i["image_url"] for i in view["hero_images"]] == [
        "https://cdn.test/one.png",
        "https://cdn.test/two.png",
    ]
    assert len(view["stats"]) == 2
    assert [s["title"] for s in view["services_preview"]] == ["Branding"]


def test_unknown_stat_icon_is_rejected_before_upload(app, session, upload_file):
    upload = FakeUpload()
    state = es.add_stat(es.empty_state(), number="1", label="One", icon="Unicorn")
    state = es.add_hero_image(state)
    key = state.hero_images[0].key
    state = es.set_hero_image_type(state, key, "file")
    state = es.set_hero_image_value(state, key, upload_file())

    with pytest.raises(InvariantViolation):
        save_home_page(state=state, session=session, upload=upload)

    assert upload.calls == []


def test_content_without_id_is_inserted(app, session):
    state = es.set_content_field(es.empty_state(), "cta_subtitle", "Call us")

    view = save_home_page(state=state, session=session)

    assert view["content"]["id"]
    assert view["content"]["cta_subtitle"] == "Call us"


def test_content_without_id_updates_existing_row(app, session):
    existing_id = fetch_home_page(session=session)["content"]["id"]
    state = es.set_content_field(es.empty_state(), "hero_title", "New title")

    view = save_home_page(state=state, session=session)

    assert HomeContent.query.count() == 1
    assert view["content"]["id"] == existing_id
    assert view["content"]["hero_title"] == "New title"
    assert fetch_home_page(session=ANONYMOUS)["content"]["hero_title"] == "New title"
