"""
Tests for the site settings repository.
Run: pytest test_site_settings.py
"""

from sqlalchemy import select

from blogcms.config import SiteDefaults
from blogcms.crud import crud_site_setting
from blogcms.crud.site_setting import CRUDSiteSetting
from blogcms.models import SiteSetting


def _rows(db):
    return {row.key: row.value for row in db.scalars(select(SiteSetting)).all()}


def test_unknown_key_returns_empty_string(db):
    assert crud_site_setting.get_by_keys(db, ["nonexistent_key"]) == {"nonexistent_key": ""}


def test_missing_key_falls_back_to_default(db):
    values = crud_site_setting.get_by_keys(db, ["site_title", "footer_text"])
    defaults = SiteDefaults()
    assert values == {"site_title": defaults.site_title, "footer_text": defaults.footer_text}
    # Reading never writes
    assert _rows(db) == {}


def test_stored_value_wins_over_default(db):
    crud_site_setting.upsert(db, "site_title", "My Blog")
    assert crud_site_setting.get_by_keys(db, ["site_title"]) == {"site_title": "My Blog"}
    assert crud_site_setting.get_by_key(db, "site_title") == "My Blog"


def test_get_by_key_unknown_is_none(db):
    assert crud_site_setting.get_by_key(db, "nope") is None


def test_initialize_is_idempotent(db):
    inserted = crud_site_setting.initialize(db)
    assert inserted == len(SiteDefaults().as_dict())
    crud_site_setting.upsert(db, "site_title", "Custom")

    assert crud_site_setting.initialize(db) == 0
    rows = _rows(db)
    assert len(rows) == inserted
    assert rows["site_title"] == "Custom"


def test_initialize_only_fills_missing_keys(db):
    crud_site_setting.upsert(db, "contact_email", "me@example.com")
    inserted = crud_site_setting.initialize(db)
    assert inserted == len(SiteDefaults().as_dict()) - 1
    assert _rows(db)["contact_email"] == "me@example.com"


def test_get_all_returns_every_default(db):
    values = crud_site_setting.get_all(db)
    assert set(values) == set(SiteDefaults().as_dict())


def test_update_batch_upserts(db):
    crud_site_setting.upsert(db, "site_title", "Old")
    updated = crud_site_setting.update_batch(db, {"site_title": "New", "custom_key": "42"})

    assert updated == {"site_title": "New", "custom_key": "42"}
    rows = _rows(db)
    assert rows["site_title"] == "New"
    assert rows["custom_key"] == "42"


def test_reset_to_defaults(db):
    crud_site_setting.update_batch(db, {"site_title": "Changed", "extra": "x"})

    values = crud_site_setting.reset_to_defaults(db)

    assert values == SiteDefaults().as_dict()
    assert "extra" not in _rows(db)


def test_injected_defaults(db):
    repo = CRUDSiteSetting(SiteSetting, defaults={"theme": "dark"})

    assert repo.get_by_keys(db, ["theme", "site_title"]) == {"theme": "dark", "site_title": ""}
    assert repo.initialize(db) == 1
    assert _rows(db) == {"theme": "dark"}


def test_footer_links_default_is_json():
    import json

    links = json.loads(SiteDefaults().footer_links)
    assert isinstance(links, list)
