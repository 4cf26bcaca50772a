"""Key/value site settings with default fallback."""

import logging
from typing import Dict, Iterable, Mapping, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from blogcms.config import SiteDefaults
from blogcms.crud.base import CRUDBase
from blogcms.models.site_setting import SiteSetting

logger = logging.getLogger(__name__)


class CRUDSiteSetting(CRUDBase[SiteSetting, dict, dict]):
    """Settings repository.

    ``defaults`` is injected at construction and only consulted for keys
    that have no stored row.
    """

    entity_name = "Setting"
    unique_message = "A setting with this key already exists"

    def __init__(self, model=SiteSetting, *, defaults: Optional[Mapping[str, str]] = None):
        super().__init__(model)
        self.defaults: Dict[str, str] = dict(defaults or {})

    def _stored(self, db: Session, keys: Optional[Iterable[str]] = None) -> Dict[str, str]:
        stmt = select(SiteSetting.key, SiteSetting.value)
        if keys is not None:
            stmt = stmt.where(SiteSetting.key.in_(list(keys)))
        return {key: value for key, value in db.execute(stmt).all()}

    def initialize(self, db: Session) -> int:
        """Insert default rows for missing keys. Idempotent; returns rows inserted."""
        existing = set(db.scalars(select(SiteSetting.key)).all())
        missing = [key for key in self.defaults if key not in existing]
        if not missing:
            return 0
        for key in missing:
            db.add(SiteSetting(key=key, value=self.defaults[key]))
        self.commit(db)
        logger.info(f"[SETTINGS] Initialized {len(missing)} missing settings")
        return len(missing)

    def get_all(self, db: Session) -> Dict[str, str]:
        """Every stored setting, after filling in missing defaults."""
        self.initialize(db)
        return self._stored(db)

    def get_by_key(self, db: Session, key: str) -> Optional[str]:
        """Stored value, else default, else None."""
        stored = self._stored(db, [key])
        if key in stored:
            return stored[key]
        return self.defaults.get(key)

    def get_by_keys(self, db: Session, keys: Iterable[str]) -> Dict[str, str]:
        """A value for every key: stored, else default, else empty string."""
        keys = list(dict.fromkeys(keys))
        stored = self._stored(db, keys) if keys else {}
        return {key: stored.get(key, self.defaults.get(key, "")) for key in keys}

    def upsert(self, db: Session, key: str, value: str) -> SiteSetting:
        """Upsert a single setting."""
        setting = db.scalars(select(SiteSetting).where(SiteSetting.key == key).limit(1)).first()
        if setting is None:
            setting = SiteSetting(key=key, value=value)
        else:
            setting.value = value
        db.add(setting)
        self.commit(db, setting)
        return setting

    def update_batch(self, db: Session, settings: Mapping[str, str]) -> Dict[str, str]:
        """Upsert each pair in turn; earlier keys stay written if a later one fails."""
        updated: Dict[str, str] = {}
        for key, value in settings.items():
            setting = self.upsert(db, key, value)
            updated[key] = setting.value
        logger.info(f"[SETTINGS] Updated {len(updated)} settings")
        return updated

    def reset_to_defaults(self, db: Session) -> Dict[str, str]:
        """Drop all stored settings and write the defaults back."""
        with self.atomic(db):
            db.execute(delete(SiteSetting))
            for key, value in self.defaults.items():
                db.add(SiteSetting(key=key, value=value))
        self.commit(db)
        logger.info("[SETTINGS] Reset settings to defaults")
        return self._stored(db)


# Singleton instance
crud_site_setting = CRUDSiteSetting(SiteSetting, defaults=SiteDefaults().as_dict())
