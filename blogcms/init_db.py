import logging
import os

from blogcms.database import Base, SessionLocal, engine
import blogcms.models  # noqa: F401  registers every model on Base.metadata
from blogcms.crud import crud_site_setting, crud_user
from blogcms.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def ensure_admin(db, email: str, password: str, name: str = "Admin User"):
    """Create the admin account, or reset its password if it already exists."""
    existing = crud_user.get_by_email(db, email)
    if existing:
        logger.info(f"[INIT] Admin {email} exists, updating password")
        return crud_user.update_user(
            db, user_id=existing.id, user_in=UserUpdate(password=password, role="admin")
        )
    logger.info(f"[INIT] Creating admin {email}")
    return crud_user.create_user(
        db, user_in=UserCreate(name=name, email=email, password=password, role="admin")
    )


def main():
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    print("✅ Tables created successfully")

    db = SessionLocal()
    try:
        inserted = crud_site_setting.initialize(db)
        print(f"✅ Site settings initialized ({inserted} defaults inserted)")

        admin_email = os.getenv("ADMIN_EMAIL")
        admin_password = os.getenv("ADMIN_PASSWORD")
        if admin_email and admin_password:
            ensure_admin(db, admin_email, admin_password)
            print(f"✅ Admin user ready: {admin_email}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
