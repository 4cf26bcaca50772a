"""CRUD operations for `User` model."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from blogcms.core.security import get_password_hash, verify_password
from blogcms.crud.base import CRUDBase
from blogcms.models.user import User
from blogcms.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
	entity_name = "User"
	unique_message = "Email already in use"

	def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
		if not email:
			return None
		stmt = select(User).where(User.email == email.strip().lower()).limit(1)
		return db.scalars(stmt).first()

	def create_user(self, db: Session, *, user_in: UserCreate) -> User:
		user_data = user_in.model_dump(exclude_unset=True)
		raw_password = user_data.pop("password")
		user_data["password_hash"] = get_password_hash(raw_password)
		user_data.setdefault("role", "user")

		db_obj = User(**user_data)
		db.add(db_obj)
		self.commit(db, db_obj)
		logger.info(f"[USER] Created user id={db_obj.id} role={db_obj.role}")
		return db_obj

	def update_user(self, db: Session, *, user_id: int, user_in: UserUpdate) -> User:
		"""Update a user; a new password is re-hashed."""
		user = self.get_or_raise(db, user_id)
		update_data = user_in.model_dump(exclude_unset=True, exclude_none=True)
		raw_password = update_data.pop("password", None)
		if raw_password:
			update_data["password_hash"] = get_password_hash(raw_password)
		return self.update(db, db_obj=user, obj_in=update_data)

	def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
		"""Authenticate user by email and password."""
		user = self.get_by_email(db, email)
		if not user:
			return None
		if not verify_password(password, user.password_hash):
			return None
		return user


# Singleton instance
crud_user = CRUDUser(User)
