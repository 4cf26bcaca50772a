"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generic, Iterable, Iterator, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogcms.core.exceptions import NotFoundError, translate_integrity_error
from blogcms.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	Constraint violations are rolled back and re-raised as domain exceptions.
	"""

	#: Name used in "not found" messages
	entity_name: str = "Resource"
	#: Message for unique-constraint violations on this model
	unique_message: Optional[str] = None
	#: Message for foreign-key violations on this model
	fk_message: Optional[str] = None
	#: Per-constraint unique messages, keyed by a table or constraint name fragment
	unique_messages: Dict[str, str] = {}

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_or_raise(self, db: Session, id: Any) -> ModelType:
		"""Get one record by primary key or raise NotFoundError."""
		db_obj = self.get(db, id)
		if db_obj is None:
			raise NotFoundError(self.entity_name, id)
		return db_obj

	def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> Iterable[ModelType]:
		"""Get records with pagination."""
		stmt = select(self.model).order_by(self.model.id).offset(skip).limit(limit)
		return db.scalars(stmt).all()

	def count(self, db: Session) -> int:
		return db.scalar(select(func.count()).select_from(self.model)) or 0

	# ----- Transactions -----
	@contextmanager
	def atomic(self, db: Session) -> Iterator[None]:
		"""Run a multi-step write; roll back and translate constraint errors raised inside."""
		try:
			yield
		except IntegrityError as exc:
			db.rollback()
			raise translate_integrity_error(
				exc,
				self.unique_message,
				self.fk_message,
				unique_messages=self.unique_messages,
			) from exc
		except Exception:
			db.rollback()
			raise

	def commit(self, db: Session, db_obj: Optional[ModelType] = None) -> None:
		"""Commit the session; roll back and translate constraint errors on failure."""
		with self.atomic(db):
			db.commit()
		if db_obj is not None:
			db.refresh(db_obj)

	# ----- Create -----
	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
		"""Create a new record from a Pydantic schema or dict."""
		obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		db_obj = self.model(**obj_in_data)  # type: ignore[arg-type]
		db.add(db_obj)
		self.commit(db, db_obj)
		return db_obj

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with fields from a Pydantic schema or dict."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		for field, value in update_data.items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)

		db.add(db_obj)
		self.commit(db, db_obj)
		return db_obj

	# ----- Delete -----
	def delete(self, db: Session, *, id: Any) -> ModelType:
		"""Hard delete a record. Raises NotFoundError if it does not exist."""
		db_obj = self.get_or_raise(db, id)
		db.delete(db_obj)
		self.commit(db)
		return db_obj
