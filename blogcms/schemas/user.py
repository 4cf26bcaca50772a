"""Pydantic schemas for `User` domain objects."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ALLOWED_ROLES = {"admin", "user"}


def _check_email(v: str) -> str:
	v = v.strip().lower()
	local, _, domain = v.partition("@")
	if not local or "." not in domain:
		raise ValueError("Invalid email address")
	return v


class UserBase(BaseModel):
	name: str = Field(..., min_length=1, max_length=255)
	email: str
	role: str = "user"

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _check_email(v)

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: str) -> str:
		v = v.lower()
		if v not in ALLOWED_ROLES:
			raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
		return v

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"name": "Jane Editor",
			"email": "jane@example.com",
			"role": "admin",
		}
	})


class UserCreate(UserBase):
	password: str = Field(..., min_length=8)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"name": "Jane Editor",
			"email": "jane@example.com",
			"password": "StrongPass!234",
			"role": "admin",
		}
	})


class UserUpdate(BaseModel):
	name: Optional[str] = Field(None, min_length=1, max_length=255)
	email: Optional[str] = None
	role: Optional[str] = None
	password: Optional[str] = Field(None, min_length=8)

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		return _check_email(v)

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: Optional[str]) -> Optional[str]:
		if v is None:
			return v
		v = v.lower()
		if v not in ALLOWED_ROLES:
			raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
		return v


class UserResponse(UserBase):
	id: int
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class UserLogin(BaseModel):
	email: str
	password: str

	@field_validator("email")
	@classmethod
	def validate_email(cls, v: str) -> str:
		return _check_email(v)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "jane@example.com",
			"password": "StrongPass!234",
		}
	})


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"
	user: UserResponse
