# app/models/user.py

import enum
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Boolean, Enum
from sqlalchemy.sql import func
from app.database import Base


class Role(enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class UserModel(Base):
    __tablename__ = "users"

    user_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    role = Column(Enum(Role), default=Role.USER, nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(DateTime, default=func.current_timestamp(), onupdate=func.current_timestamp())
    last_login = Column(DateTime, nullable=True)
    is_active = Column(Boolean, default=True)

    def __repr__(self):
        return f"<UserModel(id={self.user_id}, email='{self.email}')>"
