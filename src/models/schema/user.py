from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from src.core.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    # passlib bcrypt hash, never the plaintext
    password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # Relationships
    animals = relationship("Animal", back_populates="owner")

    # Indexes
    __table_args__ = (Index("idx_users_email", "email"),)
