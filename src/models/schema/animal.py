from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    ForeignKey,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from src.core.db import Base
from src.models.animal import AnimalType, AnimalStatus, Gender


def _in_clause(column: str, enum) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum)
    return f"{column} IN ({values})"


class Animal(Base):
    __tablename__ = "animals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # unique across every owner, not per owner
    number = Column(String(255), unique=True, nullable=False)
    type = Column(String(20), nullable=False)
    # date of birth; the column name is historical
    age = Column(Date, nullable=False)
    status = Column(String(20), nullable=False)
    gender = Column(String(10), nullable=False)
    image = Column(String, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime, server_default=func.now(), nullable=False, onupdate=func.now()
    )

    # Relationships
    owner = relationship("User", back_populates="animals")

    # Constraints and indexes
    __table_args__ = (
        CheckConstraint(_in_clause("type", AnimalType), name="ck_animals_type"),
        CheckConstraint(_in_clause("status", AnimalStatus), name="ck_animals_status"),
        CheckConstraint(_in_clause("gender", Gender), name="ck_animals_gender"),
        Index("idx_animals_number", "number"),
        Index("idx_animals_type", "type"),
        Index("idx_animals_status", "status"),
        Index("idx_animals_user_id", "user_id"),
        Index("idx_animals_created_at", "created_at"),
    )
