from src.models.schema.user import User
from src.models.schema.animal import Animal

__all__ = [
    "User",
    "Animal",
]
