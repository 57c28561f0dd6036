"""
User model. Guest accounts share the table with regular accounts and are
told apart by ``is_guest``.
"""

from sqlalchemy import Column, Integer, String, Boolean

from eventhub.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    # Always stored trimmed and lower-cased
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_guest = Column(Boolean, default=False, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, guest={self.is_guest})>"
