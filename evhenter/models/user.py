"""User model used by request authentication."""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime

from .base import Base
from ..utils.timezone import now_oslo

class User(Base):
    """An account that can submit events. Credentials are stored elsewhere."""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True)
    name = Column(String(200))
    role = Column(String(20), nullable=False, default='user')
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=now_oslo)

