"""FastAPI dependencies shared by the routers."""

from datetime import datetime

from ..db import Database, db
from ..utils.timezone import now_oslo

def get_database() -> Database:
    """The database used for request handling."""
    return db

def get_now() -> datetime:
    """Request time. Evaluated once per request."""
    return now_oslo()
