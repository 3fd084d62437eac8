"""SQLAlchemy declarative base for the scenario library tables."""
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for scenario library models."""
    pass
