# Fichier: academy/db/base_class.py
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for every SQLAlchemy model.
    Its metadata drives table creation at startup.
    """
