import logging
from typing import Generator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from academy.content.catalog import AlgorithmCatalog
from academy.core.config import Settings
from academy.db.session import Database

log = logging.getLogger(__name__)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """Provide one SQLAlchemy session per request.

    The session comes from the :class:`Database` handle stored on
    ``app.state`` by the lifespan (or by ``create_app(database=...)`` in
    tests). A store failure rolls the session back before the error reaches
    the exception handlers.
    """
    db = get_database(request).SessionLocal()
    try:
        yield db
    except SQLAlchemyError:
        log.exception("Rolling back session after database error")
        db.rollback()
        raise
    finally:
        db.close()


def get_catalog(request: Request) -> AlgorithmCatalog:
    return request.app.state.catalog


def get_settings(request: Request) -> Settings:
    return request.app.state.config
