from contextlib import contextmanager

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from roster import db


class RosterError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RosterError):
    """Malformed, missing or out-of-range input. Raised before any store call."""
    status_code = 400


class StoreError(RosterError):
    """Failure reported by the backing store; message passed through as-is."""
    status_code = 500


def store_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, 'orig', None)
    return str(orig) if orig is not None else str(exc)


@contextmanager
def store_errors():
    """Roll back and re-raise any SQLAlchemy failure as a StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.session.rollback()
        message = store_message(exc)
        current_app.logger.error(f"[store-error] {message}")
        raise StoreError(message) from exc
