"""
Unit-of-work boundary for business operations.

Managers only add and flush; the caller wraps a whole request's worth of
changes in transaction() so they commit or roll back together.
"""

from contextlib import contextmanager
from sqlalchemy.exc import IntegrityError
from inventory_app import db
from inventory_app.buisness.inventory.errors import ConflictError
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.domain.core.transaction")


@contextmanager
def transaction():
    """
    Commit the session when the block succeeds, roll back on any exception.

    Raises:
        ConflictError: When the database rejects the changes with an integrity violation
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"Integrity violation, transaction rolled back: {e.orig}")
        raise ConflictError("Operation violates a uniqueness or reference constraint") from e
    except Exception:
        db.session.rollback()
        raise
