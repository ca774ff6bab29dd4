#!/usr/bin/env python3
"""
Database build for the inventory system
Creates every table registered on the SQLAlchemy metadata.
"""

from inventory_app import db
from inventory_app.logger import get_logger

logger = get_logger("inventory_app.build")


def build_database(app):
    """
    Create all tables that do not exist yet.

    Args:
        app: Flask application whose database should be built
    """
    with app.app_context():
        logger.info("Creating database tables")
        db.create_all()
        table_names = sorted(db.metadata.tables.keys())
        logger.info(f"Database tables ready: {', '.join(table_names)}")
