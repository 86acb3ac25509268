#!/usr/bin/env python3
"""
Database management script for deployment.
Run this during the build/deployment pipeline to handle migrations
(with FLASK_ENV=production, which leaves table creation to Alembic).
"""
import logging
import sys

from flask_migrate import upgrade

from lobby.app import create_app

logger = logging.getLogger(__name__)


def deploy():
    """Run deployment tasks."""
    app = create_app()
    logger.info("Starting database migration...")
    with app.app_context():
        # Run Alembic upgrade to apply migrations
        try:
            upgrade()
            logger.info("Database migrations applied.")
        except Exception as e:
            logger.error(f"Error applying migrations: {e}")
            sys.exit(1)


if __name__ == '__main__':
    deploy()
