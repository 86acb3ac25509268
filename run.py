#!/usr/bin/env python3
"""
Entry point for the Lobby Service.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development or production (default: development)
    PORT: Port to run on (default: 5002)
    DATABASE_URL: PostgreSQL connection string (sql backend)
    STORE_BACKEND: sql or memory (default: sql)
    ADMIN_API_KEY: Key required in X-Admin-Key for admin routes (unset = open)
"""
import os

from lobby.app import create_app


def run_lobby():
    """Run the lobby service."""
    app = create_app()
    port = int(os.getenv('PORT', 5002))
    debug = os.getenv('FLASK_ENV', 'development') == 'development'
    
    app.logger.info(f"Starting Lobby Service on port {port}...")
    app.run(host='0.0.0.0', port=port, debug=debug)


if __name__ == '__main__':
    run_lobby()
