#!/usr/bin/env python

"""
    Configurations for lendtrack

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details
"""

import os


# Determine environment
TESTING = os.getenv("TESTING", "false").lower() == "true"

# API server configuration
SCHEME = 'http'
HOST = os.environ.get('LENDTRACK_HOST', 'localhost')
PORT = int(os.environ.get('LENDTRACK_PORT', 8080))
WORKERS = int(os.environ.get('LENDTRACK_WORKERS', 1))
DEBUG = bool(int(os.environ.get('LENDTRACK_DEBUG', 0)))
LOG_LEVEL = os.environ.get('LENDTRACK_LOG_LEVEL', 'info')
SSL_CRT = os.environ.get('LENDTRACK_SSL_CRT')
SSL_KEY = os.environ.get('LENDTRACK_SSL_KEY')

# Identity: cookie signing key and where unauthenticated users are sent
SEED = os.environ.get('LENDTRACK_SEED', 'lendtrack-development-seed')
LOGIN_URL = os.environ.get('LENDTRACK_LOGIN_URL', '/login')

OPTIONS = {
    'host': HOST,
    'port': PORT,
    'log_level': LOG_LEVEL,
    'reload': DEBUG,
    'workers': WORKERS,
}
if SSL_CRT and SSL_KEY:
    OPTIONS['ssl_keyfile'] = SSL_KEY
    OPTIONS['ssl_certfile'] = SSL_CRT
    SCHEME = 'https'

DB_CONFIG = {
    'user': os.environ.get('DB_USER', 'postgres'),
    'password': os.environ.get('DB_PASSWORD'),
    'host': os.environ.get('DB_HOST', 'localhost'),
    'port': int(os.environ.get('DB_PORT', '5432')),
    'dbname': os.environ.get('DB_NAME', 'lendtrack'),
}

# Database configuration
DB_URI = os.environ.get('LENDTRACK_DB_URI') or (
    "sqlite:///:memory:" if TESTING else
    'postgresql+psycopg2://{user}:{password}@{host}:{port}/{dbname}'.format(**DB_CONFIG)
)

__all__ = [
    'SCHEME', 'HOST', 'PORT', 'DEBUG', 'LOG_LEVEL', 'OPTIONS',
    'DB_URI', 'DB_CONFIG', 'SEED', 'LOGIN_URL', 'TESTING',
]
