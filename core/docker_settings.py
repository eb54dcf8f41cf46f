"""
Container-specific Django settings for the core project.
"""

import os
from pathlib import Path

from .settings import *

# Static files are collected into the image's serving location
STATIC_ROOT = os.environ.get('STATIC_ROOT', '/app/staticfiles')

MEDIA_ROOT = os.environ.get('MEDIA_ROOT', '/app/media')

# Determine if we're running in the container or locally
if os.path.exists('/app'):
    LOG_DIR = Path('/app/logs')
    os.makedirs(LOG_DIR, exist_ok=True)
    LOGGING['handlers']['file']['filename'] = str(LOG_DIR / 'app.log')

# Production database connections fail fast instead of hanging a worker
if DATABASES['default']['ENGINE'] == 'django.db.backends.postgresql':
    DATABASES['default'].setdefault('OPTIONS', {})['connect_timeout'] = int(
        os.environ.get('DB_CONNECT_TIMEOUT', '5')
    )

# Security settings for production
if not DEBUG:
    SECURE_BROWSER_XSS_FILTER = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'
    SESSION_COOKIE_HTTPONLY = True
    CSRF_COOKIE_HTTPONLY = True
