#!/usr/bin/env python3
"""
Entrypoint script for the application container.

Waits for PostgreSQL, applies migrations, collects static files and then
replaces itself with Gunicorn. Any failure exits non-zero so the cluster
reports the container as failed.
"""
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger('bootstrap.entrypoint')

RUNTIME_DIRECTORIES = ['/app/logs', '/app/media', '/app/staticfiles']


def prepare_directories(directories=RUNTIME_DIRECTORIES):
    # Create necessary directories if they don't exist
    for directory in directories:
        Path(directory).mkdir(parents=True, exist_ok=True)


def main():
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.docker_settings')

    if os.path.exists('/app'):
        prepare_directories()

    import django
    from django.core.exceptions import ImproperlyConfigured

    django.setup()

    from bootstrap.exceptions import BootstrapError
    from bootstrap.sequencer import BootstrapSequencer

    logger.info("Starting Django container...")
    try:
        BootstrapSequencer.from_settings().run()
    except ImproperlyConfigured as e:
        logger.error(f"Configuration error: {e}")
        return 1
    except BootstrapError as e:
        logger.error(f"Container startup failed: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
