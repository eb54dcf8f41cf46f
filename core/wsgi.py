"""
WSGI config for the core project.

Served by Gunicorn as ``core.wsgi:application``.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

application = get_wsgi_application()
