import os
from collections import namedtuple

from django.core.exceptions import ImproperlyConfigured


HOST_VARIABLE = 'DB_HOST'
PORT_VARIABLE = 'DB_PORT'


class Endpoint(namedtuple('Endpoint', ['host', 'port'])):
    """Network address of the database the application depends on"""

    __slots__ = ()

    def __str__(self):
        return f"{self.host}:{self.port}"


def parse_port(value, variable=PORT_VARIABLE):
    try:
        port = int(str(value).strip())
    except (TypeError, ValueError):
        raise ImproperlyConfigured(f"{variable} must be an integer, got {value!r}")
    if not 1 <= port <= 65535:
        raise ImproperlyConfigured(f"{variable} must be between 1 and 65535, got {port}")
    return port


def parse_interval(value, name='probe interval'):
    try:
        interval = float(value)
    except (TypeError, ValueError):
        raise ImproperlyConfigured(f"The {name} must be a number of seconds, got {value!r}")
    if interval < 0:
        raise ImproperlyConfigured(f"The {name} must not be negative, got {value!r}")
    return interval


def resolve_endpoint(environ=None, host=None, port=None):
    """
    Read the database endpoint from the environment.

    Explicit ``host``/``port`` arguments take precedence over the
    environment. Both values are required: a missing or blank value raises
    ImproperlyConfigured instead of letting the probe loop spin against an
    empty address.
    """
    if environ is None:
        environ = os.environ

    if host is None:
        host = environ.get(HOST_VARIABLE, '')
    if port is None:
        port = environ.get(PORT_VARIABLE, '')

    host = str(host).strip()
    missing = []
    if not host:
        missing.append(HOST_VARIABLE)
    if not str(port).strip():
        missing.append(PORT_VARIABLE)
    if missing:
        raise ImproperlyConfigured(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )

    return Endpoint(host, parse_port(port))


def bootstrap_setting(name, default=None):
    """Look up a key of the BOOTSTRAP settings dict"""
    from django.conf import settings

    return getattr(settings, 'BOOTSTRAP', {}).get(name, default)
