"""
Block until the database accepts TCP connections.

Usage:
    python manage.py wait_for_db                          # DB_HOST/DB_PORT from environment
    python manage.py wait_for_db --host db --port 5432    # explicit endpoint
    python manage.py wait_for_db --interval 5             # probe every 5 seconds
"""

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from bootstrap.config import bootstrap_setting, parse_interval, resolve_endpoint
from bootstrap.exceptions import WaitCancelled
from bootstrap.probe import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, wait_for_dependency


class Command(BaseCommand):
    help = 'Wait until the database endpoint accepts connections'

    def add_arguments(self, parser):
        parser.add_argument('--host', type=str, help='Database host (defaults to DB_HOST)')
        parser.add_argument('--port', type=str, help='Database port (defaults to DB_PORT)')
        parser.add_argument(
            '--interval',
            type=float,
            help='Seconds between connection attempts'
        )

    def handle(self, *args, **options):
        interval = options.get('interval')
        if interval is None:
            interval = bootstrap_setting('PROBE_INTERVAL', DEFAULT_INTERVAL)

        try:
            endpoint = resolve_endpoint(host=options.get('host'), port=options.get('port'))
            interval = parse_interval(interval)
            timeout = parse_interval(
                bootstrap_setting('PROBE_TIMEOUT', DEFAULT_TIMEOUT), name='probe timeout'
            )
        except ImproperlyConfigured as e:
            raise CommandError(str(e))

        try:
            attempts = wait_for_dependency(
                endpoint,
                interval=interval,
                timeout=timeout,
                report=self.stdout.write,
            )
        except WaitCancelled as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f"Database reachable after {attempts} attempt(s)"))
