"""
Container startup sequence: wait for the database, migrate, collect static
files, then replace this process with Gunicorn.

Usage:
    python manage.py bootstrap                      # full sequence
    python manage.py bootstrap --no-serve           # setup only (init container / job)
    python manage.py bootstrap --skip-wait          # database known to be up
    python manage.py bootstrap --skip-collectstatic
"""

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError

from bootstrap.exceptions import BootstrapError
from bootstrap.sequencer import BootstrapSequencer


class Command(BaseCommand):
    help = 'Wait for the database, run migrations and collectstatic, then start Gunicorn'

    def add_arguments(self, parser):
        parser.add_argument(
            '--skip-wait',
            action='store_true',
            help='Do not wait for the database before migrating'
        )
        parser.add_argument(
            '--skip-collectstatic',
            action='store_true',
            help='Do not run collectstatic'
        )
        parser.add_argument(
            '--no-serve',
            action='store_true',
            help='Stop after the setup actions instead of starting Gunicorn'
        )
        parser.add_argument(
            '--interval',
            type=float,
            help='Seconds between database connection attempts'
        )

    def build_sequencer(self, options):
        kwargs = {
            'wait': not options['skip_wait'],
            'serve': not options['no_serve'],
            'report': self.stdout.write,
        }
        if options.get('interval') is not None:
            kwargs['interval'] = options['interval']
        return BootstrapSequencer.from_settings(
            collectstatic=not options['skip_collectstatic'],
            **kwargs
        )

    def handle(self, *args, **options):
        self.stdout.write('Starting Django container...')

        try:
            sequencer = self.build_sequencer(options)
        except ImproperlyConfigured as e:
            raise CommandError(str(e))

        try:
            stage = sequencer.run()
        except BootstrapError as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(f"Bootstrap finished: {stage.label}"))
