"""
Container startup sequencing.

    START -> WAITING_FOR_DEPENDENCY -> MIGRATING -> COLLECTING_STATIC -> SERVING

Any failure after the wait moves the sequencer to FAILED and the error
propagates to the caller, which exits the container non-zero. The server
is never started unless the database was reachable and every setup action
exited 0.
"""

import logging
import os
import subprocess
import time

from django.db import models
from django.utils.translation import gettext_lazy as _

from . import actions as setup_actions
from .config import bootstrap_setting, parse_interval, resolve_endpoint
from .exceptions import BootstrapError
from .handoff import (
    DEFAULT_BIND_HOST, DEFAULT_BIND_PORT, DEFAULT_WSGI_APP, EXEC,
    build_server_argv, hand_off,
)
from .probe import DEFAULT_INTERVAL, DEFAULT_TIMEOUT, tcp_probe, wait_for_dependency

logger = logging.getLogger(__name__)


class Stage(models.TextChoices):
    START = 'start', _('Start')
    WAITING_FOR_DEPENDENCY = 'waiting_for_dependency', _('Waiting for database')
    MIGRATING = 'migrating', _('Applying migrations')
    COLLECTING_STATIC = 'collecting_static', _('Collecting static files')
    READY = 'ready', _('Setup complete')
    SERVING = 'serving', _('Serving')
    FAILED = 'failed', _('Failed')


STAGE_ORDER = [
    Stage.START,
    Stage.WAITING_FOR_DEPENDENCY,
    Stage.MIGRATING,
    Stage.COLLECTING_STATIC,
    Stage.READY,
    Stage.SERVING,
]

ACTION_STAGES = {
    'migrate': Stage.MIGRATING,
    'collectstatic': Stage.COLLECTING_STATIC,
}


class BootstrapSequencer:
    """Wait for the database, run the setup actions, then start the server"""

    def __init__(self, endpoint, actions, server_argv, interval=DEFAULT_INTERVAL,
                 timeout=DEFAULT_TIMEOUT, handoff_mode=EXEC, wait=True, serve=True,
                 cancel_event=None, env=None, cwd=None, report=None,
                 probe=tcp_probe, sleep=time.sleep, runner=subprocess.run,
                 execvp=os.execvp):
        self.endpoint = endpoint
        self.actions = list(actions)
        self.server_argv = list(server_argv)
        self.interval = interval
        self.timeout = timeout
        self.handoff_mode = handoff_mode
        self.wait = wait
        self.serve = serve
        self.cancel_event = cancel_event
        self.env = env
        self.cwd = cwd
        self.report = report or logger.info
        self.probe = probe
        self.sleep = sleep
        self.runner = runner
        self.execvp = execvp

        self.stage = Stage.START
        self.history = [Stage.START]
        self.attempts = 0

    @classmethod
    def from_settings(cls, environ=None, host=None, port=None, collectstatic=True, **kwargs):
        """
        Build a sequencer from the environment and the BOOTSTRAP settings.

        Raises ImproperlyConfigured when DB_HOST/DB_PORT are missing or the
        probe interval/timeout is negative.
        """
        endpoint = resolve_endpoint(environ, host=host, port=port)
        interval = kwargs.pop('interval', None)
        if interval is None:
            interval = bootstrap_setting('PROBE_INTERVAL', DEFAULT_INTERVAL)
        kwargs['interval'] = parse_interval(interval)
        kwargs['timeout'] = parse_interval(
            kwargs.pop('timeout', bootstrap_setting('PROBE_TIMEOUT', DEFAULT_TIMEOUT)),
            name='probe timeout'
        )
        manage_py = bootstrap_setting('MANAGE_PY', 'manage.py')
        server_argv = build_server_argv(
            wsgi_app=bootstrap_setting('WSGI_APP', DEFAULT_WSGI_APP),
            host=bootstrap_setting('BIND_HOST', DEFAULT_BIND_HOST),
            port=bootstrap_setting('BIND_PORT', DEFAULT_BIND_PORT),
            config=bootstrap_setting('GUNICORN_CONFIG'),
        )
        kwargs.setdefault('handoff_mode', bootstrap_setting('HANDOFF_MODE', EXEC))
        kwargs.setdefault('cwd', os.path.dirname(os.path.abspath(manage_py)))
        return cls(
            endpoint,
            setup_actions.default_actions(manage_py, collectstatic=collectstatic),
            server_argv,
            **kwargs
        )

    def _advance(self, stage):
        if self.stage == Stage.FAILED:
            raise BootstrapError("Sequencer already failed")
        if STAGE_ORDER.index(stage) <= STAGE_ORDER.index(self.stage):
            raise BootstrapError(f"Cannot move from {self.stage} back to {stage}")
        logger.info(f"Bootstrap stage: {stage.label}")
        self.stage = stage
        self.history.append(stage)

    def _fail(self, error):
        logger.error(f"Bootstrap failed during {self.stage.label}: {error}")
        self.stage = Stage.FAILED
        self.history.append(Stage.FAILED)

    def _on_action_start(self, action):
        stage = ACTION_STAGES.get(action.name)
        if stage is not None and stage != self.stage:
            self._advance(stage)

    def wait_for_database(self):
        self._advance(Stage.WAITING_FOR_DEPENDENCY)
        self.attempts = wait_for_dependency(
            self.endpoint,
            interval=self.interval,
            timeout=self.timeout,
            probe=self.probe,
            sleep=self.sleep,
            cancel_event=self.cancel_event,
            report=self.report,
        )
        return self.attempts

    def run_setup(self):
        setup_actions.run_actions(
            self.actions,
            env=self.env,
            cwd=self.cwd,
            runner=self.runner,
            on_start=self._on_action_start,
        )

    def start_server(self):
        self._advance(Stage.SERVING)
        self.report("Starting Gunicorn...")
        hand_off(self.server_argv, mode=self.handoff_mode, execvp=self.execvp)

    def run(self):
        """
        Run the whole sequence. With ``serve`` enabled this only returns if
        the server exits cleanly in inprocess mode; otherwise the process
        image has been replaced.
        """
        try:
            if self.wait:
                self.wait_for_database()
            self.run_setup()
            if not self.serve:
                self._advance(Stage.READY)
                return self.stage
            self.start_server()
        except BootstrapError as e:
            self._fail(e)
            raise
        return self.stage
