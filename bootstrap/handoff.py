"""
Handing the container over to Gunicorn.

In ``exec`` mode the sequencer process image is replaced with the
``gunicorn`` executable, so Gunicorn keeps the PID and receives the
container's termination signals directly. ``inprocess`` mode runs
Gunicorn's WSGI application runner inside the current interpreter, for
images (e.g. distroless) that have no ``gunicorn`` script on PATH. The
arbiter still ends up as the container's primary process.
"""

import logging
import os
import sys

from .exceptions import HandoffFailed

logger = logging.getLogger(__name__)

EXEC = 'exec'
INPROCESS = 'inprocess'
HANDOFF_MODES = (EXEC, INPROCESS)

DEFAULT_WSGI_APP = 'core.wsgi:application'
DEFAULT_BIND_HOST = '0.0.0.0'
DEFAULT_BIND_PORT = 8000


def build_server_argv(wsgi_app=DEFAULT_WSGI_APP, host=DEFAULT_BIND_HOST,
                      port=DEFAULT_BIND_PORT, config=None, executable='gunicorn'):
    """
    Command line for the Gunicorn server.

    Worker and logging options live in the Gunicorn config file; the bind
    address is always given on the command line so it cannot drift.
    """
    argv = [executable]
    if config:
        argv += ['--config', str(config)]
    argv += ['--bind', f"{host}:{port}", wsgi_app]
    return argv


def exec_server(argv, execvp=os.execvp):
    try:
        execvp(argv[0], argv)
    except OSError as e:
        raise HandoffFailed(f"Could not exec {argv[0]}: {e}") from e
    # Only reachable when execvp is replaced (tests)
    raise HandoffFailed(f"{argv[0]} returned control to the sequencer")


def run_server_inprocess(argv):
    try:
        import gunicorn.app.wsgiapp as wsgi
    except ImportError as e:
        raise HandoffFailed(f"Gunicorn is not importable: {e}") from e

    # Override sys.argv with gunicorn arguments
    sys.argv = list(argv)
    try:
        wsgi.run()
    except SystemExit as e:
        if e.code not in (None, 0):
            raise HandoffFailed(f"Gunicorn exited with status {e.code}") from e
        raise


def hand_off(argv, mode=EXEC, execvp=os.execvp):
    """Start the server in place of the current process. Does not return."""
    if mode not in HANDOFF_MODES:
        raise HandoffFailed(
            f"Unknown handoff mode {mode!r}; expected one of {', '.join(HANDOFF_MODES)}"
        )

    logger.debug(f"Server command: {' '.join(argv)}")
    # Flush buffered status lines before the process image goes away
    sys.stdout.flush()
    sys.stderr.flush()
    for handler in logging.getLogger().handlers:
        handler.flush()

    if mode == EXEC:
        exec_server(argv, execvp=execvp)
    else:
        run_server_inprocess(argv)
