"""
One-time setup actions run before the server starts.

Each action is an external command; its exit status is the only thing
looked at. Both default actions are idempotent, so a container restart
simply runs them again.
"""

import logging
import os
import subprocess
import sys
from collections import namedtuple

from .exceptions import SetupActionFailed

logger = logging.getLogger(__name__)


SetupAction = namedtuple('SetupAction', ['name', 'argv'])


def manage_py_action(name, manage_py='manage.py', python=None):
    """Build an action running ``python manage.py <name> --noinput``"""
    return SetupAction(name, [python or sys.executable, str(manage_py), name, '--noinput'])


def default_actions(manage_py='manage.py', python=None, collectstatic=True):
    """Schema migration first, then static asset collection"""
    actions = [manage_py_action('migrate', manage_py, python)]
    if collectstatic:
        actions.append(manage_py_action('collectstatic', manage_py, python))
    return actions


def run_action(action, env=None, cwd=None, runner=subprocess.run):
    """Run a single setup action, raising SetupActionFailed unless it exits 0"""
    logger.info(f"Running: {' '.join(action.argv)}")
    try:
        # Pass the current environment (DJANGO_SETTINGS_MODULE, DB_*) through
        result = runner(action.argv, env=env if env is not None else os.environ, cwd=cwd)
    except FileNotFoundError:
        raise SetupActionFailed(action.name, reason=f"command not found: '{action.argv[0]}'")
    except OSError as e:
        raise SetupActionFailed(action.name, reason=str(e)) from e

    if result.returncode != 0:
        logger.error(f"{action.name} exited with status {result.returncode}")
        raise SetupActionFailed(action.name, result.returncode)

    logger.info(f"{action.name} completed")
    return result


def run_actions(actions, env=None, cwd=None, runner=subprocess.run, on_start=None):
    """
    Run actions strictly in order. The first failure propagates and no later
    action is started. ``on_start`` is called with each action before it runs.
    """
    for action in actions:
        if on_start is not None:
            on_start(action)
        run_action(action, env=env, cwd=cwd, runner=runner)
