"""
Readiness probing for the database endpoint.

The probe only checks that something accepts TCP connections on the
endpoint. A listening-but-unready database passes it; the /health/ view
covers application-level readiness once the server is up.
"""

import logging
import socket
import time

from .exceptions import WaitCancelled

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 2
DEFAULT_TIMEOUT = 3


def tcp_probe(endpoint, timeout=DEFAULT_TIMEOUT):
    """Return True if a TCP connection to the endpoint can be opened"""
    try:
        with socket.create_connection((endpoint.host, endpoint.port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug(f"Probe of {endpoint} failed: {e}")
        return False


def wait_for_dependency(endpoint, interval=DEFAULT_INTERVAL, timeout=DEFAULT_TIMEOUT,
                        probe=tcp_probe, sleep=time.sleep, cancel_event=None,
                        report=None):
    """
    Block until ``probe`` succeeds against ``endpoint``.

    There is no attempt limit and no backoff: the probe is retried every
    ``interval`` seconds for as long as it takes. If ``cancel_event`` (a
    threading.Event) is given, setting it aborts the wait with
    WaitCancelled; the interval is then slept on the event so cancellation
    is noticed immediately.

    Returns the number of probes made.
    """
    report = report or logger.info
    report(f"Waiting for PostgreSQL at {endpoint}...")

    attempts = 0
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WaitCancelled(endpoint, attempts)

        attempts += 1
        if probe(endpoint, timeout):
            break

        logger.debug(f"{endpoint} not reachable (attempt {attempts}), retrying in {interval}s")
        if cancel_event is not None:
            if cancel_event.wait(interval):
                raise WaitCancelled(endpoint, attempts)
        else:
            sleep(interval)

    report("PostgreSQL is up.")
    return attempts
