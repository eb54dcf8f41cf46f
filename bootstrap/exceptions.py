"""
Exceptions raised while bootstrapping the application container.
"""


class BootstrapError(Exception):
    """Base class for fatal container startup errors"""


class SetupActionFailed(BootstrapError):
    """A setup action (migrate, collectstatic) exited non-zero or could not start"""

    def __init__(self, action, returncode=None, reason=None):
        self.action = action
        self.returncode = returncode
        self.reason = reason
        if reason:
            message = f"Setup action '{action}' failed: {reason}"
        else:
            message = f"Setup action '{action}' exited with status {returncode}"
        super().__init__(message)


class HandoffFailed(BootstrapError):
    """The server process could not be launched"""


class WaitCancelled(BootstrapError):
    """Waiting for the database was cancelled before it became reachable"""

    def __init__(self, endpoint, attempts):
        self.endpoint = endpoint
        self.attempts = attempts
        super().__init__(f"Gave up waiting for {endpoint} after {attempts} attempt(s)")
