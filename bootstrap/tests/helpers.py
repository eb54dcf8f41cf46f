import subprocess


class ProcessReplaced(Exception):
    """Raised by the fake execvp in place of replacing the test process"""


class ScriptedProbe:
    """Probe returning a fixed sequence of results, recording each call"""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    def __call__(self, endpoint, timeout):
        self.calls.append(endpoint)
        return self.results[len(self.calls) - 1]


class RecordingRunner:
    """Stands in for subprocess.run; exit codes are looked up by action name"""

    def __init__(self, returncodes=None, events=None):
        self.returncodes = returncodes or {}
        self.calls = []
        self.events = events if events is not None else []

    def __call__(self, argv, env=None, cwd=None):
        name = argv[2]
        self.calls.append(argv)
        self.events.append(('run', name))
        return subprocess.CompletedProcess(argv, self.returncodes.get(name, 0))


class RecordingExec:
    def __init__(self, events=None):
        self.calls = []
        self.events = events if events is not None else []

    def __call__(self, file, argv):
        self.calls.append((file, list(argv)))
        self.events.append(('exec', file))
        raise ProcessReplaced(file)
