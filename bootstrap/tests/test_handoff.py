import sys
from unittest import mock

from django.test import SimpleTestCase

from bootstrap.exceptions import HandoffFailed
from bootstrap.handoff import build_server_argv, exec_server, hand_off, run_server_inprocess

from .helpers import ProcessReplaced, RecordingExec


class BuildServerArgvTest(SimpleTestCase):

    def test_defaults_bind_all_interfaces_on_8000(self):
        argv = build_server_argv()

        self.assertEqual(argv, ['gunicorn', '--bind', '0.0.0.0:8000', 'core.wsgi:application'])

    def test_config_file_is_passed(self):
        argv = build_server_argv(config='/app/gunicorn_config.py')

        self.assertEqual(argv[:3], ['gunicorn', '--config', '/app/gunicorn_config.py'])
        self.assertEqual(argv[-3:], ['--bind', '0.0.0.0:8000', 'core.wsgi:application'])


class ExecHandoffTest(SimpleTestCase):
    """Test cases for replacing the process with Gunicorn"""

    def test_exec_replaces_process(self):
        execvp = RecordingExec()
        argv = build_server_argv()

        with self.assertRaises(ProcessReplaced):
            hand_off(argv, execvp=execvp)

        self.assertEqual(execvp.calls, [('gunicorn', argv)])

    def test_exec_failure_raises_handoff_failed(self):
        execvp = mock.Mock(side_effect=FileNotFoundError(2, 'No such file or directory'))

        with self.assertRaisesMessage(HandoffFailed, 'Could not exec gunicorn'):
            exec_server(['gunicorn', 'core.wsgi:application'], execvp=execvp)

    def test_exec_returning_is_a_failure(self):
        with self.assertRaises(HandoffFailed):
            exec_server(['gunicorn'], execvp=mock.Mock(return_value=None))

    def test_unknown_mode(self):
        with self.assertRaisesMessage(HandoffFailed, 'Unknown handoff mode'):
            hand_off(['gunicorn'], mode='fork')


class InprocessHandoffTest(SimpleTestCase):
    """Test cases for running Gunicorn inside the current interpreter"""

    def setUp(self):
        patcher = mock.patch.object(sys, 'argv', list(sys.argv))
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_runs_wsgiapp_with_server_argv(self):
        argv = build_server_argv()
        seen = []

        with mock.patch('gunicorn.app.wsgiapp.run', side_effect=lambda: seen.append(list(sys.argv))):
            hand_off(argv, mode='inprocess')

        self.assertEqual(seen, [argv])

    def test_non_zero_exit_raises_handoff_failed(self):
        with mock.patch('gunicorn.app.wsgiapp.run', side_effect=SystemExit(1)):
            with self.assertRaisesMessage(HandoffFailed, 'status 1'):
                run_server_inprocess(['gunicorn', 'core.wsgi:application'])

    def test_clean_exit_propagates(self):
        with mock.patch('gunicorn.app.wsgiapp.run', side_effect=SystemExit(0)):
            with self.assertRaises(SystemExit):
                run_server_inprocess(['gunicorn', 'core.wsgi:application'])
