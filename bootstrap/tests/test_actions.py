import sys
from unittest import mock

from django.test import SimpleTestCase

from bootstrap.actions import (
    SetupAction, default_actions, manage_py_action, run_action, run_actions,
)
from bootstrap.exceptions import SetupActionFailed

from .helpers import RecordingRunner


class SetupActionTest(SimpleTestCase):

    def test_manage_py_action_is_non_interactive(self):
        action = manage_py_action('migrate', '/app/manage.py', python='python3')

        self.assertEqual(action.name, 'migrate')
        self.assertEqual(action.argv, ['python3', '/app/manage.py', 'migrate', '--noinput'])

    def test_default_python_is_current_interpreter(self):
        action = manage_py_action('migrate')
        self.assertEqual(action.argv[0], sys.executable)

    def test_default_actions_order(self):
        names = [action.name for action in default_actions()]
        self.assertEqual(names, ['migrate', 'collectstatic'])

    def test_collectstatic_can_be_left_out(self):
        names = [action.name for action in default_actions(collectstatic=False)]
        self.assertEqual(names, ['migrate'])


class RunActionTest(SimpleTestCase):
    """Test cases for running setup actions as subprocesses"""

    def test_success(self):
        runner = RecordingRunner()
        action = manage_py_action('migrate', python='python')

        result = run_action(action, env={'A': '1'}, cwd='/app', runner=runner)

        self.assertEqual(result.returncode, 0)
        self.assertEqual(runner.calls, [['python', 'manage.py', 'migrate', '--noinput']])

    def test_environment_and_cwd_are_passed_through(self):
        runner = mock.Mock(return_value=mock.Mock(returncode=0))
        action = SetupAction('migrate', ['python', 'manage.py', 'migrate', '--noinput'])

        run_action(action, env={'DB_HOST': 'db'}, cwd='/app', runner=runner)

        runner.assert_called_once_with(action.argv, env={'DB_HOST': 'db'}, cwd='/app')

    def test_non_zero_exit_raises(self):
        runner = RecordingRunner({'migrate': 3})

        with self.assertRaises(SetupActionFailed) as ctx:
            run_action(manage_py_action('migrate'), runner=runner)

        self.assertEqual(ctx.exception.action, 'migrate')
        self.assertEqual(ctx.exception.returncode, 3)
        self.assertIn('exited with status 3', str(ctx.exception))

    def test_missing_executable_raises(self):
        runner = mock.Mock(side_effect=FileNotFoundError)

        with self.assertRaises(SetupActionFailed) as ctx:
            run_action(SetupAction('migrate', ['no-such-python', 'manage.py']), runner=runner)

        self.assertIsNone(ctx.exception.returncode)
        self.assertIn('no-such-python', str(ctx.exception))

    def test_launch_errors_raise_setup_action_failed(self):
        runner = mock.Mock(side_effect=PermissionError(13, 'Permission denied'))

        with self.assertRaises(SetupActionFailed) as ctx:
            run_action(manage_py_action('migrate'), runner=runner)

        self.assertEqual(ctx.exception.action, 'migrate')
        self.assertIsNone(ctx.exception.returncode)
        self.assertIn('Permission denied', str(ctx.exception))


class RunActionsTest(SimpleTestCase):

    def test_runs_in_order(self):
        runner = RecordingRunner()
        started = []

        run_actions(default_actions(), runner=runner, on_start=lambda a: started.append(a.name))

        self.assertEqual([argv[2] for argv in runner.calls], ['migrate', 'collectstatic'])
        self.assertEqual(started, ['migrate', 'collectstatic'])

    def test_failure_stops_later_actions(self):
        runner = RecordingRunner({'migrate': 1})

        with self.assertRaises(SetupActionFailed):
            run_actions(default_actions(), runner=runner)

        self.assertEqual([argv[2] for argv in runner.calls], ['migrate'])
