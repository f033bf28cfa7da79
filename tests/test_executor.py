import unittest
from unittest.mock import patch, MagicMock

from nlsh.executor import CommandExecutor


class TestCommandExecutor(unittest.TestCase):
    """Test cases for the CommandExecutor class."""

    def setUp(self):
        """Set up test fixtures."""
        self.executor = CommandExecutor(shell="/bin/bash")

    @patch('nlsh.executor.platform.system', return_value="Linux")
    @patch('nlsh.executor.subprocess.Popen')
    def test_execute_command_success(self, mock_popen, _mock_system):
        """Test successful command execution."""
        process_mock = MagicMock()
        process_mock.returncode = 0
        process_mock.communicate.return_value = ("command output", "")
        mock_popen.return_value = process_mock

        success, stdout, stderr = self.executor.execute_command("ls | grep py")

        self.assertTrue(success)
        self.assertEqual(stdout, "command output")
        self.assertEqual(stderr, "")

        # The whole line goes to the shell, pipes included
        mock_popen.assert_called_once()
        args, kwargs = mock_popen.call_args
        self.assertEqual(args[0], "ls | grep py")
        self.assertTrue(kwargs["shell"])
        self.assertEqual(kwargs["executable"], "/bin/bash")

    @patch('nlsh.executor.subprocess.Popen')
    def test_execute_command_failure(self, mock_popen):
        """Test failed command execution."""
        process_mock = MagicMock()
        process_mock.returncode = 1
        process_mock.communicate.return_value = ("", "command error")
        mock_popen.return_value = process_mock

        success, stdout, stderr = self.executor.execute_command("invalid_command")

        self.assertFalse(success)
        self.assertEqual(stdout, "")
        self.assertEqual(stderr, "command error")

    @patch('nlsh.executor.subprocess.Popen')
    def test_execute_command_missing_shell(self, mock_popen):
        """A shell that cannot be started is reported as a failure."""
        mock_popen.side_effect = FileNotFoundError("No such file or directory: '/bin/nosuchshell'")

        success, stdout, stderr = self.executor.execute_command("ls")

        self.assertFalse(success)
        self.assertEqual(stdout, "")
        self.assertIn("nosuchshell", stderr)


if __name__ == "__main__":
    unittest.main()
