import unittest
from unittest.mock import patch

from nlsh.context import detect_system_context


class TestDetectSystemContext(unittest.TestCase):

    @patch("nlsh.context.platform.release", return_value="6.1.0")
    @patch("nlsh.context.platform.system", return_value="Linux")
    def test_describes_environment(self, _system, _release):
        context = detect_system_context({"SHELL": "/bin/zsh"}, cwd="/home/me/project")

        self.assertEqual(context, "OS: Linux 6.1.0; Shell: /bin/zsh; Working directory: /home/me/project")

    def test_unknown_shell(self):
        context = detect_system_context({}, cwd="/tmp")

        self.assertIn("Shell: unknown", context)
        self.assertTrue(context.endswith("Working directory: /tmp"))


if __name__ == "__main__":
    unittest.main()
