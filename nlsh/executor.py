import logging
import os
import subprocess
import platform
from typing import Optional, Tuple

# Configure logging
logger = logging.getLogger(__name__)


class CommandExecutor:
    """Runs generated commands through the user's shell."""

    def __init__(self, shell: Optional[str] = None):
        self.shell = shell or os.environ.get("SHELL")

    def execute_command(self, command: str) -> Tuple[bool, str, str]:
        """
        Execute a single shell command.

        Generated commands may use pipes, globs and redirections, so they are
        handed to a shell rather than split into arguments.

        Args:
            command: The shell command to execute

        Returns:
            Tuple of (success, stdout, stderr)
        """
        logger.info(f"Executing command: {command}")

        try:
            # On Windows, let cmd.exe run it
            executable = None if platform.system() == "Windows" else self.shell
            process = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                shell=True,
                executable=executable,
            )

            stdout, stderr = process.communicate()
            success = process.returncode == 0

            if success:
                logger.info(f"Command executed successfully: {command}")
            else:
                logger.error(f"Command failed with return code {process.returncode}: {command}")
                logger.error(f"stderr: {stderr}")

            return success, stdout, stderr

        except OSError as e:
            logger.exception(f"Error executing command '{command}': {str(e)}")
            return False, "", str(e)
