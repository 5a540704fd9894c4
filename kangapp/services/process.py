"""External command execution for package managers and lint tools."""
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from kangapp.core.logger import get_logger

logger = get_logger(__name__)


class ProcessFailure(Exception):
    """Raised when an external command exits non-zero or cannot start."""

    def __init__(
        self,
        command: str,
        args: Sequence[str],
        returncode: Optional[int] = None,
        stderr: str = "",
        reason: str = "",
    ):
        self.command = command
        self.arguments = list(args)
        self.returncode = returncode
        self.stderr = stderr
        self.reason = reason

        cmdline = " ".join([command, *self.arguments])
        if reason:
            message = f"'{cmdline}' failed: {reason}"
        else:
            message = f"'{cmdline}' exited with status {returncode}"
        if stderr:
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class ProcessGateway:
    """Runs external commands inside a project directory.

    Commands block until they exit. A non-zero exit status, a missing
    executable or a timeout is reported as ProcessFailure.
    """

    def __init__(self, mock: bool = False, timeout: Optional[float] = None):
        """Initialize gateway.

        Args:
            mock: Log commands instead of running them
            timeout: Seconds before a command is killed (None = wait until it exits)
        """
        self.mock = mock
        self.timeout = timeout

    def spawn(self, command: Union[str, Path], args: Sequence[str], cwd: Path) -> bool:
        """Run command with args in cwd.

        Args:
            command: Executable name or path
            args: Command arguments
            cwd: Working directory

        Returns:
            True when the command exits with status 0

        Raises:
            ProcessFailure: If the command fails for any reason
        """
        command = str(command)
        args = [str(a) for a in args]
        cmdline = " ".join([command, *args])

        if self.mock:
            logger.info(f"MOCK: Would run '{cmdline}' in {cwd}")
            return True

        logger.debug(f"Running '{cmdline}' in {cwd}")

        try:
            subprocess.run(
                [command, *args],
                cwd=str(cwd),
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as e:
            logger.debug(f"'{cmdline}' exited with status {e.returncode}")
            if e.stderr:
                logger.debug(f"Error output: {e.stderr}")
            raise ProcessFailure(command, args, returncode=e.returncode, stderr=e.stderr or "") from e
        except subprocess.TimeoutExpired as e:
            raise ProcessFailure(command, args, reason=f"timed out after {e.timeout}s") from e
        except FileNotFoundError as e:
            raise ProcessFailure(command, args, reason="command not found") from e
        except OSError as e:
            raise ProcessFailure(command, args, reason=str(e)) from e

        return True
