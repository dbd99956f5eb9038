"""Run the cluster tool as a child process and classify how it ended."""
import logging
import subprocess
from typing import List, Optional, Sequence

from gatewayctl.config import Config
from gatewayctl.modules.errors import ErrorKind, ExecutionError
from gatewayctl.modules.models import CommandResult

logger = logging.getLogger(__name__)


class CommandExecutor:
    """Spawns exactly one process per call. No retries, no pooling.

    Commands are always argument vectors and are never handed to a shell, so
    nothing inside an argument can be interpreted as shell syntax.
    """

    def __init__(self, binary: Optional[str] = None, timeout: Optional[float] = None):
        self.binary = binary or Config.KUBECTL
        self.timeout = timeout if timeout is not None else Config.COMMAND_TIMEOUT

    def kubectl(self, *args: str, **kwargs) -> CommandResult:
        """Run the configured cluster tool with ``args``."""
        return self.run([self.binary, *args], **kwargs)

    def run(
        self,
        cmd: Sequence[str],
        *,
        timeout: Optional[float] = None,
        check: bool = True,
        input_data: Optional[str] = None,
    ) -> CommandResult:
        """Run ``cmd`` and capture its output.

        Args:
            cmd: Full argument vector, program first
            timeout: Seconds before the child is killed (default: executor timeout)
            check: Raise NON_ZERO_EXIT instead of returning a failed result
            input_data: Text written to the child's stdin

        Returns:
            CommandResult with stdout, stderr and the exit status

        Raises:
            ExecutionError: tool missing, timed out, I/O failure, or (with
                ``check``) a non-zero exit
        """
        args: List[str] = [str(part) for part in cmd]
        limit = self.timeout if timeout is None else timeout
        cmd_str = ' '.join(args)
        logger.debug(f"💻 Running: {cmd_str} (timeout={limit}s)")

        try:
            # subprocess.run kills the child before raising TimeoutExpired.
            # Undecodable output bytes become U+FFFD instead of raising.
            completed = subprocess.run(
                args,
                input=input_data,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=limit,
                check=False,
            )
        except FileNotFoundError as e:
            logger.error(f"❌ Command not found: {args[0]}")
            raise ExecutionError(
                ErrorKind.TOOL_NOT_FOUND, f"Command not found: {args[0]}"
            ) from e
        except subprocess.TimeoutExpired as e:
            logger.error(f"⏱️ Command timed out after {limit}s: {cmd_str}")
            raise ExecutionError(
                ErrorKind.TIMEOUT, f"Command timed out after {limit}s: {cmd_str}"
            ) from e
        except OSError as e:
            logger.error(f"❌ Could not run {cmd_str}: {e}")
            raise ExecutionError(ErrorKind.IO_ERROR, f"Could not run {cmd_str}: {e}") from e

        result = CommandResult(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        logger.debug(f"🟢 Exit {result.returncode}, {len(result.stdout)} bytes of output")

        if check and not result.succeeded:
            stderr = result.stderr.strip()
            logger.warning(
                f"Command failed: {cmd_str} (exit code: {result.returncode})"
                + (f"\nStderr:\n{stderr}" if stderr else "")
            )
            raise ExecutionError(
                ErrorKind.NON_ZERO_EXIT,
                stderr or f"Command failed: {cmd_str} (exit code: {result.returncode})",
                stderr=result.stderr,
                returncode=result.returncode,
            )
        return result
