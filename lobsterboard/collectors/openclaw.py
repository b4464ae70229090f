"""OpenClaw CLI invoker.

Runs `openclaw <args>` synchronously with a hard timeout. Every other
collector reaches the CLI through `OpenClawCLI.run`, which never raises.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from typing import Optional

from .base import CollectorError
from ..log import log_event

logger = logging.getLogger(__name__)

CLI_TIMEOUT_SECONDS = 10
DEFAULT_EXECUTABLE = "openclaw"


class OpenClawCLI:
    """Thin wrapper around the `openclaw` executable.

    No retries and no backoff: a failed invocation is reported once and the
    caller decides what "unavailable" means for its resource.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE, timeout: int = CLI_TIMEOUT_SECONDS):
        self.executable = executable
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "openclaw"

    def is_available(self) -> bool:
        """Check if the executable can be found on PATH."""
        return shutil.which(self.executable) is not None

    def invoke(self, args: str) -> str:
        """Run the CLI and return stdout verbatim.

        Raises:
            CollectorError: On non-zero exit, timeout, or a missing executable.
        """
        cmd = [self.executable, *shlex.split(args)]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=True,
                timeout=self.timeout,
                stdin=subprocess.DEVNULL,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            detail = f"exit status {e.returncode}"
            if stderr:
                detail += f": {stderr}"
            raise CollectorError(self.name, detail, e)
        except subprocess.TimeoutExpired as e:
            raise CollectorError(self.name, f"timed out after {self.timeout}s", e)
        except FileNotFoundError as e:
            raise CollectorError(self.name, f"executable not found: {self.executable}", e)
        except OSError as e:
            raise CollectorError(self.name, f"unable to run: {e}", e)
        return result.stdout

    def run(self, args: str) -> Optional[str]:
        """Run the CLI, returning None instead of raising on failure."""
        try:
            return self.invoke(args)
        except CollectorError as exc:
            log_event(logger, logging.ERROR, f"{self.executable} {args} failed", error=str(exc))
            return None
