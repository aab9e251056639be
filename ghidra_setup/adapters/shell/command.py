"""
Shell command adapter — run external commands and capture output.

The SINGLE PLACE where ``subprocess.run`` is called for install
operations. Sudo prefixing, environment overrides, timeouts and
error capture all live here.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time

from ghidra_setup.adapters.base import Adapter, ExecutionContext
from ghidra_setup.core.models.action import Receipt

logger = logging.getLogger(__name__)

# Keep receipts small; brew can print thousands of lines
_OUTPUT_TAIL = 4000


class ShellCommandAdapter(Adapter):
    """Execute commands (argv lists, never a shell string) and capture output.

    Action params:
        command (list[str]): The command to execute.
        needs_sudo (bool): Prefix with ``sudo`` unless already root.
        interactive (bool): Inherit the terminal instead of capturing
            output (installers that prompt the user).
        merge_stderr (bool): Return stderr in ``output`` too
            (``java -version`` prints to stderr).
        timeout (int): Override the context timeout in seconds.
    """

    @property
    def name(self) -> str:
        return "shell"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        command = context.params.get("command")
        if not command:
            return False, "Missing required param: 'command'"
        if not isinstance(command, list) or not all(isinstance(c, str) for c in command):
            return False, "Param 'command' must be a list of strings"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.params
        command: list[str] = list(params["command"])
        timeout = params.get("timeout", context.timeout)
        interactive = params.get("interactive", False)

        if params.get("needs_sudo") and os.geteuid() != 0:
            command = ["sudo"] + command

        env = os.environ.copy()
        for key, value in context.env.items():
            env[key] = os.path.expandvars(value)

        logger.debug("Executing: %s", " ".join(command))
        start = time.monotonic()

        try:
            if interactive:
                result = subprocess.run(command, env=env, timeout=timeout)
                stdout, stderr = "", ""
            else:
                result = subprocess.run(
                    command,
                    capture_output=True,
                    text=True,
                    timeout=timeout,
                    env=env,
                )
                stdout = (result.stdout or "").strip()
                stderr = (result.stderr or "").strip()

            elapsed_ms = int((time.monotonic() - start) * 1000)
            output = stdout
            if params.get("merge_stderr") and stderr:
                output = f"{stdout}\n{stderr}".strip()

            if result.returncode == 0:
                return Receipt.success(
                    adapter=self.name,
                    action_id=context.action.id,
                    output=output[-_OUTPUT_TAIL:],
                    duration_ms=elapsed_ms,
                    return_code=0,
                    metadata={"command": command, "stderr": stderr[-_OUTPUT_TAIL:]},
                )
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=stderr[-_OUTPUT_TAIL:] or f"Command exited with code {result.returncode}",
                output=output[-_OUTPUT_TAIL:],
                duration_ms=elapsed_ms,
                return_code=result.returncode,
                metadata={"command": command},
            )

        except FileNotFoundError:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command not found: {command[0]}",
                return_code=127,
                metadata={"command": command, "not_found": True},
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": command, "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Command execution error: {e}",
                metadata={"command": command},
            )
