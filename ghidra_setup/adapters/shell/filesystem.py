"""
Filesystem adapter — privileged-aware moves and symlinks.

Operations run in-process when the destination directory is writable
by the current user, and fall back to ``sudo mv`` / ``sudo ln -sfn``
through the shell adapter otherwise (``/Applications`` and
``/Library/Java`` usually need it).
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from ghidra_setup.adapters.base import Adapter, ExecutionContext
from ghidra_setup.adapters.shell.command import ShellCommandAdapter
from ghidra_setup.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)

_VALID_OPS = {"move", "symlink"}


class FilesystemAdapter(Adapter):
    """Move bundles and create symlinks, escalating only when needed.

    Action params:
        operation (str): ``move`` or ``symlink``.
        source (str): For ``move``: the path to move. For ``symlink``:
            the link target.
        dest (str): For ``move``: destination path (full path, not a
            directory). For ``symlink``: the link path.
    """

    def __init__(self, shell: ShellCommandAdapter | None = None):
        self._shell = shell or ShellCommandAdapter()

    @property
    def name(self) -> str:
        return "filesystem"

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        operation = context.params.get("operation", "")
        if operation not in _VALID_OPS:
            return False, f"Unknown operation '{operation}'. Valid: {', '.join(sorted(_VALID_OPS))}"
        for key in ("source", "dest"):
            if not context.params.get(key):
                return False, f"Missing required param: '{key}'"
        if operation == "move" and not Path(context.params["source"]).exists():
            return False, f"Source does not exist: {context.params['source']}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        operation = context.params["operation"]
        source = Path(context.params["source"])
        dest = Path(context.params["dest"])

        # Only an existing link may be replaced; `ln -sfn` would nest into a directory
        if operation == "symlink" and dest.exists() and not dest.is_symlink():
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Refusing to replace {dest}: it exists and is not a symlink",
                metadata={"operation": operation, "source": str(source), "dest": str(dest)},
            )

        if _writable(dest.parent):
            try:
                if operation == "move":
                    shutil.move(str(source), str(dest))
                else:
                    if dest.is_symlink():
                        dest.unlink()
                    dest.symlink_to(source)
            except OSError as e:
                return Receipt.failure(
                    adapter=self.name,
                    action_id=context.action.id,
                    error=f"Filesystem error: {e}",
                    metadata={"operation": operation, "source": str(source), "dest": str(dest)},
                )
            return Receipt.success(
                adapter=self.name,
                action_id=context.action.id,
                output=f"{operation}: {source} → {dest}",
                metadata={"operation": operation, "privileged": False},
            )

        logger.info("%s needs elevated privileges (%s not writable)", operation, dest.parent)
        command = (
            ["mv", str(source), str(dest)]
            if operation == "move"
            else ["ln", "-sfn", str(source), str(dest)]
        )
        escalated = self._shell.execute(ExecutionContext(
            action=Action(
                id=context.action.id,
                params={"command": command, "needs_sudo": True},
            ),
            env=context.env,
            timeout=context.timeout,
        ))
        escalated.adapter = self.name
        escalated.metadata.update({"operation": operation, "privileged": True})
        return escalated


def _writable(directory: Path) -> bool:
    return directory.is_dir() and os.access(directory, os.W_OK)
