"""RegImporter — pushes a .reg file into the registry with ``reg import``."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable

from .document import Document
from .errors import ApplyError, InputError
from .settings import get_settings

logger = logging.getLogger(__name__)

VIEWS = ("32", "64")


class RegImporter:
    """Run ``<executable> import <file> /reg:<view>``.

    *runner* has the signature of ``subprocess.run``.
    """

    def __init__(
        self,
        executable: str | None = None,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self.executable = executable or get_settings().reg_executable
        self._run = runner

    def command(self, path: Path, view: str) -> list[str]:
        if view not in VIEWS:
            raise ValueError(f"view must be '32' or '64', not {view!r}")
        return [self.executable, "import", str(path), f"/reg:{view}"]

    def apply(self, target: Document | str | Path, view: str | None = None) -> None:
        """Import *target*, a .reg path or a Document read from a file."""
        view = view or get_settings().default_view
        if isinstance(target, Document):
            if target.source is None:
                raise InputError("document was not read from a file and cannot be imported")
            path = target.source
        else:
            path = Path(target)
        if not path.is_file():
            raise InputError(f"no such file: {path}")

        cmd = self.command(path, view)
        logger.info("Importing %s (%s-bit view)", path, view)
        try:
            proc = self._run(cmd, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ApplyError(f"cannot run {self.executable}: {exc}") from exc
        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout or "").strip()
            raise ApplyError(f"{' '.join(cmd)} exited with {proc.returncode}: {detail}")
        logger.debug("Import of %s finished", path)
