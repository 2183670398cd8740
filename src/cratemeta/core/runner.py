"""Run ``cargo metadata`` and classify how it failed, if it did."""

from __future__ import annotations

import os
import subprocess
import typing as typ

from cratemeta.core.decode import parse_metadata
from cratemeta.core.errors import CargoProcessError, CargoToolError
from cratemeta.log import get_logger

if typ.TYPE_CHECKING:
    from cratemeta.core.command import MetadataCommand
    from cratemeta.core.models import Metadata

logger = get_logger("runner")


def run(command: MetadataCommand) -> Metadata:
    """
    Spawn cargo for ``command``, wait for it, and decode its report.

    Both output streams are buffered in full. The exit status is checked
    before stdout is looked at: a failing cargo prints its diagnostic on
    stderr and little or nothing on stdout.

    Raises:
        CargoProcessError: cargo could not be started.
        CargoToolError: cargo exited non-zero; carries its trimmed stderr.
        CargoEncodingError: stdout is not UTF-8.
        CargoDecodeError: stdout is not a valid metadata report.
    """
    argv = command.argv()
    env = {**os.environ, **command.extra_env} if command.extra_env else None
    logger.debug("running %s (cwd=%s)", " ".join(argv), command.cwd or ".")
    try:
        completed = subprocess.run(
            argv,
            cwd=command.cwd,
            env=env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise CargoProcessError(argv[0], exc.strerror or str(exc)) from exc

    logger.debug(
        "%s exited with status %d (%d bytes of output)",
        argv[0],
        completed.returncode,
        len(completed.stdout),
    )
    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace")
        raise CargoToolError(stderr.strip(), completed.returncode)
    return parse_metadata(completed.stdout)
