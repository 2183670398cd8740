"""Public API: the two one-call entry points, for callers that need no other options."""

from __future__ import annotations

import os

from cratemeta.core.command import MetadataCommand
from cratemeta.core.models import Metadata


def metadata(manifest_path: str | os.PathLike[str] | None = None) -> Metadata:
    """
    Metadata for the workspace only, without resolving dependencies.

    Args:
        manifest_path: Cargo.toml to read; None lets cargo search from the
            current directory.

    Returns:
        The decoded report; ``resolve`` is None.
    """
    return metadata_deps(manifest_path, deps=False)


def metadata_deps(
    manifest_path: str | os.PathLike[str] | None = None,
    deps: bool = False,
) -> Metadata:
    """
    Metadata for the workspace, optionally with the resolved dependency graph.

    Args:
        manifest_path: Cargo.toml to read; None lets cargo search from the
            current directory.
        deps: If True, cargo resolves dependencies and the report includes
            every package in the closure plus ``resolve``.

    Raises:
        CargoMetadataError: any failure; see ``cratemeta.core.errors``.
    """
    command = MetadataCommand().include_dependencies(deps)
    if manifest_path is not None:
        command = command.manifest_path(manifest_path)
    return command.exec()
