"""Turn the raw output of ``cargo metadata`` into a Metadata graph."""

from __future__ import annotations

import msgspec

from cratemeta.core.errors import CargoDecodeError, CargoEncodingError
from cratemeta.core.models import FORMAT_VERSION, Metadata

_decoder = msgspec.json.Decoder(Metadata)
_encoder = msgspec.json.Encoder()


def _to_text(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise CargoEncodingError(f"cargo metadata output is not valid UTF-8: {exc}") from exc


def check_graph(metadata: Metadata) -> None:
    """
    Check the cross references inside a decoded report.

    Package ids must be unique, every workspace member must be a package, and
    when a resolve graph is present every node and every edge must point at a
    known package or node. Raises CargoDecodeError on the first violation.
    """
    package_ids: set[str] = set()
    for package in metadata.packages:
        if package.id in package_ids:
            raise CargoDecodeError.inconsistent(f"duplicate package id {package.id!r}")
        package_ids.add(package.id)

    for member in metadata.workspace_members:
        if member not in package_ids:
            raise CargoDecodeError.inconsistent(
                f"workspace member {member!r} is not among the packages"
            )

    if metadata.resolve is None:
        return
    known = package_ids | {node.id for node in metadata.resolve.nodes}
    for node in metadata.resolve.nodes:
        if node.id not in package_ids:
            raise CargoDecodeError.inconsistent(f"resolve node {node.id!r} has no package")
        targets = list(node.dependencies) + [dep.pkg for dep in node.deps]
        for dep_id in targets:
            if dep_id not in known:
                raise CargoDecodeError.inconsistent(
                    f"resolve node {node.id!r} depends on unknown id {dep_id!r}"
                )
    root = metadata.resolve.root
    if root is not None and root not in package_ids:
        raise CargoDecodeError.inconsistent(f"resolve root {root!r} has no package")


def parse_metadata(data: bytes | str) -> Metadata:
    """
    Decode a complete ``cargo metadata --format-version 1`` document.

    Raises:
        CargoEncodingError: ``data`` is bytes but not UTF-8.
        CargoDecodeError: the text is not JSON, does not match the schema,
            has another format version, or its package graph is inconsistent.
    """
    text = _to_text(data)
    try:
        metadata = _decoder.decode(text)
    except msgspec.ValidationError as exc:
        raise CargoDecodeError(f"cargo metadata output does not match the schema: {exc}") from exc
    except msgspec.DecodeError as exc:
        raise CargoDecodeError(f"cargo metadata output is not valid JSON: {exc}") from exc
    if metadata.schema_version != FORMAT_VERSION:
        raise CargoDecodeError.unsupported_version(metadata.schema_version, FORMAT_VERSION)
    check_graph(metadata)
    return metadata


def encode_metadata(metadata: Metadata) -> bytes:
    """Render a Metadata graph back to JSON that parse_metadata accepts."""
    return _encoder.encode(metadata)
