"""Core library: report schema, command builder, process runner, decoding."""

from cratemeta.core.command import (
    ALL_FEATURES,
    NO_DEFAULT_FEATURES,
    FeatureOption,
    MetadataCommand,
    resolve_executable,
)
from cratemeta.core.decode import check_graph, encode_metadata, parse_metadata
from cratemeta.core.errors import (
    CargoDecodeError,
    CargoEncodingError,
    CargoMetadataError,
    CargoProcessError,
    CargoToolError,
)
from cratemeta.core.models import (
    FORMAT_VERSION,
    DepKindInfo,
    Dependency,
    DependencyKind,
    Metadata,
    Node,
    NodeDep,
    Package,
    ResolveGraph,
    Target,
)
from cratemeta.core.runner import run
from cratemeta.core.version_req import VersionReq

__all__ = [
    "ALL_FEATURES",
    "NO_DEFAULT_FEATURES",
    "FeatureOption",
    "MetadataCommand",
    "resolve_executable",
    "check_graph",
    "encode_metadata",
    "parse_metadata",
    "CargoDecodeError",
    "CargoEncodingError",
    "CargoMetadataError",
    "CargoProcessError",
    "CargoToolError",
    "FORMAT_VERSION",
    "DepKindInfo",
    "Dependency",
    "DependencyKind",
    "Metadata",
    "Node",
    "NodeDep",
    "Package",
    "ResolveGraph",
    "Target",
    "run",
    "VersionReq",
]
