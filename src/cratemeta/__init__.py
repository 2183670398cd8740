"""cratemeta: typed access to the output of ``cargo metadata``."""

from importlib.metadata import version, PackageNotFoundError

from cratemeta.api import metadata, metadata_deps
from cratemeta.core import (
    ALL_FEATURES,
    NO_DEFAULT_FEATURES,
    CargoDecodeError,
    CargoEncodingError,
    CargoMetadataError,
    CargoProcessError,
    CargoToolError,
    Dependency,
    DependencyKind,
    FeatureOption,
    Metadata,
    MetadataCommand,
    Node,
    Package,
    ResolveGraph,
    Target,
    VersionReq,
    encode_metadata,
    parse_metadata,
)

__all__ = [
    "metadata",
    "metadata_deps",
    "MetadataCommand",
    "FeatureOption",
    "ALL_FEATURES",
    "NO_DEFAULT_FEATURES",
    "Metadata",
    "Package",
    "Target",
    "Dependency",
    "DependencyKind",
    "ResolveGraph",
    "Node",
    "VersionReq",
    "parse_metadata",
    "encode_metadata",
    "CargoMetadataError",
    "CargoProcessError",
    "CargoEncodingError",
    "CargoToolError",
    "CargoDecodeError",
    "__version__",
]

try:
    __version__ = version("cratemeta")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
