"""Typed schema for the JSON report printed by ``cargo metadata --format-version 1``."""

from __future__ import annotations

import enum
from typing import Any

import msgspec

from cratemeta.core.version_req import VersionReq

# The only report layout this package understands.
FORMAT_VERSION = 1


class _Schema(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    forbid_unknown_fields=False,
):
    """
    Base for report structs: immutable, and blind to members it does not declare.

    Frozen does not mean hashable here. Structs holding a dict (Package.features,
    Package.metadata, and everything containing a Package) raise TypeError
    from hash(); Target, Dependency and the resolve structs hash fine.
    """


class DependencyKind(enum.Enum):
    """Which section of the manifest a dependency was declared in."""

    NORMAL = "normal"
    DEVELOPMENT = "dev"
    BUILD = "build"


def _kind_or_normal(kind: DependencyKind | None) -> DependencyKind:
    # cargo reports normal dependencies with a null kind
    return DependencyKind.NORMAL if kind is None else kind


class Dependency(_Schema, kw_only=True):
    """A dependency as declared in a package's manifest."""

    name: str
    req: str
    kind: DependencyKind | None = None
    optional: bool = False
    uses_default_features: bool = True
    features: tuple[str, ...] = ()
    target: str | None = None
    rename: str | None = None
    source: str | None = None
    registry: str | None = None
    path: str | None = None

    def __post_init__(self) -> None:
        msgspec.structs.force_setattr(self, "kind", _kind_or_normal(self.kind))

    @property
    def requirement(self) -> VersionReq:
        """The version requirement as a matchable value."""
        return VersionReq(self.req)


class Target(_Schema, kw_only=True):
    """A single compilable artifact (lib, bin, example, test, bench) of a package."""

    name: str
    kind: tuple[str, ...]
    # Differs from kind for library examples: kind is ("example",), crate_types ("rlib",)
    crate_types: tuple[str, ...] = ()
    src_path: str
    required_features: tuple[str, ...] = msgspec.field(default=(), name="required-features")
    edition: str | None = None
    doctest: bool | None = None
    test: bool | None = None
    doc: bool | None = None

    def has_kind(self, kind: str) -> bool:
        return kind in self.kind


class Package(_Schema, kw_only=True):
    """One crate known to cargo: a workspace member or a dependency."""

    name: str
    version: str
    id: str
    source: str | None = None
    dependencies: tuple[Dependency, ...]
    targets: tuple[Target, ...]
    features: dict[str, tuple[str, ...]]
    manifest_path: str
    description: str | None = None
    license: str | None = None
    license_file: str | None = None
    authors: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    readme: str | None = None
    repository: str | None = None
    homepage: str | None = None
    documentation: str | None = None
    edition: str | None = None
    links: str | None = None
    rust_version: str | None = None
    publish: tuple[str, ...] | None = None
    default_run: str | None = None
    # Free-form [package.metadata] table
    metadata: Any = None

    @property
    def is_local(self) -> bool:
        """True for path packages, which cargo reports without a source."""
        return self.source is None

    def targets_of_kind(self, kind: str) -> list[Target]:
        """Targets with the given kind, in declaration order."""
        return [t for t in self.targets if t.has_kind(kind)]

    def lib_target(self) -> Target | None:
        """The library target, if the package has one."""
        for target in self.targets:
            if target.has_kind("lib") or "lib" in target.crate_types:
                return target
        return None


class DepKindInfo(_Schema, kw_only=True):
    """Kind (and platform) under which a resolved dependency edge applies."""

    kind: DependencyKind | None = None
    target: str | None = None

    def __post_init__(self) -> None:
        msgspec.structs.force_setattr(self, "kind", _kind_or_normal(self.kind))


class NodeDep(_Schema, kw_only=True):
    """A resolved dependency edge, with the name it is known by in the dependent crate."""

    name: str
    pkg: str
    dep_kinds: tuple[DepKindInfo, ...] = ()


class Node(_Schema, kw_only=True):
    """A package in the resolved dependency graph."""

    id: str
    dependencies: tuple[str, ...] = ()
    deps: tuple[NodeDep, ...] = ()
    features: tuple[str, ...] = ()


class ResolveGraph(_Schema, kw_only=True):
    """The dependency closure cargo computed; absent when run with ``--no-deps``."""

    nodes: tuple[Node, ...]
    root: str | None = None

    def node(self, package_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == package_id:
                return node
        return None


class Metadata(_Schema, kw_only=True):
    """Root of a ``cargo metadata`` report."""

    packages: tuple[Package, ...]
    workspace_members: tuple[str, ...] = ()
    resolve: ResolveGraph | None = None
    schema_version: int = msgspec.field(name="version")
    workspace_root: str | None = None
    target_directory: str | None = None

    def __getitem__(self, package_id: str) -> Package:
        for package in self.packages:
            if package.id == package_id:
                return package
        raise KeyError(package_id)

    def package(self, package_id: str) -> Package | None:
        """Look up a package by its opaque id."""
        try:
            return self[package_id]
        except KeyError:
            return None

    def workspace_packages(self) -> list[Package]:
        """Workspace member packages, in ``workspace_members`` order."""
        return [self[member] for member in self.workspace_members]

    def root_package(self) -> Package | None:
        """
        The package cargo treats as the root of the request.

        Uses the resolve graph's root when dependencies were resolved; otherwise
        the workspace's only member, if it has exactly one.
        """
        if self.resolve is not None and self.resolve.root is not None:
            return self.package(self.resolve.root)
        if len(self.workspace_members) == 1:
            return self.package(self.workspace_members[0])
        return None


__all__ = [
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
]
