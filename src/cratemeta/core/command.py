"""Build the ``cargo metadata`` command line."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from cratemeta.core.models import FORMAT_VERSION, Metadata
from cratemeta.core.runner import run

# Environment variable cargo sets for its subcommands and build scripts.
CARGO_ENV = "CARGO"
DEFAULT_CARGO = "cargo"


@dataclass(frozen=True)
class FeatureOption:
    """One feature-selection flag passed to cargo."""

    flag: str
    names: tuple[str, ...] = ()

    @classmethod
    def some(cls, *names: str) -> FeatureOption:
        """Activate the given features (``--features a,b``)."""
        if not names:
            raise ValueError("at least one feature name is required")
        return cls("--features", tuple(names))

    def args(self) -> list[str]:
        if self.names:
            return [self.flag, ",".join(self.names)]
        return [self.flag]


ALL_FEATURES = FeatureOption("--all-features")
NO_DEFAULT_FEATURES = FeatureOption("--no-default-features")


def resolve_executable(
    explicit: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """
    Pick the cargo executable to run.

    An explicit path wins, then the CARGO environment variable, then plain
    ``cargo`` looked up on PATH when the process is spawned.
    """
    if explicit is not None:
        return os.fspath(explicit)
    env = os.environ if environ is None else environ
    return env.get(CARGO_ENV) or DEFAULT_CARGO


@dataclass(frozen=True)
class MetadataCommand:
    """
    Immutable description of one ``cargo metadata`` invocation.

    Every setter returns a new command, so a configured command can be shared
    and reused freely::

        meta = MetadataCommand().manifest_path("Cargo.toml").include_dependencies().exec()

    Commands compare by value and hash without ``extra_env``.
    """

    cargo: str | None = None
    manifest: str | None = None
    cwd: Path | None = None
    with_deps: bool = False
    feature_options: tuple[FeatureOption, ...] = ()
    extra_args: tuple[str, ...] = ()
    extra_env: Mapping[str, str] = field(default_factory=dict, hash=False)

    def cargo_path(self, path: str | os.PathLike[str]) -> MetadataCommand:
        """Run this executable instead of $CARGO / ``cargo``."""
        return replace(self, cargo=os.fspath(path))

    def manifest_path(self, path: str | os.PathLike[str]) -> MetadataCommand:
        """Point cargo at a specific Cargo.toml instead of letting it search."""
        return replace(self, manifest=os.fspath(path))

    def current_dir(self, path: str | os.PathLike[str]) -> MetadataCommand:
        """Spawn cargo in this directory."""
        return replace(self, cwd=Path(path))

    def include_dependencies(self, flag: bool = True) -> MetadataCommand:
        """Let cargo resolve dependencies, which fills in ``Metadata.resolve``."""
        return replace(self, with_deps=flag)

    def no_deps(self) -> MetadataCommand:
        """Only report workspace members (``--no-deps``); this is the default."""
        return replace(self, with_deps=False)

    def features(self, *options: FeatureOption) -> MetadataCommand:
        """
        Add feature-selection flags.

        Named feature sets accumulate into a single ``--features`` flag;
        repeating ``--all-features`` or ``--no-default-features`` is an error.
        """
        combined: list[FeatureOption] = []
        for option in self.feature_options + options:
            previous = next((opt for opt in combined if opt.flag == option.flag), None)
            if previous is None:
                combined.append(option)
            elif option.names:
                names = tuple(dict.fromkeys(previous.names + option.names))
                combined[combined.index(previous)] = replace(previous, names=names)
            else:
                raise ValueError(f"feature option {option.flag} given more than once")
        return replace(self, feature_options=tuple(combined))

    def other_options(self, *args: str) -> MetadataCommand:
        """Append arbitrary cargo flags, e.g. ``--offline`` or ``--locked``."""
        return replace(self, extra_args=self.extra_args + tuple(args))

    def env(self, **variables: str) -> MetadataCommand:
        """Set environment variables for the cargo process, on top of ours."""
        return replace(self, extra_env={**self.extra_env, **variables})

    def argv(self, environ: Mapping[str, str] | None = None) -> list[str]:
        """Render the full command line. Does not touch the filesystem."""
        args = [resolve_executable(self.cargo, environ), "metadata"]
        if not self.with_deps:
            args.append("--no-deps")
        args.extend(["--format-version", str(FORMAT_VERSION)])
        for option in self.feature_options:
            args.extend(option.args())
        if self.manifest is not None:
            args.extend(["--manifest-path", self.manifest])
        args.extend(self.extra_args)
        return args

    def exec(self) -> Metadata:
        """Run cargo and decode its report."""
        return run(self)
