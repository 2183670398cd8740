"""Tests for building the cargo metadata command line."""

from __future__ import annotations

from pathlib import Path

import pytest

from cratemeta.core.command import (
    ALL_FEATURES,
    NO_DEFAULT_FEATURES,
    FeatureOption,
    MetadataCommand,
    resolve_executable,
)


class TestResolveExecutable:
    """Choosing which cargo to run."""

    def test_default_name(self) -> None:
        """Test that plain cargo is used when nothing overrides it."""
        assert resolve_executable(environ={}) == "cargo"

    def test_env_override(self) -> None:
        """Test that $CARGO replaces the default name."""
        assert resolve_executable(environ={"CARGO": "/opt/rust/bin/cargo"}) == "/opt/rust/bin/cargo"

    def test_empty_env_value_ignored(self) -> None:
        """Test that an empty $CARGO counts as unset."""
        assert resolve_executable(environ={"CARGO": ""}) == "cargo"

    def test_explicit_beats_env(self) -> None:
        """Test that an explicit path wins over $CARGO."""
        path = Path("/custom/cargo")
        assert resolve_executable(path, environ={"CARGO": "/env/cargo"}) == str(path)

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that os.environ is consulted when no mapping is given."""
        monkeypatch.setenv("CARGO", "/from/env/cargo")
        assert resolve_executable() == "/from/env/cargo"


class TestArgv:
    """Rendering options into arguments."""

    def test_defaults(self) -> None:
        """Test the argument vector of an unconfigured command."""
        assert MetadataCommand().argv(environ={}) == [
            "cargo",
            "metadata",
            "--no-deps",
            "--format-version",
            "1",
        ]

    def test_with_dependencies(self) -> None:
        """Test that including dependencies drops --no-deps."""
        argv = MetadataCommand().include_dependencies().argv(environ={})
        assert argv == ["cargo", "metadata", "--format-version", "1"]

    def test_no_deps_after_include(self) -> None:
        """Test that no_deps() undoes include_dependencies()."""
        argv = MetadataCommand().include_dependencies().no_deps().argv(environ={})
        assert "--no-deps" in argv

    def test_include_dependencies_false(self) -> None:
        """Test that include_dependencies(False) keeps --no-deps."""
        argv = MetadataCommand().include_dependencies(False).argv(environ={})
        assert "--no-deps" in argv

    def test_manifest_path(self) -> None:
        """Test that a manifest path is rendered as a flag/value pair."""
        argv = MetadataCommand().manifest_path(Path("ws/Cargo.toml")).argv(environ={})
        assert argv[-2:] == ["--manifest-path", str(Path("ws/Cargo.toml"))]

    def test_cargo_path(self) -> None:
        """Test that cargo_path() sets the executable."""
        argv = MetadataCommand().cargo_path("/x/cargo").argv(environ={"CARGO": "/y/cargo"})
        assert argv[0] == "/x/cargo"

    def test_env_cargo(self) -> None:
        """Test that $CARGO is used when no cargo_path() is set."""
        assert MetadataCommand().argv(environ={"CARGO": "/y/cargo"})[0] == "/y/cargo"

    def test_all_features(self) -> None:
        """Test that ALL_FEATURES renders --all-features after the format version."""
        argv = MetadataCommand().features(ALL_FEATURES).argv(environ={})
        assert argv == ["cargo", "metadata", "--no-deps", "--format-version", "1", "--all-features"]

    def test_some_features_and_no_default(self) -> None:
        """Test that named features render comma-separated next to --no-default-features."""
        argv = (
            MetadataCommand()
            .features(NO_DEFAULT_FEATURES, FeatureOption.some("serde", "std"))
            .argv(environ={})
        )
        assert argv[5:] == ["--no-default-features", "--features", "serde,std"]

    def test_duplicate_feature_flag_rejected(self) -> None:
        """Test that repeating a boolean feature flag raises ValueError."""
        command = MetadataCommand().features(ALL_FEATURES)
        with pytest.raises(ValueError, match="--all-features"):
            command.features(ALL_FEATURES)

    def test_duplicate_no_default_rejected_in_one_call(self) -> None:
        """Test that --no-default-features twice in one call raises ValueError."""
        with pytest.raises(ValueError, match="--no-default-features"):
            MetadataCommand().features(NO_DEFAULT_FEATURES, NO_DEFAULT_FEATURES)

    def test_named_features_merge_across_calls(self) -> None:
        """Test that feature sets from several calls merge into one --features flag."""
        command = (
            MetadataCommand()
            .features(FeatureOption.some("a"))
            .features(ALL_FEATURES, FeatureOption.some("b", "a"))
            .features(FeatureOption.some("c"))
        )
        argv = command.argv(environ={})
        assert argv[5:] == ["--features", "a,b,c", "--all-features"]
        assert argv.count("--features") == 1

    def test_some_requires_names(self) -> None:
        """Test that FeatureOption.some() needs at least one name."""
        with pytest.raises(ValueError):
            FeatureOption.some()

    def test_other_options_last(self) -> None:
        """Test that other options follow the manifest path in call order."""
        argv = (
            MetadataCommand()
            .manifest_path("Cargo.toml")
            .other_options("--offline")
            .other_options("--locked")
            .argv(environ={})
        )
        assert argv[-4:] == ["--manifest-path", "Cargo.toml", "--offline", "--locked"]


class TestImmutability:
    """Setters return new commands and leave the original alone."""

    def test_setters_copy(self, tmp_path: Path) -> None:
        """Test that chained setters build a new command and keep the base unchanged."""
        base = MetadataCommand()
        configured = (
            base.manifest_path("Cargo.toml")
            .current_dir(tmp_path)
            .include_dependencies()
            .env(CARGO_NET_OFFLINE="true")
        )
        assert base == MetadataCommand()
        assert configured.manifest == "Cargo.toml"
        assert configured.cwd == tmp_path
        assert configured.with_deps is True
        assert configured.extra_env == {"CARGO_NET_OFFLINE": "true"}

    def test_env_merges(self) -> None:
        """Test that later env() calls override earlier values."""
        command = MetadataCommand().env(A="1").env(B="2", A="3")
        assert command.extra_env == {"A": "3", "B": "2"}

    def test_frozen(self) -> None:
        """Test that fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            MetadataCommand().manifest = "x"  # type: ignore[misc]

    def test_hashable_with_env(self) -> None:
        """Test that a command with extra environment can be hashed and used as a key."""
        command = MetadataCommand().features(FeatureOption.some("a")).env(A="1")
        same = MetadataCommand().features(FeatureOption.some("a")).env(A="1")
        assert hash(command) == hash(same)
        assert {command: "cached"}[same] == "cached"

    def test_env_still_part_of_equality(self) -> None:
        """Test that commands differing only in environment are not equal."""
        assert MetadataCommand().env(A="1") != MetadataCommand().env(A="2")
