"""Cargo version requirements, matched with semantic_version."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property

from semantic_version import SimpleSpec, Version

_CLAUSE_RE = re.compile(r"^(?P<op>\^|~|==|=|>=|<=|>|<)?\s*(?P<version>\S+)$")
_PARTIAL_RE = re.compile(
    r"^(?P<major>\d+|[*xX])"
    r"(?:\.(?P<minor>\d+|[*xX]))?"
    r"(?:\.(?P<patch>\d+|[*xX]))?"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+[0-9A-Za-z.-]+)?$"
)
_WILDCARDS = ("*", "x", "X")
# Cargo reads ``*`` as any release version.
_ANY = ">=0.0.0"


def _clauses(requirement: str) -> list[tuple[str, str]]:
    """Split a requirement into (operator, version) pairs; an empty operator means caret."""
    text = requirement.strip()
    if text == "":
        return [("", "*")]
    clauses: list[tuple[str, str]] = []
    for raw in text.split(","):
        match = _CLAUSE_RE.match(raw.strip())
        if match is None:
            raise ValueError(f"invalid version requirement: {requirement!r}")
        clauses.append((match.group("op") or "", match.group("version")))
    return clauses


def _to_simple_spec(requirement: str) -> str:
    """Translate Cargo requirement syntax into semantic_version's SimpleSpec syntax."""
    parts: list[str] = []
    for op, version in _clauses(requirement):
        if version in _WILDCARDS:
            parts.append(_ANY)
            continue
        if op == "":
            # A bare version is a caret requirement in Cargo, unless it is a wildcard.
            op = "==" if any(w in version for w in _WILDCARDS) else "^"
        elif op == "=":
            op = "=="
        parts.append(f"{op}{version}")
    return ",".join(parts)


def _number(text: str | None) -> int | None:
    if text is None or text in _WILDCARDS:
        return None
    return int(text)


def _lowest(major: int, minor: int, patch: int) -> Version:
    """The first version of a release line, prereleases included (``X.Y.Z-0``)."""
    return Version(f"{major}.{minor}.{patch}-0")


def _prerelease_clause_matches(op: str, text: str, version: Version) -> bool:
    """Evaluate one clause for a prerelease version, with Cargo's partial-version bounds."""
    match = _PARTIAL_RE.match(text)
    if match is None:
        raise ValueError(f"invalid version in requirement: {text!r}")
    major = _number(match.group("major"))
    minor = _number(match.group("minor"))
    patch = _number(match.group("patch"))
    if major is None:
        return True
    pre = match.group("pre")
    floor = Version(f"{major}.{minor or 0}.{patch or 0}" + (f"-{pre}" if pre else ""))

    if minor is None:
        next_line = _lowest(major + 1, 0, 0)
    elif patch is None:
        next_line = _lowest(major, minor + 1, 0)
    else:
        next_line = None

    if op in ("", "^"):
        if minor is None or major > 0:
            upper = _lowest(major + 1, 0, 0)
        elif patch is None or minor > 0:
            upper = _lowest(0, minor + 1, 0)
        else:
            upper = _lowest(0, 0, patch + 1)
        return floor <= version < upper
    if op == "~":
        upper = _lowest(major + 1, 0, 0) if minor is None else _lowest(major, minor + 1, 0)
        return floor <= version < upper
    if op in ("=", "=="):
        return version == floor if next_line is None else floor <= version < next_line
    if op == ">":
        return version > floor if next_line is None else version >= next_line
    if op == ">=":
        return version >= floor
    if op == "<":
        return version < floor if next_line is None else version < _lowest(major, minor or 0, 0)
    # "<="
    return version <= floor if next_line is None else version < next_line


@dataclass(frozen=True)
class VersionReq:
    """
    A dependency's version requirement as written by cargo (e.g. ``">=1.0, <2.0"``).

    Release versions are matched with semantic_version's SimpleSpec. A
    prerelease version only matches when some clause names a prerelease of the
    same major.minor.patch, and is then checked against every clause the way
    Cargo bounds it.
    """

    raw: str

    def __str__(self) -> str:
        return self.raw

    @cached_property
    def spec(self) -> SimpleSpec:
        """The parsed requirement; raises ValueError for syntax semantic_version cannot read."""
        return SimpleSpec(_to_simple_spec(self.raw))

    def matches(self, version: str | Version) -> bool:
        """True if ``version`` satisfies this requirement."""
        if not isinstance(version, Version):
            version = Version(version)
        if version.prerelease:
            return self._matches_prerelease(version)
        return self.spec.match(version)

    def _matches_prerelease(self, version: Version) -> bool:
        clauses = _clauses(self.raw)
        release = (version.major, version.minor, version.patch)
        opted_in = False
        for _op, text in clauses:
            match = _PARTIAL_RE.match(text)
            if match is None or not match.group("pre"):
                continue
            named = tuple(_number(match.group(part)) for part in ("major", "minor", "patch"))
            if named == release:
                opted_in = True
                break
        if not opted_in:
            return False
        return all(_prerelease_clause_matches(op, text, version) for op, text in clauses)
