"""Target framework moniker resolution (``net461``, ``netstandard2.0``, ``net8.0``, ...)."""

from __future__ import annotations

from collections.abc import Iterable

# identifier (lower-cased) -> (moniker prefix, remove dots from version)
_IDENTIFIER_MONIKERS: dict[str, tuple[str, bool]] = {
    ".netframework": ("net", True),
    ".netstandard": ("netstandard", False),
    ".netcoreapp": ("netcoreapp", False),
    ".netcore": ("netcore", True),
    "windowsphone": ("wp", True),
    "windowsphoneapp": ("wpa", True),
    "silverlight": ("sl", True),
}

_DEFAULT_IDENTIFIER = ".NETFramework"


def get_target_framework(identifier: str | None, version: str | None) -> str | None:
    """Normalize a ``TargetFrameworkIdentifier`` / ``TargetFrameworkVersion`` pair.

    Returns None when there is no version or the identifier is unknown.
    """
    if not version or not version.strip():
        return None
    if not identifier or not identifier.strip():
        identifier = _DEFAULT_IDENTIFIER

    moniker = _IDENTIFIER_MONIKERS.get(identifier.strip().lower())
    if moniker is None:
        return None
    prefix, remove_dots = moniker

    version = version.strip().lstrip("vV")
    if prefix == "netcoreapp":
        # .NET 5 and later dropped the "coreapp" part of the moniker
        major = version.split(".", 1)[0]
        if major.isdigit() and int(major) >= 5:
            prefix = "net"
    if remove_dots:
        version = version.replace(".", "")
    return f"{prefix}{version}"


def get_target_frameworks(
    target_frameworks: Iterable[str | None] | None,
    target_framework: Iterable[str | None] | None,
    identifier_versions: Iterable[tuple[str | None, str | None]] | None,
) -> list[str]:
    """
    Resolve every target framework a project declares.

    Explicit ``TargetFrameworks`` (semicolon separated) and ``TargetFramework``
    values take precedence. Only when neither yields anything are the
    identifier/version pairs normalized into monikers.
    """
    explicit: list[str] = []
    for value in target_frameworks or ():
        if value:
            explicit.extend(v.strip() for v in value.split(";") if v.strip())
    for value in target_framework or ():
        if value and value.strip():
            explicit.append(value.strip())
    if explicit:
        return list(dict.fromkeys(explicit))

    resolved: list[str] = []
    for identifier, version in identifier_versions or ():
        moniker = get_target_framework(identifier, version)
        if moniker is not None and moniker not in resolved:
            resolved.append(moniker)
    return resolved


def resolve_target_framework(
    explicit: str | None,
    identifier_versions: Iterable[tuple[str | None, str | None]],
) -> str | None:
    """Return the single target framework of one build unit, or None."""
    frameworks = get_target_frameworks(None, [explicit], identifier_versions)
    return frameworks[0] if frameworks else None
