"""
Path resolution for local folders, UNC shares and mapped network drives.

Public API:
- `PathResolver`: `resolve`, `is_accessible`, `is_mapped_drive`.
- `ResolvedPath` / `PathKind`: result of a resolution.
- `NetworkShares` / `default_network_shares`: network collaborator.
"""
from .network import NetworkShares, WindowsNetworkShares, default_network_shares
from .resolver import (
    PathKind,
    PathResolver,
    ResolvedPath,
    is_drive_path,
    is_unc_path,
    join_path,
    normalize_path,
    parse_drive_fallbacks,
)

__all__ = [
    "NetworkShares",
    "WindowsNetworkShares",
    "default_network_shares",
    "PathKind",
    "PathResolver",
    "ResolvedPath",
    "is_drive_path",
    "is_unc_path",
    "join_path",
    "normalize_path",
    "parse_drive_fallbacks",
]
