"""
Network share collaborator.

Drive letter -> network address lookups and transient share connections only
exist on Windows. `NetworkShares` is the portable implementation: lookups and
connects always fail there, while the free-space probe works anywhere
`shutil.disk_usage` does. `WindowsNetworkShares` adds the mpr.dll calls.

Use `default_network_shares()` to get the right one for the running platform.
"""
import ctypes
import shutil
import sys

from sanitizer.utils import LogLevel, logger

_NO_ERROR = 0
_RESOURCETYPE_DISK = 0x00000001
_CONNECT_TEMPORARY = 0x00000004
_UNC_BUFFER_LENGTH = 512


class NetworkShares:
    """Platform-neutral network collaborator; lookups and connects are unsupported."""

    def get_unc_path(self, drive_path: str) -> str | None:
        return None

    def connect(self, unc_path: str) -> bool:
        return False

    def probe(self, path: str) -> bool:
        """Lightweight reachability probe: ask the volume for its free space."""
        try:
            shutil.disk_usage(path)
            return True
        except (OSError, ValueError) as e:
            logger.log("network.probe_failed", LogLevel.TRACE, path=path, error=str(e))
            return False


class _NetResource(ctypes.Structure):
    _fields_ = [
        ("dwScope", ctypes.c_uint32),
        ("dwType", ctypes.c_uint32),
        ("dwDisplayType", ctypes.c_uint32),
        ("dwUsage", ctypes.c_uint32),
        ("lpLocalName", ctypes.c_wchar_p),
        ("lpRemoteName", ctypes.c_wchar_p),
        ("lpComment", ctypes.c_wchar_p),
        ("lpProvider", ctypes.c_wchar_p),
    ]


class WindowsNetworkShares(NetworkShares):
    """Network collaborator using WNetGetConnectionW / WNetAddConnection2W."""

    def __init__(self):
        self._mpr = ctypes.WinDLL("mpr.dll")

    def get_unc_path(self, drive_path: str) -> str | None:
        """
        Resolve a mapped drive path such as "Z:" or "Z:\\Movies" to its UNC form.

        Any sub-path after the drive is appended to the resolved share.
        Returns None when the letter is not mapped or the call fails.
        """
        if len(drive_path) < 2 or drive_path[1] != ":":
            return None

        drive = drive_path[:2]
        buffer = ctypes.create_unicode_buffer(_UNC_BUFFER_LENGTH)
        length = ctypes.c_uint32(_UNC_BUFFER_LENGTH)
        try:
            result = self._mpr.WNetGetConnectionW(drive, buffer, ctypes.byref(length))
        except OSError as e:
            logger.log("network.lookup_error", LogLevel.DEBUG, drive=drive, error=str(e))
            return None

        if result != _NO_ERROR:
            logger.log("network.lookup_failed", LogLevel.DEBUG, drive=drive, code=result)
            return None

        unc_path = buffer.value
        rest = drive_path[2:]
        if rest:
            if not rest.startswith("\\"):
                rest = "\\" + rest
            unc_path += rest
        logger.log("network.lookup", LogLevel.DEBUG, drive=drive_path, unc=unc_path)
        return unc_path

    def connect(self, unc_path: str) -> bool:
        """Attempt a credential-less temporary connection to a UNC share."""
        if not unc_path.startswith("\\\\"):
            return False

        resource = _NetResource(dwType=_RESOURCETYPE_DISK, lpRemoteName=unc_path)
        try:
            result = self._mpr.WNetAddConnection2W(ctypes.byref(resource), None, None, _CONNECT_TEMPORARY)
        except OSError as e:
            logger.log("network.connect_error", LogLevel.DEBUG, unc=unc_path, error=str(e))
            return False
        logger.log("network.connect", LogLevel.DEBUG, unc=unc_path, code=result)
        return result == _NO_ERROR


def default_network_shares() -> NetworkShares:
    """Return the network collaborator for the running platform."""
    if sys.platform == "win32":
        return WindowsNetworkShares()
    return NetworkShares()
