"""CSI Restarter utils."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import overload

try:
    VERSION = version("k8s-csi-restarter")
except PackageNotFoundError:  # pragma: no cover
    VERSION = "0.0.0"

ERROR_BIND_ADDRESS = "Invalid bind address {value!r}, expected host:port"


@overload
def comma_list(args: str | list[str]) -> list[str]: ...  # pragma: no cover


@overload
def comma_list(args: None) -> None: ...  # pragma: no cover


def comma_list(args: str | list[str] | None) -> list[str] | None:
    """Handle comma seperated strings and lists of comma seperated strings."""

    if args is None:
        return None

    if isinstance(args, str):
        args = [args]

    items: list[str] = []
    for arg in args:
        items.extend(a.strip() for a in str(arg).split(","))

    return [i for i in items if i]


def split_bind_address(value: str) -> tuple[str, int]:
    """Split `host:port` into host and port. IPv6 hosts must be in brackets."""

    host, sep, port = value.strip().rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(ERROR_BIND_ADDRESS.format(value=value))

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(ERROR_BIND_ADDRESS.format(value=value))

    port_num = int(port)
    if not 0 < port_num < 65536:  # noqa: PLR2004
        raise ValueError(ERROR_BIND_ADDRESS.format(value=value))

    return host, port_num
