"""Socket helpers: dialling, announcing and whole-buffer reads and writes."""

from __future__ import annotations

import errno
import os
import select
import socket
from typing import Any

_IN_PROGRESS = {errno.EINPROGRESS, errno.EWOULDBLOCK, errno.EAGAIN}
_RETRYABLE = {errno.EINTR, errno.EAGAIN, errno.EWOULDBLOCK}


class NetSoftError(OSError):
    """A transient failure: the operation may succeed if tried again."""


class NetHardError(OSError):
    """A fatal failure of the socket."""


def _close_on_error(sock: socket.socket, exc: BaseException) -> None:
    sock.close()
    raise exc


def timeout_connect(sock: socket.socket, address: Any, timeout: int = -1) -> None:
    """Connect *sock* to *address*, waiting at most *timeout* milliseconds.

    A timeout of -1 waits indefinitely. Raises OSError on failure and
    TimeoutError when the wait runs out. The socket's blocking mode is
    left as it was.
    """
    limited = timeout != -1
    was_blocking = sock.getblocking()
    if limited:
        sock.setblocking(False)
    try:
        err = sock.connect_ex(address)
        if err == 0:
            return
        if err not in _IN_PROGRESS:
            raise OSError(err, os.strerror(err))
        wait = timeout / 1000.0 if limited else None
        _, writable, _ = select.select([], [sock], [], wait)
        if not writable:
            raise TimeoutError(errno.ETIMEDOUT, os.strerror(errno.ETIMEDOUT))
        err = sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
        if err:
            raise OSError(err, os.strerror(err))
    finally:
        if limited:
            sock.setblocking(was_blocking)


def _with_port(sockaddr: tuple, port: int) -> tuple:
    return (sockaddr[0], port) + tuple(sockaddr[2:])


def netdial(
    family: int,
    proto: int,
    local: str | None,
    local_port: int,
    server: str,
    port: int,
    timeout: int = -1,
) -> socket.socket:
    """Open a socket of type *proto* connected to *server*:*port*.

    If *local* is given the socket is bound to it (and to *local_port* when
    non-zero); otherwise a non-zero *local_port* binds the wildcard address.
    Raises OSError (including socket.gaierror) on failure.
    """
    local_addr = None
    if local:
        local_addr = socket.getaddrinfo(local, None, family, proto)[0][4]
    server_info = socket.getaddrinfo(server, None, family, proto)[0]
    server_family, server_addr = server_info[0], server_info[4]

    sock = socket.socket(server_family, proto, 0)
    try:
        if local_addr is not None:
            if local_port:
                local_addr = _with_port(local_addr, local_port)
            sock.bind(local_addr)
        elif local_port:
            if server_family == socket.AF_INET:
                sock.bind(("0.0.0.0", local_port))
            elif server_family == socket.AF_INET6:
                sock.bind(("::", local_port))
            else:
                raise OSError(errno.EAFNOSUPPORT, os.strerror(errno.EAFNOSUPPORT))

        try:
            timeout_connect(sock, _with_port(server_addr, port), timeout)
        except OSError as exc:
            if exc.errno != errno.EINPROGRESS:
                raise
    except BaseException as exc:
        _close_on_error(sock, exc)
    return sock


def netannounce(family: int, proto: int, local: str | None, port: int) -> socket.socket:
    """Open a socket of type *proto* bound to *local*:*port*.

    Stream sockets are also put into the listening state. With no address
    family and no local address, an IPv6 socket that also accepts IPv4 is
    created. Raises OSError on failure.
    """
    hint_family = socket.AF_INET6 if family == socket.AF_UNSPEC and not local else family
    info = socket.getaddrinfo(local, str(port), hint_family, proto, 0, socket.AI_PASSIVE)[0]
    res_family, res_addr = info[0], info[4]

    sock = socket.socket(res_family, proto, 0)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if (
            res_family == socket.AF_INET6
            and family in (socket.AF_UNSPEC, socket.AF_INET6)
            and hasattr(socket, "IPV6_V6ONLY")
        ):
            v6only = 0 if family == socket.AF_UNSPEC else 1
            sock.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, v6only)
        sock.bind(res_addr)
        if proto == socket.SOCK_STREAM:
            sock.listen(socket.SOMAXCONN)
    except BaseException as exc:
        _close_on_error(sock, exc)
    return sock


def nread(sock: socket.socket, count: int) -> bytes:
    """Read up to *count* bytes, stopping early at end of stream or when
    the socket would block. Raises NetHardError on any other failure."""
    chunks: list[bytes] = []
    remaining = count
    while remaining > 0:
        try:
            data = sock.recv(remaining)
        except OSError as exc:
            if exc.errno in _RETRYABLE:
                break
            raise NetHardError(exc.errno, exc.strerror) from exc
        if not data:
            break
        chunks.append(data)
        remaining -= len(data)
    return b"".join(chunks)


def nwrite(sock: socket.socket, data: bytes) -> int:
    """Write all of *data*, returning the number of bytes written.

    Returns early with a partial count if the socket would block. Raises
    NetSoftError for a lack of buffer space or a zero-length write and
    NetHardError for any other failure.
    """
    view = memoryview(data)
    sent = 0
    while sent < len(view):
        try:
            n = sock.send(view[sent:])
        except OSError as exc:
            if exc.errno in _RETRYABLE:
                return sent
            if exc.errno == errno.ENOBUFS:
                raise NetSoftError(exc.errno, exc.strerror) from exc
            raise NetHardError(exc.errno, exc.strerror) from exc
        if n == 0:
            raise NetSoftError(errno.EAGAIN, "no bytes written")
        sent += n
    return sent


def set_nonblocking(sock: socket.socket | int, nonblocking: bool) -> None:
    """Switch a socket or file descriptor into or out of non-blocking mode."""
    if isinstance(sock, int):
        os.set_blocking(sock, not nonblocking)
    else:
        sock.setblocking(not nonblocking)


def get_sock_domain(sock: socket.socket | int) -> socket.AddressFamily:
    """Return the address family of a socket or socket descriptor."""
    if isinstance(sock, int):
        probe = socket.socket(fileno=sock)
        try:
            probe.getsockname()
            return socket.AddressFamily(probe.family)
        finally:
            probe.detach()
    sock.getsockname()
    return socket.AddressFamily(sock.family)