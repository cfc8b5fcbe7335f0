"""A small client for the Docker Engine HTTP API."""

from __future__ import annotations

import http.client
import json
import os
import socket
import ssl
import struct
from typing import Any
from urllib.parse import quote, urlencode, urlsplit

DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"

STDIN = 0
STDOUT = 1
STDERR = 2
SYSTEMERR = 3

_HEADER = struct.Struct(">BxxxI")


class DockerError(RuntimeError):
    """Raised when the Docker daemon cannot be reached or rejects a request."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class _UnixHTTPConnection(http.client.HTTPConnection):
    def __init__(self, socket_path: str, timeout: float | None = None) -> None:
        super().__init__("localhost")
        self._socket_path = socket_path
        self._unix_timeout = timeout

    def connect(self) -> None:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        if self._unix_timeout is not None:
            sock.settimeout(self._unix_timeout)
        try:
            sock.connect(self._socket_path)
        except OSError:
            sock.close()
            raise
        self.sock = sock


def demultiplex(data: bytes) -> list[tuple[int, bytes]]:
    """Split a multiplexed Docker stream into ``(stream, payload)`` frames.

    A trailing frame cut short is dropped; a system-error frame or an unknown
    stream type raises :class:`DockerError`.
    """
    frames = []
    view = memoryview(data)
    offset = 0
    while len(view) - offset >= _HEADER.size:
        stream, size = _HEADER.unpack_from(view, offset)
        offset += _HEADER.size
        if len(view) - offset < size:
            break
        payload = bytes(view[offset:offset + size])
        offset += size
        if stream == SYSTEMERR:
            raise DockerError(f"error from daemon in stream: {payload.decode('utf-8', 'replace')}")
        if stream not in (STDIN, STDOUT, STDERR):
            raise DockerError(f"Unrecognized input header: {stream}")
        frames.append((stream, payload))
    return frames


def _parse_host(host: str) -> tuple[str, str, int | None]:
    parts = urlsplit(host)
    if parts.scheme == "unix":
        path = parts.path or parts.netloc
        if not path:
            raise DockerError(f"unable to parse docker host `{host}`")
        return "unix", path, None
    if parts.scheme in ("tcp", "http", "https"):
        if not parts.hostname:
            raise DockerError(f"unable to parse docker host `{host}`")
        return parts.scheme, parts.hostname, parts.port
    raise DockerError(f"unable to parse docker host `{host}`")


def _error_message(data: bytes, status: int) -> str:
    try:
        decoded = json.loads(data)
    except ValueError:
        text = data.decode("utf-8", "replace").strip()
        return text or f"request failed with status {status}"
    if isinstance(decoded, dict) and "message" in decoded:
        return str(decoded["message"])
    return f"request failed with status {status}"


def _json(data: bytes) -> Any:
    return json.loads(data) if data.strip() else {}


class DockerClient:
    """Talks to a Docker daemon over a unix socket or TCP."""

    def __init__(
        self,
        host: str = DEFAULT_DOCKER_HOST,
        api_version: str | None = None,
        ssl_context: ssl.SSLContext | None = None,
        timeout: float | None = None,
    ) -> None:
        self.host = host
        self._scheme, self._address, self._port = _parse_host(host)
        self._prefix = f"/v{api_version.lstrip('v')}" if api_version else ""
        self._ssl_context = ssl_context
        self._timeout = timeout

    def _connection(self) -> http.client.HTTPConnection:
        if self._scheme == "unix":
            return _UnixHTTPConnection(self._address, self._timeout)
        if self._scheme == "https" or self._ssl_context is not None:
            return http.client.HTTPSConnection(
                self._address, self._port or 2376, timeout=self._timeout, context=self._ssl_context
            )
        return http.client.HTTPConnection(self._address, self._port or 2375, timeout=self._timeout)

    def _request(
        self,
        method: str,
        path: str,
        *,
        query: dict[str, str] | None = None,
        body: Any = None,
    ) -> bytes:
        url = self._prefix + path
        if query:
            url += "?" + urlencode(query)
        headers = {}
        payload = None
        if body is not None:
            payload = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"
        connection = self._connection()
        try:
            connection.request(method, url, body=payload, headers=headers)
            response = connection.getresponse()
            data = response.read()
            status = response.status
        except (OSError, http.client.HTTPException) as exc:
            raise DockerError(f"cannot connect to the Docker daemon at {self.host}: {exc}") from exc
        finally:
            connection.close()
        if status >= 400:
            raise DockerError(_error_message(data, status), status=status)
        return data

    def info(self) -> dict:
        """Return system-wide information about the daemon."""
        return _json(self._request("GET", "/info"))

    def image_inspect(self, name: str) -> dict:
        """Return details of a local image; raises when it is absent."""
        return _json(self._request("GET", f"/images/{quote(name, safe='/:@')}/json"))

    def image_pull(self, name: str) -> list[dict]:
        """Pull an image and return the daemon's progress messages."""
        data = self._request("POST", "/images/create", query={"fromImage": name})
        messages = []
        for line in data.decode("utf-8", "replace").splitlines():
            if not line.strip():
                continue
            message = json.loads(line)
            if isinstance(message, dict) and message.get("error"):
                raise DockerError(str(message["error"]))
            messages.append(message)
        return messages

    def container_create(self, name: str, config: dict) -> dict:
        """Create a container named ``name``; returns its id and warnings."""
        return _json(self._request("POST", "/containers/create", query={"name": name}, body=config))

    def container_start(self, container_id: str) -> None:
        """Start a created container."""
        self._request("POST", f"/containers/{quote(container_id, safe='')}/start")

    def container_inspect(self, container_id: str) -> dict:
        """Return the low-level details of a container."""
        return _json(self._request("GET", f"/containers/{quote(container_id, safe='')}/json"))

    def container_remove(self, container_id: str, force: bool = False, remove_volumes: bool = False) -> None:
        """Remove a container, optionally killing it and dropping its volumes."""
        query = {}
        if remove_volumes:
            query["v"] = "1"
        if force:
            query["force"] = "1"
        self._request("DELETE", f"/containers/{quote(container_id, safe='')}", query=query)

    def exec_create(self, container_id: str, cmd: list[str]) -> str:
        """Prepare a command to run in a container; returns the exec id."""
        body = {"Cmd": list(cmd), "AttachStdout": True, "AttachStderr": True, "Tty": False}
        data = _json(self._request("POST", f"/containers/{quote(container_id, safe='')}/exec", body=body))
        return data["Id"]

    def exec_start(self, exec_id: str) -> bytes:
        """Run a prepared exec and return its stdout and stderr in arrival order."""
        data = self._request("POST", f"/exec/{quote(exec_id, safe='')}/start", body={"Detach": False, "Tty": False})
        return b"".join(payload for stream, payload in demultiplex(data) if stream in (STDOUT, STDERR))


def client_from_env() -> DockerClient:
    """Build a client from DOCKER_HOST, DOCKER_API_VERSION and the TLS variables."""
    host = os.environ.get("DOCKER_HOST") or DEFAULT_DOCKER_HOST
    api_version = os.environ.get("DOCKER_API_VERSION") or None
    context = None
    cert_path = os.environ.get("DOCKER_CERT_PATH")
    if cert_path:
        context = ssl.create_default_context(cafile=os.path.join(cert_path, "ca.pem"))
        context.load_cert_chain(os.path.join(cert_path, "cert.pem"), os.path.join(cert_path, "key.pem"))
        if not os.environ.get("DOCKER_TLS_VERIFY"):
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
    return DockerClient(host, api_version=api_version, ssl_context=context)