"""A caching proxy that forwards lookups to the name server."""

from __future__ import annotations

import socket
import sys
import threading
from pathlib import Path

from minidns.server import (
    BUFFER_SIZE,
    DNS_SERVER_PORT,
    _listening_socket,
    _read_pairs,
    _request_text,
)

_UNCACHEABLE = {"NOT_FOUND", "DNS_SERVER_ERROR", ""}


class ProxyServer:
    """Answers lookups from a persistent cache, asking the name server on a miss."""

    def __init__(
        self,
        cache_path: str | Path = "proxy_cache.txt",
        dns_host: str = "127.0.0.1",
        dns_port: int = DNS_SERVER_PORT,
    ) -> None:
        self.cache_path = Path(cache_path)
        self.dns_host = dns_host
        self.dns_port = dns_port
        self.cache: dict[str, str] = {}
        self._lock = threading.Lock()

    def load_cache(self) -> None:
        """Load ``query response`` pairs from the cache file, if it exists."""
        try:
            pairs = _read_pairs(self.cache_path)
        except OSError:
            pairs = []
        self.cache.update(pairs)
        print(f"Proxy: Loaded {len(self.cache)} cached entries")

    def save_cache(self) -> None:
        """Write the whole cache to the cache file, sorted by query."""
        self.cache_path.write_text(
            "".join(f"{query} {response}\n" for query, response in sorted(self.cache.items()))
        )

    def query_dns_server(self, request: str) -> str:
        """Forward ``request`` to the name server; ``DNS_SERVER_ERROR`` on any failure."""
        try:
            with socket.create_connection((self.dns_host, self.dns_port)) as conn:
                conn.sendall(request.encode())
                data = conn.recv(BUFFER_SIZE - 1)
        except OSError as exc:
            print(f"Proxy: DNS server connection failed: {exc}", file=sys.stderr)
            return "DNS_SERVER_ERROR"

        if not data:
            print("Proxy: No response from DNS server")
            return "DNS_SERVER_ERROR"

        response = _request_text(data)
        print(f"Proxy: Received from DNS server: {response}")
        return response

    def handle_request(self, request: str) -> str:
        """Answer a ``<type>:<query>`` request from the cache or the name server."""
        print(f"Proxy: Received request: {request}")
        _, colon, query = request.partition(":")
        if not colon:
            return "INVALID_REQUEST"

        with self._lock:
            response = self.cache.get(query, "")
        if response:
            print(f"Cache HIT for: {query}")
            return response

        print(f"Cache MISS for: {query}")
        response = self.query_dns_server(request)
        if response not in _UNCACHEABLE:
            with self._lock:
                self.cache[query] = response
                self.save_cache()
            print(f"Cached new entry: {query} -> {response}")
        return response

    def handle_client(self, conn: socket.socket) -> None:
        """Read one request from ``conn``, send the answer and close it."""
        with conn:
            data = conn.recv(BUFFER_SIZE - 1)
            if not data:
                print("Proxy: No data received from client")
                return
            conn.sendall(self.handle_request(_request_text(data)).encode())

    def serve_forever(self, port: int, host: str = "") -> None:
        """Load the cache and answer clients on ``port``, one thread each."""
        self.load_cache()
        with _listening_socket(host, port) as listener:
            print(f"Proxy Server started on port {port}")
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError as exc:
                    print(f"Proxy: Accept failed: {exc}", file=sys.stderr)
                    continue
                threading.Thread(target=self.handle_client, args=(conn,), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    """Run the proxy: ``minidns-proxy <port>``."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: proxyServer <port>")
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print("Usage: proxyServer <port>")
        return 1
    try:
        ProxyServer().serve_forever(port)
    except OSError as exc:
        print(f"Proxy: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())