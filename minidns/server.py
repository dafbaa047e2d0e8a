"""A small name server that answers domain and address lookups over TCP."""

from __future__ import annotations

import re
import socket
import sys
import threading
from pathlib import Path

DNS_SERVER_PORT = 8080
PROXY_SERVER_PORT = 8081
BUFFER_SIZE = 1024

_TRAILING_WS = " \n\r\t"
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_request_type(text: str) -> int:
    """Read the leading integer of ``text``, ignoring anything after it."""
    match = _LEADING_INT.match(text)
    if match is None:
        raise ValueError(f"invalid request type: {text!r}")
    return int(match.group(1))


def _read_pairs(path: Path) -> list[tuple[str, str]]:
    """Return whitespace-separated token pairs; an unpaired last token is dropped."""
    tokens = iter(path.read_text().split())
    return list(zip(tokens, tokens))


def _listening_socket(host: str, port: int) -> socket.socket:
    """Create a TCP socket bound to ``host:port`` and listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if hasattr(socket, "SO_REUSEPORT"):
            try:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
            except OSError:
                pass
        sock.bind((host, port))
        sock.listen(5)
    except OSError:
        sock.close()
        raise
    return sock


def _request_text(data: bytes) -> str:
    """Decode received bytes the way a NUL-terminated buffer would read."""
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


class DNSServer:
    """Resolves domains to addresses and back from a two-column mapping file."""

    def __init__(self, database_path: str | Path = "database_mappings.txt") -> None:
        self.database_path = Path(database_path)
        self.domain_to_ip: dict[str, str] = {}
        self.ip_to_domain: dict[str, str] = {}

    def load_database(self) -> None:
        """Load ``domain ip`` pairs from the database file."""
        print(f"DNS Server: Attempting to load {self.database_path}...")
        try:
            pairs = _read_pairs(self.database_path)
        except OSError:
            print(f"DNS Server: ERROR - Cannot open {self.database_path}")
            return

        for count, (domain, ip) in enumerate(pairs, start=1):
            self.domain_to_ip[domain] = ip
            self.ip_to_domain[ip] = domain
            print(f"DNS Server: Loaded mapping {count}: {domain} -> {ip}")

        print(f"DNS Server: Successfully loaded {len(self.domain_to_ip)} domain mappings")
        print("DNS Server: Available domains: " + " ".join(sorted(self.domain_to_ip)))

    def resolve(self, request: str) -> str:
        """Answer a ``<type>:<query>`` request; type 1 is domain to IP, 2 is IP to domain."""
        request = request.rstrip(_TRAILING_WS)
        print(f"DNS Server: Received request: '{request}'")

        type_text, colon, query = request.partition(":")
        if not colon:
            print("DNS Server: Invalid request format (no colon)")
            return "INVALID_REQUEST"

        request_type = _parse_request_type(type_text)
        query = query.rstrip(_TRAILING_WS)
        print(f"DNS Server: Request type: {request_type}, Query: '{query}'")

        if request_type == 1:
            response = self.domain_to_ip.get(query)
            if response is None:
                print(f"DNS Server: No mapping found for domain: '{query}'")
                return "NOT_FOUND"
            print(f"DNS Server: Found mapping: {query} -> {response}")
            return response
        if request_type == 2:
            return self.ip_to_domain.get(query, "NOT_FOUND")
        return "INVALID_REQUEST_TYPE"

    def handle_client(self, conn: socket.socket) -> None:
        """Read one request from ``conn``, send the answer and close it."""
        with conn:
            data = conn.recv(BUFFER_SIZE - 1)
            if not data:
                print("DNS Server: No data received from client")
                return
            response = self.resolve(_request_text(data))
            print(f"DNS Server: Sending response: '{response}'")
            conn.sendall(response.encode())

    def serve_forever(self, port: int, host: str = "") -> None:
        """Load the database and answer clients on ``port``, one thread each."""
        self.load_database()
        with _listening_socket(host, port) as listener:
            print(f"DNS Server: Started successfully on port {port}")
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError as exc:
                    print(f"DNS Server: Accept failed: {exc}", file=sys.stderr)
                    continue
                print("DNS Server: New client connected")
                threading.Thread(target=self.handle_client, args=(conn,), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    """Run the name server: ``minidns-server <port>``."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: dnsServer <port>")
        return 1
    try:
        port = int(args[0])
    except ValueError:
        print("Usage: dnsServer <port>")
        return 1
    try:
        DNSServer().serve_forever(port)
    except OSError as exc:
        print(f"DNS Server: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())