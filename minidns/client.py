"""An interactive client that sends lookups to the caching proxy."""

from __future__ import annotations

import socket
import sys
from typing import Iterator, TextIO

from minidns.server import BUFFER_SIZE, _request_text

_MENU = "\n=== DNS Resolver Client ===\n1. Domain to IP\n2. IP to Domain\n3. Exit\n"


def _tokens(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield from line.split()


class DNSClient:
    """Sends ``<choice>:<query>`` requests to a proxy and returns its answers."""

    def __init__(self, proxy_ip: str, proxy_port: int) -> None:
        self.proxy_ip = proxy_ip
        self.proxy_port = proxy_port

    def _connect(self) -> socket.socket:
        try:
            socket.inet_pton(socket.AF_INET, self.proxy_ip)
        except OSError as exc:
            raise ConnectionError(f"Invalid address: {self.proxy_ip}") from exc
        try:
            return socket.create_connection((self.proxy_ip, self.proxy_port))
        except OSError as exc:
            raise ConnectionError(f"Connection failed: {exc}") from exc

    def query(self, choice: int, query: str) -> str | None:
        """Send one request; return the response, or None if nothing came back.

        Raises ConnectionError if the proxy cannot be reached.
        """
        with self._connect() as conn:
            conn.sendall(f"{choice}:{query}".encode())
            data = conn.recv(BUFFER_SIZE - 1)
        return _request_text(data) if data else None

    def run(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Run the menu loop until the user chooses 3 or input ends."""
        stdin = sys.stdin if stdin is None else stdin
        stdout = sys.stdout if stdout is None else stdout
        tokens = _tokens(stdin)

        while True:
            stdout.write(_MENU + "Enter choice: ")
            stdout.flush()
            try:
                choice = int(next(tokens))
            except (StopIteration, ValueError):
                return
            if choice == 3:
                return

            stdout.write("Enter query: ")
            stdout.flush()
            query = next(tokens, None)
            if query is None:
                return

            try:
                response = self.query(choice, query)
            except ConnectionError as exc:
                print(exc, file=sys.stderr)
                stdout.write("Failed to connect to proxy server\n")
                continue
            except OSError as exc:
                print(f"Send failed: {exc}", file=sys.stderr)
                continue

            if response is None:
                stdout.write("No response received\n")
            else:
                stdout.write(f"Response: {response}\n")


def main(argv: list[str] | None = None) -> int:
    """Run the client: ``minidns-client <proxy_ip> <proxy_port>``."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 2:
        print("Usage: dnsClient <proxy_ip> <proxy_port>")
        return 1
    try:
        port = int(args[1])
    except ValueError:
        print("Usage: dnsClient <proxy_ip> <proxy_port>")
        return 1
    DNSClient(args[0], port).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())