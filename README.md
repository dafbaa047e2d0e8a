# minidns

minidns is a small name resolver. It has three parts, and they talk plain text over TCP:

- **`minidns.server`** (`DNSServer`) holds a table of domain-to-address mappings. It answers lookups in either direction.
- **`minidns.proxy`** (`ProxyServer`) sits between clients and the server. It caches every successful answer in a file.
- **`minidns.client`** (`DNSClient`) is an interactive menu that sends queries to the proxy.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Running

Create a mappings file named `database_mappings.txt`. It holds whitespace-separated pairs of a domain and an address, usually one pair per line:

```
example.com 93.184.216.34
example.org 93.184.216.35
```

Start the server in the directory that holds this file. The proxy always contacts the server at `127.0.0.1` on port 8080, so use that port:

```
minidns-server 8080
```

If the server cannot open the file, it reports an error and starts with an empty table.

Start the proxy. It reads its cache from `proxy_cache.txt` in the current directory and writes the cache back to that file:

```
minidns-proxy 8081
```

Start the client and point it at the proxy:

```
minidns-client 127.0.0.1 8081
```

The client shows this menu:

```
=== DNS Resolver Client ===
1. Domain to IP
2. IP to Domain
3. Exit
```

After you enter a choice and a query, the client prints `Response: <answer>`. The client stops in any of these cases:

- you choose 3;
- the choice is not a number;
- the input ends.

If the proxy cannot be reached, the client prints `Failed to connect to proxy server` and shows the menu again.

Each command prints a usage line and exits with status 1 if it gets the wrong number of arguments or a port that is not a number.

## Wire format

Each connection carries one request and one reply, at most 1023 bytes each way. A request has the form `<type>:<query>`:

- type `1` looks up the address of a domain, so `1:example.com` returns `93.184.216.34`;
- type `2` looks up the domain of an address, so `2:93.184.216.34` returns `example.com`.

The server can also send one of these replies:

- `NOT_FOUND`: the query has no mapping.
- `INVALID_REQUEST`: the request has no colon.
- `INVALID_REQUEST_TYPE`: the type is an integer other than 1 or 2.

The proxy replies `INVALID_REQUEST` itself when a request has no colon. It replies `DNS_SERVER_ERROR` when the server cannot be reached or sends nothing back.

## Caching

The proxy keys its cache on the query part of the request only, not on the type. It stores any reply except `NOT_FOUND`, `DNS_SERVER_ERROR` and an empty reply. After each new entry it rewrites `proxy_cache.txt` in full, with one `query response` pair per line, sorted by query.

## Library use

The classes also work from Python. Most methods print progress lines to standard output.

```python
from minidns.server import DNSServer

server = DNSServer("database_mappings.txt")
server.load_database()
print(server.resolve("1:example.com"))
```

`DNSServer.resolve` raises `ValueError` if the part before the colon does not start with an integer.

```python
from minidns.proxy import ProxyServer

proxy = ProxyServer(cache_path="proxy_cache.txt", dns_host="127.0.0.1", dns_port=8080)
proxy.load_cache()
print(proxy.handle_request("1:example.com"))
```

```python
from minidns.client import DNSClient

client = DNSClient("127.0.0.1", 8081)
print(client.query(1, "example.com"))
```

`DNSClient.query` returns `None` if the proxy closes the connection without a reply. It raises `ConnectionError` if the proxy cannot be reached or the address is not a valid IPv4 address.

Both servers have a `serve_forever(port, host="")` method. It loads the table or the cache, then answers each client in its own thread.

## What it does not do

- minidns does not speak the DNS protocol. It uses no UDP, no record types and no binary messages. Only the plain-text format above works, so ordinary resolvers and tools cannot query it.
- It does no recursive resolution and makes no upstream lookups. Every answer comes from the mappings file.
- The commands do not take a file path or a server address as an option. The file names and the server address given above are fixed. Use the classes from Python to change them.