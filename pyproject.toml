[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minidns"
version = "0.1.0"
description = "A small name resolver: a lookup server, a caching proxy and an interactive client over plain-text TCP"
requires-python = ">=3.10"
dependencies = []
keywords = ["dns", "resolver", "proxy", "cache", "tcp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Name Service (DNS)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minidns-server = "minidns.server:main"
minidns-proxy = "minidns.proxy:main"
minidns-client = "minidns.client:main"

[tool.hatch.build.targets.wheel]
packages = ["minidns"]

[tool.pytest.ini_options]
addopts = "-ra"
