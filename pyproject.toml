[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "labnet"
version = "0.1.0"
description = "Small networking lab tools: TCP forwarder, simple servers, multicast agents, a raw-frame sniffer and a few utilities"
requires-python = ">=3.10"
keywords = [
    "networking",
    "sockets",
    "tcp",
    "udp",
    "multicast",
    "port-forwarding",
    "sniffer",
    "crc32",
    "lfsr",
    "strassen",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Education",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
labnet-lfsr = "labnet.lfsr:main"
labnet-anagram = "labnet.anagram:main"
labnet-crc32 = "labnet.crc32:main"
labnet-idsearch = "labnet.idsearch:main"
labnet-matrices = "labnet.matrices:main"
labnet-interfaces = "labnet.interfaces:main"
labnet-sniffer = "labnet.sniffer:main"
labnet-forwarder = "labnet.forwarder:main"
labnet-print-server = "labnet.servers:main_print"
labnet-timeout-server = "labnet.servers:main_timeout"
labnet-counter-server = "labnet.servers:main_counter"
labnet-fileserver = "labnet.fileserver:main"
labnet-multicast = "labnet.multicast:main"
labnet-agent = "labnet.agent:main"
labnet-handshake = "labnet.handshake:main"

[tool.hatch.build.targets.wheel]
packages = ["labnet"]

[tool.hatch.build.targets.sdist]
include = ["labnet", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
