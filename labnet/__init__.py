"""Networking lab tools: TCP forwarder, small servers, multicast agent, sniffer and utilities."""

__version__ = "0.1.0"