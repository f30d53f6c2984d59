"""Shared infrastructure: configuration, exceptions, logging, file I/O, CLI."""
