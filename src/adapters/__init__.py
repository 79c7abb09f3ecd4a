"""Adaptadores de I/O (HTTP) que implementan `core.interfaces`."""
