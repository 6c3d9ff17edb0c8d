"""Endpoint modules for the station REST API (internal)."""
