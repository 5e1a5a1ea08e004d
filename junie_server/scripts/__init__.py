"""Operational scripts (run with python -m junie_server.scripts.<name>)."""
