"""Entrypoint, bootstrap and slash-command handlers."""
