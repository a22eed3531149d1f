"""Shared helpers: exit codes and canonical JSON output."""
