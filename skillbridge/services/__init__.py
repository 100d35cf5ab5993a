"""Workflows spanning several repositories."""
