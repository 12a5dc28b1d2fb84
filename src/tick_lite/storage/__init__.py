"""Persistence adapters for the task collection."""
