"""Outward-facing adapters: console REPL and reminder notifiers."""
