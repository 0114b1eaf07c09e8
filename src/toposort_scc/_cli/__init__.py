"""Command-line interface for toposort-scc."""
