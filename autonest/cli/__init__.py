"""Command line interface for AutoNest."""
