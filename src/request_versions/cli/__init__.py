"""Command-line entry points.

The console script is :func:`request_versions.cli.main.main`.
"""
