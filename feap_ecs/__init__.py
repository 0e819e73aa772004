"""Scheduling building blocks: graphs, DAG analysis, sparse storage, layouts and node containers."""

__version__ = "0.1.0"