"""Structured logging building blocks: write syncers, an in-memory observer core, a gRPC-style logger and a line writer."""

__version__ = "0.1.0"
__all__ = ["grpclog", "line_writer", "observer", "write_syncer"]