"""facedb application layer — settings and logging for the CLI.

The ``ingest`` package does not depend on anything here.
"""
