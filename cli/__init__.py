"""Command line interface for stashing and retrieving blobs."""
