"""Command line interface for the media helper."""
