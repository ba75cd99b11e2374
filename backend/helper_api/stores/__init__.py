"""Persistence layer for the media helper."""
