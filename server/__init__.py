"""Bookmark server: validation, file-backed store and REST API."""
