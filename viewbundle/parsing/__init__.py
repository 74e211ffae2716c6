"""Scanning, parsing and loading view files."""
