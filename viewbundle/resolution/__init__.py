"""Locating view files and turning them into markup."""
