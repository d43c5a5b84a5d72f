"""Concrete upstream providers (auth and catalog)."""
