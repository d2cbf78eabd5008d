"""Layover core - shared schemas, errors and reference data."""
