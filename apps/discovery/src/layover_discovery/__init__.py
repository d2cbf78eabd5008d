"""Layover discovery service: search, enrich, score and cache."""
