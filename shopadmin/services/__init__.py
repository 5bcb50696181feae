"""Catalog services: product repository, seed data and statistics."""
