"""Venue connectors."""
