"""Persistence adapters and boundary mapping."""
