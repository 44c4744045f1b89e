"""Application services: checkout, notifications and store settings."""
