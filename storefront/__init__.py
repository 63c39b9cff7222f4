"""
Storefront backend package.

This package provides a FastAPI application for the shop: catalog, cart and
checkout, membership plans, reviews and the admin back office, with database,
session and image storage abstractions so the same code runs against
Postgres/Redis in production and in-memory backends in development.
"""
