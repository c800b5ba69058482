"""
FastAPI routers for the invoice dashboard.

Each module defines a router for one area (invoices, auth, health).
"""
