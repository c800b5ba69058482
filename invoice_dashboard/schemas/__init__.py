"""
Pydantic schemas for the invoice dashboard backend.

These models define the form contracts and response shapes.
"""
