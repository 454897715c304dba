"""
FastAPI RESTful API for the Bookshelf record store.

This package provides a small REST API for:
- Creating, updating and deleting book records
- Listing books with name/reading/finished filters
- Fetching a single book with its full detail
"""
