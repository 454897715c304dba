"""
Shared helpers for the Bookshelf API process.
"""
