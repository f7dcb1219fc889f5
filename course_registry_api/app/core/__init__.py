"""
Shared building blocks: settings, logging, the SQLite store, the error
taxonomy and payload validation.  Entity-specific SQL lives in the
service modules.
"""
