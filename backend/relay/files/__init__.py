"""File upload and relay module.

Clients upload files tagged with a session ID; other clients on the same
session list and download them. Blobs are written to the content directory
and served back under ``/uploads``; metadata is kept in memory only and is
lost when the process exits. Files on disk are never cleaned up.
"""
