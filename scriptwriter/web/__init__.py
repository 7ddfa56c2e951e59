"""Web API for the script writer.

This package provides a FastAPI backend that streams generated scripts
to the client.

Usage:
    python -m scriptwriter.web [--port 8000] [--host 127.0.0.1]
"""
