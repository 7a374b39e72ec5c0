"""
Server package for the authenticated line chat.

This package contains all server-side functionality including:
- Credential loading and the AUTH handshake
- The client registry and broadcast fan-out
- Per-connection chat sessions
- Configuration and utilities
"""
