"""
Client package for the authenticated line chat.

This package contains the console client:
- AUTH handshake and chat messaging
- Configuration and utilities
"""
