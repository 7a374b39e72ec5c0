"""
Authentication module for server-side access control.

Handles:
- Credential file loading
- AUTH handshake validation
"""
