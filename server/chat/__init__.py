"""
Chat module for server-side messaging functionality.

Handles:
- Session lifecycle (AUTH, message loop, teardown)
- Registration of authenticated sessions
- Message broadcasting
"""
