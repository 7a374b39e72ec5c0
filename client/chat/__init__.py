"""
Chat module for client-side messaging functionality.

Handles:
- The AUTH handshake
- Sending chat messages and QUIT
- Printing server lines
"""
