"""
Shared constants for the authenticated line chat.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 12345

# Capacity and limits
MAX_CLIENTS = 50
MAX_LINE_LENGTH = 512

# asyncio stream buffer; lines longer than this cannot be buffered whole
STREAM_LIMIT = 64 * 1024

# Wire encoding
ENCODING = 'utf-8'
LINE_TERMINATOR = '\n'

# Credentials file
CREDENTIALS_COMMENT_PREFIX = '#'
CREDENTIALS_SEPARATOR = ','

# Logging
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


# Protocol command words
class Commands:
    # Client to Server
    AUTH = 'AUTH'
    MSG = 'MSG'
    QUIT = 'QUIT'

    # Server to Client
    OK = 'OK'
    ERROR = 'ERROR'
    SERVER_TAG = '[Server]'
    ECHO_TAG = '(you)'

    # Console client
    CLIENT_QUIT = '/quit'


# Reply texts
class Replies:
    WELCOME = 'Welcome, {username}!'
    GOODBYE = 'Goodbye.'
    EXPECTED_AUTH = 'Expected AUTH <username> <password>.'
    EMPTY_CREDENTIALS = 'Username and password cannot be empty.'
    INVALID_CREDENTIALS = 'Invalid username or password.'
    SERVER_FULL = 'Server is full. Try again later.'
    AUTH_LINE_TOO_LONG = 'Line too long.'
    LINE_TOO_LONG = 'Line too long (>{max_length} chars).'
    UNKNOWN_COMMAND = 'Unknown command.'
    JOINED = '{username} joined the chat.'
    LEFT = '{username} left the chat.'
