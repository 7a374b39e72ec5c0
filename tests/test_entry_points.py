#!/usr/bin/env python3
"""
Unit tests for main_server.py and main_client.py startup handling.
"""

import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

import main_client
import main_server
from common.constants import DEFAULT_HOST, DEFAULT_PORT, MAX_CLIENTS, MAX_LINE_LENGTH
from server.utils.config import ServerConfig


class TestServerStartup(unittest.TestCase):
    """Test cases for the server entry point."""

    def test_defaults(self):
        args = main_server.parse_args(['users.csv'])
        self.assertEqual(args.port, DEFAULT_PORT)
        self.assertEqual(args.max_clients, MAX_CLIENTS)
        self.assertEqual(args.max_line_length, MAX_LINE_LENGTH)

    def test_missing_credentials_file_is_fatal(self):
        """The server never starts listening without its credentials."""
        with tempfile.TemporaryDirectory() as tmp:
            missing = str(Path(tmp) / 'missing.csv')
            with patch.object(main_server.ChatServer, 'start') as start, \
                    self.assertLogs('chat_server', level='ERROR'):
                self.assertEqual(main_server.main([missing]), 1)
            start.assert_not_called()

    def test_invalid_capacity_is_fatal(self):
        with tempfile.TemporaryDirectory() as tmp:
            users = Path(tmp) / 'users.csv'
            users.write_text('alice,secret123\n', encoding='utf-8')
            with self.assertLogs('chat_server', level='ERROR'):
                self.assertEqual(main_server.main([str(users), '--max-clients', '0']), 1)

    def test_config_stream_limit_fits_a_full_line(self):
        config = ServerConfig(max_line_length=100000)
        self.assertGreater(config.stream_limit, 100000)


class TestClientPrompts(unittest.TestCase):
    """Test cases for the client's interactive prompts."""

    def test_prompts_fill_missing_values(self):
        answers = iter(['', '12345', 'alice'])
        args = main_client.parse_args([])
        config = main_client.prompt_config(args, ask=lambda _: next(answers),
                                           ask_secret=lambda _: 'secret123')

        self.assertEqual(config.host, DEFAULT_HOST)
        self.assertEqual(config.port, 12345)
        self.assertEqual(config.username, 'alice')
        self.assertTrue(config.has_credentials())

    def test_command_line_skips_prompts(self):
        args = main_client.parse_args(['--host', 'chat.local', '--port', '9000', '--username', 'bob'])
        config = main_client.prompt_config(args, ask=self.fail, ask_secret=lambda _: 'pw')
        self.assertEqual((config.host, config.port, config.username), ('chat.local', 9000, 'bob'))

    def test_empty_password_aborts(self):
        with patch.object(main_client, 'prompt_config') as prompt, \
                patch('builtins.print'):
            prompt.return_value = main_client.ClientConfig(port=1, username='alice', password='  ')
            self.assertEqual(main_client.main(['--port', '1']), 1)


if __name__ == '__main__':
    unittest.main()
