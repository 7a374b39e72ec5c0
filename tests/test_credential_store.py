#!/usr/bin/env python3
"""
Unit tests for server/auth/credential_store.py

Covers loading the username,password file:
- Comments and blank lines
- Malformed lines skipped with a warning
- Missing file is fatal
- Lookup and verification
"""

import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from server.auth.credential_store import CredentialStore, CredentialsError


class TestCredentialStore(unittest.TestCase):
    """Test cases for credential loading and lookup."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / 'users.csv'

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, text: str):
        self.path.write_text(text, encoding='utf-8')

    def test_load_skips_comments_and_blank_lines(self):
        """Comment and blank lines never become users."""
        self._write("# users\n\nalice,secret123\n   \nbob,password\n")
        store = CredentialStore.load(self.path)

        self.assertEqual(len(store), 2)
        self.assertEqual(store.get_password('alice'), 'secret123')
        self.assertEqual(store.get_password('bob'), 'password')

    def test_fields_are_trimmed(self):
        """Whitespace around username and password is ignored."""
        self._write("  carol , hunter2  \n")
        store = CredentialStore.load(self.path)
        self.assertTrue(store.verify('carol', 'hunter2'))

    def test_password_split_at_first_comma(self):
        """Only the first comma separates the fields."""
        self._write("dave,pa,ss\n")
        store = CredentialStore.load(self.path)
        self.assertEqual(store.get_password('dave'), 'pa,ss')

    def test_malformed_lines_skipped_with_warning(self):
        """Lines without a comma or without a username are logged and skipped."""
        self._write("nocomma\n,orphan\nalice,secret123\n")

        with self.assertLogs('chat_server', level='WARNING') as captured:
            store = CredentialStore.load(self.path)

        self.assertEqual(len(store), 1)
        self.assertIn('alice', store)
        self.assertEqual(len(captured.records), 2)
        self.assertIn('nocomma', captured.output[0])

    def test_later_line_overrides_earlier(self):
        """A repeated username keeps its last password."""
        self._write("alice,old\nalice,new\n")
        store = CredentialStore.load(self.path)
        self.assertTrue(store.verify('alice', 'new'))
        self.assertFalse(store.verify('alice', 'old'))

    def test_missing_file_is_fatal(self):
        """An unreadable credentials file raises CredentialsError."""
        missing = os.path.join(self.tmpdir.name, 'nope.csv')
        with self.assertRaises(CredentialsError):
            CredentialStore.load(missing)

    def test_verify_unknown_user(self):
        """Unknown users never verify, whatever the password."""
        store = CredentialStore({'alice': 'secret123'})
        self.assertFalse(store.verify('mallory', 'secret123'))
        self.assertFalse(store.verify('alice', 'Secret123'))
        self.assertTrue(store.verify('alice', 'secret123'))
        self.assertIn('alice', store)
        self.assertNotIn('mallory', store)

    def test_store_is_isolated_from_source_mapping(self):
        """Mutating the mapping the store was built from has no effect."""
        users = {'alice': 'secret123'}
        store = CredentialStore(users)
        users['alice'] = 'changed'
        users['eve'] = 'x'

        self.assertTrue(store.verify('alice', 'secret123'))
        self.assertNotIn('eve', store)


if __name__ == '__main__':
    unittest.main()
