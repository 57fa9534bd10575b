"""
Unit Tests for Keypair Loading
"""

import json
import os
import tempfile
from unittest import TestCase
from unittest.mock import patch

import base58
from solders.keypair import Keypair

from ..exceptions import KeypairLoadError
from ..keypair import load_keypair, load_keypair_from_base58, load_keypair_from_file


class TestKeypairLoading(TestCase):
    """Test cases for keypair sources and failures."""

    def setUp(self):
        """Set up a keypair and a temporary key directory."""
        self.keypair = Keypair.from_seed(bytes(range(32)))
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)
        self.keypair_file = self._write("secretKey.json", json.dumps(list(bytes(self.keypair))))

    def _write(self, name, content):
        path = os.path.join(self.temp_dir.name, name)
        with open(path, 'w') as f:
            f.write(content)
        return path

    def test_load_json_array_file(self):
        """Test loading a web3.js style secret key file."""
        loaded = load_keypair_from_file(self.keypair_file)

        self.assertEqual(loaded.pubkey(), self.keypair.pubkey())

    def test_home_directory_is_expanded(self):
        """Test a ~ prefixed path resolves against the home directory."""
        self._write("id.json", json.dumps(list(bytes(self.keypair))))

        with patch.dict(os.environ, {'HOME': self.temp_dir.name}):
            loaded = load_keypair(keypair_path="~/id.json")

        self.assertEqual(loaded.pubkey(), self.keypair.pubkey())

    def test_load_base58_secret_key(self):
        """Test loading a base58 64-byte secret key."""
        encoded = base58.b58encode(bytes(self.keypair)).decode()

        self.assertEqual(load_keypair_from_base58(encoded).pubkey(), self.keypair.pubkey())

    def test_load_base58_seed(self):
        """Test loading a base58 32-byte seed."""
        encoded = base58.b58encode(bytes(range(32))).decode()

        self.assertEqual(load_keypair_from_base58(encoded).pubkey(), self.keypair.pubkey())

    def test_private_key_takes_precedence(self):
        """Test a private key wins over the keypair file."""
        other = Keypair.from_seed(bytes(32))
        encoded = base58.b58encode(bytes(other)).decode()

        loaded = load_keypair(keypair_path=self.keypair_file, private_key=encoded)

        self.assertEqual(loaded.pubkey(), other.pubkey())

    def test_missing_file(self):
        """Test a missing file raises KeypairLoadError."""
        with self.assertRaises(KeypairLoadError):
            load_keypair(keypair_path=os.path.join(self.temp_dir.name, "missing.json"))

    def test_malformed_json(self):
        """Test malformed JSON raises KeypairLoadError."""
        path = self._write("bad.json", "{not json")

        with self.assertRaises(KeypairLoadError):
            load_keypair_from_file(path)

    def test_wrong_key_length(self):
        """Test key material of the wrong length is rejected."""
        path = self._write("short.json", json.dumps([1] * 10))

        with self.assertRaises(KeypairLoadError):
            load_keypair_from_file(path)

    def test_invalid_base58(self):
        """Test characters outside the base58 alphabet are rejected."""
        with self.assertRaises(KeypairLoadError):
            load_keypair_from_base58("0OIl")

    def test_no_source(self):
        """Test there is no fallback to a generated keypair."""
        with self.assertRaises(KeypairLoadError):
            load_keypair()
