"""
Unit tests for AppConfig environment parsing and logging setup.
"""
import logging
import unittest
from unittest.mock import patch

from poolside.config import AppConfig, LOG_FORMAT, configure_logging


class TestAppConfig(unittest.TestCase):
    """Test cases for reading settings from the environment."""

    def test_defaults(self) -> None:
        """Test an empty environment yields the defaults."""
        config = AppConfig.from_env({})
        self.assertEqual(config.api_url, "http://localhost:8000/api")
        self.assertIsNone(config.api_token)
        self.assertEqual(config.http_timeout, 10.0)
        self.assertEqual((config.host, config.port), ("127.0.0.1", 7122))
        self.assertEqual(config.log_level, "INFO")
        self.assertEqual(config.max_trackers, 16)

    def test_environment_overrides(self) -> None:
        """Test each variable overrides its setting."""
        config = AppConfig.from_env({
            "POOLSIDE_API_URL": "https://stats.example.org/api/",
            "POOLSIDE_API_TOKEN": " secret ",
            "POOLSIDE_HTTP_TIMEOUT": "2.5",
            "POOLSIDE_PORT": "9000",
            "POOLSIDE_LOG_LEVEL": "debug",
            "POOLSIDE_MAX_TRACKERS": "4",
        })
        self.assertEqual(config.api_url, "https://stats.example.org/api")
        self.assertEqual(config.api_token, "secret")
        self.assertEqual(config.http_timeout, 2.5)
        self.assertEqual(config.port, 9000)
        self.assertEqual(config.log_level, "DEBUG")
        self.assertEqual(config.max_trackers, 4)

    def test_invalid_numbers_raise(self) -> None:
        """Test unparseable or out-of-range numbers are rejected."""
        with self.assertRaises(ValueError):
            AppConfig.from_env({"POOLSIDE_PORT": "eighty"})
        with self.assertRaises(ValueError):
            AppConfig.from_env({"POOLSIDE_HTTP_TIMEOUT": "0"})
        with self.assertRaises(ValueError):
            AppConfig.from_env({"POOLSIDE_MAX_TRACKERS": "0"})

    def test_configure_logging(self) -> None:
        """Test logging is configured with the requested level."""
        with patch("poolside.config.logging.basicConfig") as basic_config:
            configure_logging("warning")
        basic_config.assert_called_once_with(level=logging.WARNING, format=LOG_FORMAT)


if __name__ == "__main__":
    unittest.main()
