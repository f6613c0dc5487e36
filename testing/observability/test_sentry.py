"""Tests for Sentry setup."""

import unittest
from unittest.mock import MagicMock, patch

from src.observability.sentry import SERVICE_NAME, init_sentry


class TestInitSentry(unittest.TestCase):
    """Tests for init_sentry function."""

    @patch.dict("os.environ", {}, clear=True)
    @patch("src.observability.sentry.sentry_sdk")
    def test_no_dsn_is_a_no_op(self, mock_sdk: MagicMock) -> None:
        """Test that nothing is started without SENTRY_DSN."""
        self.assertFalse(init_sentry("health"))
        mock_sdk.init.assert_not_called()

    @patch.dict("os.environ", {"SENTRY_DSN": "https://key@sentry.example/1", "APP_ENV": "prod"}, clear=True)
    @patch("src.observability.sentry.sentry_sdk")
    def test_starts_with_environment_and_tag(self, mock_sdk: MagicMock) -> None:
        """Test init arguments and the command tag."""
        self.assertTrue(init_sentry("weekly"))

        kwargs = mock_sdk.init.call_args.kwargs
        self.assertEqual(kwargs["dsn"], "https://key@sentry.example/1")
        self.assertEqual(kwargs["environment"], "prod")
        self.assertEqual(kwargs["server_name"], SERVICE_NAME)
        self.assertEqual(kwargs["traces_sample_rate"], 0.0)
        mock_sdk.set_tag.assert_called_once_with("command", "weekly")


if __name__ == "__main__":
    unittest.main()
