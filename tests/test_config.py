import unittest

from nstatsd.config import ClientConfig
from nstatsd.errors import ConfigurationError


class Settings:
    host = "statsd.local"
    port = "9125"
    enabled = "false"
    prefix = "app"


class ClientConfigTest(unittest.TestCase):
    def test_defaults(self):
        config = ClientConfig()
        self.assertEqual(config, ("localhost", 8125, "", True))

    def test_from_settings(self):
        config = ClientConfig.from_settings(Settings)
        self.assertEqual(config.host, "statsd.local")
        self.assertEqual(config.port, 9125)
        self.assertEqual(config.prefix, "app.")
        self.assertFalse(config.enabled)

    def test_enabled_flags(self):
        for value in ["true", "True", "1", "yes", True]:
            self.assertTrue(ClientConfig(enabled=value).enabled)
        for value in ["false", "0", "no", False]:
            self.assertFalse(ClientConfig(enabled=value).enabled)

    def test_invalid_port(self):
        for port in ["abc", None, 0, 65536, "-1", True]:
            with self.assertRaises(ConfigurationError):
                ClientConfig(port=port)

    def test_invalid_enabled(self):
        with self.assertRaises(ConfigurationError):
            ClientConfig(enabled="maybe")

    def test_invalid_host(self):
        for host in ["", "  ", None]:
            with self.assertRaises(ConfigurationError):
                ClientConfig(host=host)

    def test_invalid_prefix(self):
        for prefix in ["app|x", "app:x", "a@b", "app\nx", "caf\u00e9", ".app", 5, None]:
            with self.assertRaises(ConfigurationError):
                ClientConfig(prefix=prefix)

    def test_valid_prefix(self):
        self.assertEqual(ClientConfig(prefix="web.api").prefix, "web.api.")
        self.assertEqual(ClientConfig(prefix="web.").prefix, "web.")
        self.assertEqual(ClientConfig(prefix="  ").prefix, "")

    def test_missing_setting(self):
        class Partial:
            host = "localhost"
            port = "8125"

        with self.assertRaises(ConfigurationError):
            ClientConfig.from_settings(Partial)

    def test_immutable(self):
        config = ClientConfig(prefix="app")
        with self.assertRaises(AttributeError):
            config.prefix = "other."
