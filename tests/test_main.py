import logging
import os
import socket
import tempfile
import unittest
from logging.handlers import RotatingFileHandler

from nstatsd import main, perf
from nstatsd.config import StatsdConfig
from nstatsd.lib.Statsd import StatsClientSingleton
from nstatsd.lib.logger import configure_logger


class EntryPointsTest(unittest.TestCase):
    def setUp(self):
        self.receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self.receiver.bind(("127.0.0.1", 0))
        self.receiver.settimeout(2)
        self.settings = dict(vars(StatsdConfig))
        StatsdConfig.host = "127.0.0.1"
        StatsdConfig.port = str(self.receiver.getsockname()[1])
        StatsdConfig.enabled = "true"
        StatsdConfig.prefix = ""
        self.logger = logging.getLogger("nstatsd.test")

    def tearDown(self):
        StatsClientSingleton.close()
        for name in ("host", "port", "enabled", "prefix"):
            setattr(StatsdConfig, name, self.settings[name])
        self.receiver.close()

    def test_demo(self):
        main.run(self.logger)
        lines = [self.receiver.recv(1024) for _ in range(4)]
        self.assertEqual(lines[0], b"test.increment:1|c")
        self.assertEqual(lines[1], b"test.decrement:-1|c")
        self.assertTrue(lines[2].startswith(b"test.increment:"))
        self.assertTrue(lines[2].endswith(b"|ms"))
        self.assertEqual(lines[3], b"test.gauge:25|g")

    def test_perf(self):
        elapsed = perf.run(self.logger, iterations=20)
        self.assertGreaterEqual(elapsed, 0)
        for _ in range(20):
            self.assertEqual(self.receiver.recv(1024), b"performancetest.increment:1|c")


class ConfigureLoggerTest(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("nstatsd")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_console_handler(self):
        logger = configure_logger(log_file=None)
        self.assertEqual(logger.name, "nstatsd")
        self.assertEqual(logger.level, logging.INFO)
        self.assertEqual([type(h) for h in logger.handlers], [logging.StreamHandler])

    def test_file_handler(self):
        with tempfile.TemporaryDirectory() as tmp:
            logger = configure_logger(log_file=os.path.join(tmp, "nstatsd.log"))
            self.assertIn(RotatingFileHandler, [type(h) for h in logger.handlers])
            self.tearDown()
