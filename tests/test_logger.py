import logging
import logging.handlers
import os
import tempfile
import unittest
from unittest import mock

from resource_monitor.utils import logger as logger_module
from resource_monitor.utils import get_logger, setup_logger

TEST_LOGGER = "resource_monitor_logger_test"


class LoggerSetupTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        test_logger = logging.getLogger(TEST_LOGGER)
        for handler in list(test_logger.handlers):
            test_logger.removeHandler(handler)
            handler.close()
        logger_module._loggers.pop(TEST_LOGGER, None)
        self._tmp.cleanup()

    def test_console_only_by_default(self):
        configured = setup_logger(TEST_LOGGER, console_level_name="INFO")
        self.assertEqual(configured.level, logging.INFO)
        self.assertFalse(configured.propagate)
        self.assertEqual(len(configured.handlers), 1)
        self.assertIsInstance(configured.handlers[0], logging.StreamHandler)

    def test_file_handler_added_and_writes(self):
        log_path = os.path.join(self._tmp.name, "logs", "monitor.log")
        configured = setup_logger(TEST_LOGGER, console_level_name="WARNING", log_file_path=log_path)
        file_handlers = [h for h in configured.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(configured.level, logging.DEBUG)

        configured.debug("sampled")
        file_handlers[0].flush()
        with open(log_path, encoding="utf-8") as f:
            self.assertIn("sampled", f.read())

    def test_unwritable_directory_falls_back(self):
        fallback = os.path.join(self._tmp.name, "fallback")
        os.makedirs(fallback)
        with mock.patch.object(logger_module, "_get_fallback_log_directory", return_value=fallback), \
                mock.patch.object(logger_module, "_check_directory_writable",
                                  side_effect=[(False, "denied"), (True, "ok")]):
            configured = setup_logger(TEST_LOGGER, log_file_path="/nonexistent/dir/monitor.log")
        file_handlers = [h for h in configured.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        self.assertEqual(file_handlers[0].baseFilename, os.path.join(fallback, "monitor.log"))

    def test_reconfiguring_replaces_handlers(self):
        setup_logger(TEST_LOGGER)
        configured = setup_logger(TEST_LOGGER, console_level_name="ERROR")
        self.assertEqual(len(configured.handlers), 1)
        self.assertEqual(configured.handlers[0].level, logging.ERROR)

    def test_invalid_level_name_uses_default(self):
        self.assertEqual(logger_module._get_log_level("LOUD", logging.WARNING), logging.WARNING)
        self.assertEqual(logger_module._get_log_level("debug"), logging.DEBUG)

    def test_module_loggers_propagate_to_package_logger(self):
        child = get_logger("resource_monitor.some.module")
        self.assertTrue(child.propagate)
        self.assertIn("resource_monitor", logger_module._loggers)


if __name__ == "__main__":
    unittest.main()
