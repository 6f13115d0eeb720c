import json
import logging
import unittest

from cloofy.config import Settings
from cloofy.core.logging import JsonFormatter, setup_logging


class SetupLoggingTest(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        saved = (root.level, list(root.handlers))
        quiet = {name: logging.getLogger(name).level for name in ("httpx", "uvicorn.access")}

        def restore():
            root.setLevel(saved[0])
            root.handlers[:] = saved[1]
            for name, level in quiet.items():
                logging.getLogger(name).setLevel(level)

        self.addCleanup(restore)

    def test_json_lines_carry_service_name(self):
        setup_logging(Settings(LOG_JSON=True, APP_NAME="Cloofy Test"))
        handler = logging.getLogger().handlers[0]
        self.assertIsInstance(handler.formatter, JsonFormatter)

        record = logging.LogRecord("cloofy.services", logging.INFO, __file__, 1, "Sold %d", (3,), None)
        payload = json.loads(handler.formatter.format(record))

        self.assertEqual(payload["service"], "Cloofy Test")
        self.assertEqual(payload["logger"], "cloofy.services")
        self.assertEqual(payload["message"], "Sold 3")

    def test_chatty_libraries_are_raised_to_warning(self):
        setup_logging(Settings(LOG_LEVEL="debug"))
        self.assertEqual(logging.getLogger().level, logging.DEBUG)
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)
        self.assertEqual(logging.getLogger("uvicorn.access").level, logging.WARNING)


if __name__ == "__main__":
    unittest.main()
