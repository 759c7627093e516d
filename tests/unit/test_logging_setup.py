import json
import logging
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from indentbars_core.logging_setup import JsonFormatter, configure_logging, get_logger


class LoggingTests(unittest.TestCase):
    def test_json_formatter_carries_event(self):
        record = logging.LogRecord("indentbars.draw", logging.INFO, __file__, 1, "drawn %s", (3,), None)
        record.event = "render"
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["msg"], "drawn 3")
        self.assertEqual(payload["event"], "render")
        self.assertEqual(payload["level"], "INFO")

    def test_child_loggers_share_namespace(self):
        self.assertEqual(get_logger("styles").name, "indentbars.styles")
        self.assertEqual(get_logger().name, "indentbars")

    def test_file_handler_writes_json_lines(self):
        logger = logging.getLogger("indentbars")
        saved = list(logger.handlers)
        for handler in saved:
            logger.removeHandler(handler)
        try:
            with tempfile.TemporaryDirectory() as tmp:
                path = Path(tmp) / "logs" / "bars.log"
                configure_logging(log_file=path, console=False)
                get_logger("session").info("bars set up", extra={"event": "setup"})
                for handler in list(logger.handlers):
                    handler.close()
                    logger.removeHandler(handler)
                lines = path.read_text(encoding="utf-8").splitlines()
            events = [json.loads(line).get("event") for line in lines]
            self.assertIn("setup", events)
        finally:
            for handler in saved:
                logger.addHandler(handler)


if __name__ == "__main__":
    unittest.main()
