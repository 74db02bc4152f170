import io
import logging

from printform.logging.logger import Log


class TestConfigure:
    def test_writes_to_given_stream(self) -> None:
        stream = io.StringIO()
        logger = logging.getLogger("printform")
        saved = logger.handlers[:]
        logger.handlers.clear()
        try:
            Log.configure("info", stream=stream)
            Log.info("Image 3 extracted via AI Vision")
            Log.debug("hidden")
        finally:
            logger.handlers[:] = saved

        output = stream.getvalue()
        assert "[INFO] printform: Image 3 extracted via AI Vision" in output
        assert "hidden" not in output

    def test_caps_http_library_loggers(self) -> None:
        Log.configure("DEBUG", stream=io.StringIO())
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("openai").level == logging.WARNING


class TestForwarding:
    def test_each_level_reaches_handler(self) -> None:
        stream = io.StringIO()
        logger = logging.getLogger("printform")
        saved = logger.handlers[:]
        logger.handlers.clear()
        try:
            Log.configure("DEBUG", stream=stream)
            Log.debug("d-msg")
            Log.info("i-msg")
            Log.warning("w-msg")
            Log.error("e-msg")
        finally:
            logger.handlers[:] = saved

        output = stream.getvalue()
        for level, message in (
            ("DEBUG", "d-msg"),
            ("INFO", "i-msg"),
            ("WARNING", "w-msg"),
            ("ERROR", "e-msg"),
        ):
            assert f"[{level}] printform: {message}" in output

    def test_forwarders_are_documented(self) -> None:
        for name in ("info", "error", "exception", "warning", "debug"):
            assert getattr(Log, name).__doc__
