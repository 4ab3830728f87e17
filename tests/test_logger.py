import io

from utils.logger import Logger, LogCategory, LogLevel


def _logger(min_level=LogLevel.DEBUG):
    stream = io.StringIO()
    return Logger(min_level=min_level, use_colors=False, stream=stream), stream


def test_message_with_details_tree():
    logger, stream = _logger()

    logger.info(LogCategory.ANIMATION, "Rotation started", handle=1, words=4)

    lines = stream.getvalue().splitlines()
    assert "ANIMATION" in lines[0]
    assert lines[0].endswith("✓ Rotation started")
    assert lines[1].strip() == "├─ handle: 1"
    assert lines[2].strip() == "└─ words: 4"


def test_below_min_level_is_dropped():
    logger, stream = _logger(LogLevel.WARN)

    logger.info(LogCategory.TIMING, "quiet")
    logger.error(LogCategory.TIMING, "loud")

    output = stream.getvalue()
    assert "quiet" not in output
    assert "✗ loud" in output


def test_bound_logger_uses_category():
    logger, stream = _logger()

    logger.for_category(LogCategory.CONFIG).warn("Falling back")

    assert "CONFIG" in stream.getvalue()
    assert "⚠ Falling back" in stream.getvalue()


def test_no_ansi_codes_when_colors_disabled():
    logger, stream = _logger()
    logger.debug(LogCategory.EVENT, "plain")
    assert "\033[" not in stream.getvalue()
