import logging

import pytest

import tinct
import tinct.cache
import tinct.markup
import tinct.theme


@pytest.fixture
def internal_log(tmp_path):
    logger = logging.getLogger("tinct.internal")
    warnings_logger = logging.getLogger("py.warnings")
    handlers = list(logger.handlers), list(warnings_logger.handlers)
    level, propagate = logger.level, logger.propagate
    path = tmp_path / "tinct.log"
    tinct.enable_internal_logging(str(path), "DEBUG")
    try:
        yield path
    finally:
        for handler in logger.handlers:
            if handler not in handlers[0]:
                handler.close()
        logger.handlers[:] = handlers[0]
        warnings_logger.handlers[:] = handlers[1]
        logger.setLevel(level)
        logger.propagate = propagate
        logging.captureWarnings(False)


def test_logger_does_not_propagate():
    assert tinct._logger.name == "tinct.internal"
    assert tinct._logger.propagate is False


def test_cache_clear_is_logged(internal_log):
    tinct.cache.get_registry().clear()
    assert "clearing parse caches" in internal_log.read_text()


def test_unresolved_tag_is_logged(internal_log):
    tinct.markup.render("[no_such_style]x")
    assert "no_such_style" in internal_log.read_text()
