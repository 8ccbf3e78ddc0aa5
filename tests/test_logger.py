import logging

from artic_core.logger import get_logger, summarize_for_debug


def test_get_logger_is_namespaced():
    assert get_logger("artic_core.page_fetcher").name == "artic_studio.artic_core.page_fetcher"
    assert get_logger("artic_studio.custom").name == "artic_studio.custom"


def test_namespaced_loggers_reach_app_logger(caplog):
    with caplog.at_level(logging.INFO, logger="artic_studio"):
        get_logger("tests").info("hello from tests")
    assert "hello from tests" in caplog.text


def test_summarize_for_debug_truncates_long_bodies():
    assert summarize_for_debug("short") == "short"
    summary = summarize_for_debug("x" * 500, max_chars=10)
    assert summary.startswith("xxxxxxxxxx...")
    assert "500 chars" in summary
