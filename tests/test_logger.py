"""
Logger setup tests
"""

import logging

from app.utils.logger import LOG_FORMAT, setup_logger


def test_single_handler_across_calls():
    first = setup_logger("tour_knowledge.setup_test", "debug")
    second = setup_logger("tour_knowledge.setup_test", "debug")

    assert first is second
    assert len(second.handlers) == 1
    assert second.handlers[0].formatter._fmt == LOG_FORMAT


def test_repeated_setup_reapplies_level():
    setup_logger("tour_knowledge.level_test", "debug")
    logger = setup_logger("tour_knowledge.level_test", "warning")

    assert logger.level == logging.WARNING
    assert logger.handlers[0].level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    logger = setup_logger("tour_knowledge.fallback_test", "chatty")

    assert logger.level == logging.INFO
