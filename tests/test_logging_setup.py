"""
Tests for command-line logging configuration.
"""

import logging

import pytest

from utils.logging_setup import configure_logging, create_run_directory, setup_arena_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    engine_level = logging.getLogger("engine.game").level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("engine.game").setLevel(engine_level)


def test_create_run_directory(tmp_path):
    run_dir = create_run_directory(tmp_path, ["heuristic", "random"])
    assert run_dir.is_dir()
    assert run_dir.name.endswith("_heuristic_vs_random")
    assert create_run_directory(tmp_path / "other").name.endswith("_arena")


def test_setup_arena_logging_writes_file(tmp_path, restore_root_logger):
    run_dir, log_file = setup_arena_logging(tmp_path, ["a", "b"])
    assert log_file == run_dir / "arena.log"

    logging.getLogger("scripts.arena").info("match finished")
    logging.getLogger("engine.game").info("P1 placed red 5 at (0,0)")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text()
    assert "match finished" in content
    assert "placed red 5" not in content


def test_configure_logging_replaces_handlers(restore_root_logger):
    configure_logging(logging.INFO)
    configure_logging(logging.DEBUG, quiet_engine=False)
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG
    assert logging.getLogger("engine.game").level == logging.NOTSET
