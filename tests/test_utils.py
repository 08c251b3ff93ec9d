import logging
import os
import sys

import pytest

from scriptshim.utils import configure_logging, debug_enabled, spawn_and_wait


@pytest.fixture
def scriptshim_logger():
    logger = logging.getLogger("scriptshim")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_debug_enabled():
    assert debug_enabled({"SCRIPTSHIM_DEBUG": "1"})
    assert debug_enabled({"SCRIPTSHIM_DEBUG": "yes"})

    # Unset, empty and "0" keep the launcher quiet
    assert not debug_enabled({})
    assert not debug_enabled({"SCRIPTSHIM_DEBUG": ""})
    assert not debug_enabled({"SCRIPTSHIM_DEBUG": "0"})


def test_configure_logging_quiet_by_default(scriptshim_logger, capsys):
    configure_logging({})
    logging.getLogger("scriptshim.launch").debug("hidden")
    assert capsys.readouterr().err == ""


def test_configure_logging_quiet_adds_no_handlers(scriptshim_logger):
    before = list(scriptshim_logger.handlers)
    configure_logging({})
    configure_logging({"SCRIPTSHIM_DEBUG": "0"})
    assert scriptshim_logger.handlers == before


def test_package_logger_has_a_single_null_handler():
    handlers = logging.getLogger("scriptshim").handlers
    assert sum(isinstance(h, logging.NullHandler) for h in handlers) == 1


def test_configure_logging_debug_writes_prefixed_lines(scriptshim_logger, capsys):
    configure_logging({"SCRIPTSHIM_DEBUG": "1"})
    assert scriptshim_logger.level == logging.DEBUG
    handler = scriptshim_logger.handlers[-1]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter.format(logging.makeLogRecord({"msg": "resolved"})) == "[scriptshim] resolved"


@pytest.mark.skipif(os.name == "nt", reason="shebang scripts")
def test_spawn_and_wait_returns_child_status(tmp_path):
    script = tmp_path / "child.run"
    script.write_text(f"#!{sys.executable}\nimport sys\nsys.exit(len(sys.argv))\n")
    script.chmod(0o755)

    assert spawn_and_wait(str(script), [str(script), "a", "b"]) == 3


def test_spawn_and_wait_missing_target_raises(tmp_path):
    missing = str(tmp_path / "nope.run")
    with pytest.raises(OSError):
        spawn_and_wait(missing, [missing])
