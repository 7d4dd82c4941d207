from loguru import logger

from trade_analytics.utils.logging import setup_logging


def test_setup_logging_writes_to_file(tmp_path) -> None:
    log_file = setup_logging("DEBUG", tmp_path / "logs")

    logger.debug("equity curve built")
    logger.complete()

    assert log_file == tmp_path / "logs" / "trade-analytics.log"
    assert "equity curve built" in log_file.read_text(encoding="utf-8")


def test_file_keeps_debug_trail_below_stderr_level(tmp_path, capsys) -> None:
    log_file = setup_logging("warning", tmp_path)

    logger.debug("bucket sizes computed")
    logger.warning("journal is empty")
    logger.complete()

    content = log_file.read_text(encoding="utf-8")
    assert "bucket sizes computed" in content
    assert "journal is empty" in content

    err = capsys.readouterr().err
    assert "journal is empty" in err
    assert "bucket sizes computed" not in err


def test_records_carry_command_name(tmp_path) -> None:
    log_file = setup_logging("INFO", tmp_path)

    logger.info("outside")
    with logger.contextualize(command="Stats"):
        logger.info("inside")
    logger.complete()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert any("| -          |" in line and "outside" in line for line in lines)
    assert any("| Stats      |" in line and "inside" in line for line in lines)
