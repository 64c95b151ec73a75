from logly.log import new_logger


def test_logger_writes_service_and_message(capsys):
    logger = new_logger("alpha")
    logger.info("hello there")
    out = capsys.readouterr().out
    assert "service=alpha" in out
    assert "hello there" in out


def test_debug_messages_are_emitted(capsys):
    logger = new_logger("beta")
    logger.debug("fine detail")
    assert "fine detail" in capsys.readouterr().out


def test_repeated_creation_does_not_duplicate_output(capsys):
    new_logger("gamma")
    logger = new_logger("gamma")
    logger.warning("only once")
    assert capsys.readouterr().out.count("only once") == 1


def test_distinct_services_get_distinct_loggers():
    first = new_logger("one")
    second = new_logger("two")
    assert first.name.endswith("one")
    assert second.name.endswith("two")
    assert first is not second and first is new_logger("one")


def test_percent_in_service_name(capsys):
    new_logger("100%").info("ok")
    assert "service=100%" in capsys.readouterr().out