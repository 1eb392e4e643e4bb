import pytest

from replay_engine.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_quiet_preset_accepts_events_and_spans() -> None:
    telemetry.configure(preset="quiet")
    try:
        telemetry.record_event("history.test", level="debug", data={"index": 1})
        with telemetry.span(
            "history::test", component="history", metadata={"length": 2}
        ) as handle:
            pass
        assert handle.metadata == {"length": "2"}
        assert handle.component_name == "history"
    finally:
        telemetry.configure()


def test_span_reraises_failures() -> None:
    with pytest.raises(KeyError):
        with telemetry.span("history::failing", metadata={"index": 3}):
            raise KeyError("boom")


def test_get_logger_is_cached() -> None:
    assert telemetry.get_logger("replay_engine.tests") is telemetry.get_logger(
        "replay_engine.tests"
    )
