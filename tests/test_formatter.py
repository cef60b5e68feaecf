import io
import json
import logging
from datetime import datetime

import pytest

from layerscan.formatter import JSONExtendedFormatter


def _record(level=logging.INFO, msg="hello %s", args=("world",), extra=None):
    logger = logging.getLogger("layerscan.test")
    return logger.makeRecord(
        "layerscan.test",
        level,
        "/srv/app/worker.py",
        42,
        msg,
        args,
        None,
        extra=extra,
    )


def _format(record, **kwargs):
    return json.loads(JSONExtendedFormatter(**kwargs).format(record))


def test_event_and_extra_fields():
    data = _format(_record(extra={"count": 3, "layer": "blank"}))
    assert data["Event"] == "hello world"
    assert data["count"] == 3
    assert data["layer"] == "blank"


def test_standard_record_attributes_are_not_fields():
    data = _format(_record())
    assert set(data) == {"Time", "Event", "Level"}


def test_location_shown_only_when_enabled():
    assert "Location" not in _format(_record())
    data = _format(_record(), show_ln=True)
    assert data["Location"] == "worker.py:42"


def test_errors_are_rendered_as_messages():
    data = _format(_record(extra={"err": ValueError("boom")}))
    assert data["err"] == "boom"


@pytest.mark.parametrize(
    "level, name",
    [(logging.WARNING, "warning"), (logging.CRITICAL, "fatal")],
)
def test_level_names(level, name):
    assert _format(_record(level=level))["Level"] == name


def test_time_round_trips_with_microseconds():
    record = _record()
    data = _format(record)
    parsed = datetime.strptime(data["Time"], "%Y-%m-%d %H:%M:%S.%f")
    assert parsed == datetime.fromtimestamp(record.created)


def test_html_characters_are_escaped():
    output = JSONExtendedFormatter().format(_record(msg="<a&b>", args=()))
    assert "<" not in output
    assert "&" not in output
    assert json.loads(output)["Event"] == "<a&b>"


def test_unserializable_field_raises():
    with pytest.raises(ValueError, match="Failed to marshal fields to JSON"):
        JSONExtendedFormatter().format(_record(extra={"thing": object()}))


def test_output_keys_are_sorted():
    output = JSONExtendedFormatter().format(_record(extra={"b": 1, "a": 2}))
    keys = list(json.loads(output))
    assert keys == sorted(keys)


def test_works_through_a_handler():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONExtendedFormatter())
    logger = logging.getLogger("layerscan.test.handler")
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        logger.debug("updater sleeping", extra={"scheduled": "soon"})
    finally:
        logger.removeHandler(handler)
    data = json.loads(stream.getvalue())
    assert data["Event"] == "updater sleeping"
    assert data["scheduled"] == "soon"