import io
import json
import logging

import pytest

from plasma import logging as plog


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    plog.clear_context()


def test_json_lines_carry_context_and_extras(restore_root):
    buf = io.StringIO()
    plog.configure(json=True, level="DEBUG", stream=buf)
    log = plog.get_logger("plasma.test")
    with plog.trace_scope("t-1"):
        plog.bind(account=42)
        log.info("checked", extra={"ok": True, "msg_bytes": b"\x01\x02"})
    line = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert line["msg"] == "checked"
    assert line["trace_id"] == "t-1"
    assert line["account"] == 42
    assert line["ok"] is True
    assert line["msg_bytes"] == "0102"
    assert plog.context() == {}


def test_text_format(restore_root):
    buf = io.StringIO()
    plog.configure(json=False, level="INFO", stream=buf)
    with plog.trace_scope("abc"):
        plog.get_logger("plasma.crypto").warning("rejected")
        plog.get_logger("plasma.crypto").debug("hidden")
    out = buf.getvalue()
    assert "trace_id=abc" in out
    assert "rejected" in out
    assert "hidden" not in out


def test_bind_unbind():
    plog.clear_context()
    plog.bind(component="verifier", nonce=3)
    plog.unbind("nonce")
    assert plog.context() == {"component": "verifier"}
    plog.clear_context()


def test_adapter_merges_fields(restore_root):
    buf = io.StringIO()
    plog.configure(json=True, level="INFO", stream=buf)
    adapter = plog.with_fields(plog.get_logger("plasma.test"), component="witness")
    adapter.info("built", extra={"account": 1})
    line = json.loads(buf.getvalue().strip())
    assert line["component"] == "witness"
    assert line["account"] == 1


def test_level_coercion():
    assert plog._coerce_level("debug") == logging.DEBUG
    assert plog._coerce_level("nonsense") == logging.INFO
    assert plog._coerce_level(30) == 30
