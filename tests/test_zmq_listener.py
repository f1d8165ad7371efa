import json

import pytest
import zmq

from m2ebridge.config import GlobalConfig
from m2ebridge.zmq_listener import (
    API_VERSION,
    GREETING,
    ZmqListener,
    ZmqRequest,
    zmq_request_from_string,
)


@pytest.fixture
def config(tmp_path):
    pipelines = tmp_path / "pipelines.json"
    pipelines.write_text("{}", encoding="utf-8")
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(
        json.dumps(
            {
                "pipelines_path": str(pipelines),
                "authbundles_db_path": str(tmp_path / "auth.db"),
                "api_authentication": True,
            }
        ),
        encoding="utf-8",
    )
    cfg = GlobalConfig()
    cfg.load(cfg_path)
    return cfg, cfg_path


@pytest.mark.parametrize(
    "text, expected",
    [
        ("api_version", ZmqRequest.API_VERSION),
        ("status", ZmqRequest.STATUS),
        ("set_api_auth_on", ZmqRequest.SET_API_AUTH_ON),
        ("set_api_auth_off", ZmqRequest.SET_API_AUTH_OFF),
        ("hello", ZmqRequest.NONE),
        ("", ZmqRequest.NONE),
        ("STATUS", ZmqRequest.NONE),
    ],
)
def test_request_from_string(text, expected):
    assert zmq_request_from_string(text) is expected


def test_basic_responses():
    listener = ZmqListener(None, "tcp://127.0.0.1:*")
    assert listener.get_response(ZmqRequest.STATUS) == "running"
    assert listener.get_response(ZmqRequest.API_VERSION) == API_VERSION
    assert listener.get_response(ZmqRequest.NONE) == "Hello from m2e-bridge"


def test_auth_toggle_persists(config):
    cfg, cfg_path = config
    listener = ZmqListener(cfg, "tcp://127.0.0.1:*")
    assert listener.get_response(ZmqRequest.SET_API_AUTH_OFF) == "ok"
    assert cfg.api_authentication is False
    assert json.loads(cfg_path.read_text(encoding="utf-8"))["api_authentication"] is False
    assert listener.get_response(ZmqRequest.SET_API_AUTH_ON) == "ok"
    assert cfg.api_authentication is True


def test_auth_toggle_fails_when_unsaved():
    listener = ZmqListener(GlobalConfig(), "tcp://127.0.0.1:*")
    assert listener.get_response(ZmqRequest.SET_API_AUTH_ON) == "fail"


def test_auth_toggle_fails_without_config():
    listener = ZmqListener(None, "tcp://127.0.0.1:*")
    assert listener.get_response(ZmqRequest.SET_API_AUTH_OFF) == "fail"


def _ask(endpoint, text):
    ctx = zmq.Context()
    sock = ctx.socket(zmq.REQ)
    sock.setsockopt(zmq.RCVTIMEO, 5000)
    sock.setsockopt(zmq.LINGER, 0)
    try:
        sock.connect(endpoint)
        sock.send_string(text)
        return sock.recv_string()
    finally:
        sock.close()
        ctx.term()


def test_round_trip_over_socket(config):
    cfg, _ = config
    listener = ZmqListener(cfg, "tcp://127.0.0.1:*")
    listener.start()
    try:
        assert listener.running
        assert _ask(listener.bound_endpoint, "status") == "running"
        assert _ask(listener.bound_endpoint, "whatever") == GREETING
        assert _ask(listener.bound_endpoint, "set_api_auth_off") == "ok"
        assert cfg.api_authentication is False
    finally:
        listener.stop()
    assert not listener.running


def test_start_twice_and_restart():
    listener = ZmqListener(None, "tcp://127.0.0.1:*")
    listener.start()
    first = listener.bound_endpoint
    listener.start()
    assert listener.bound_endpoint == first
    listener.stop()
    listener.start()
    try:
        assert _ask(listener.bound_endpoint, "api_version") == API_VERSION
    finally:
        listener.stop()


def test_stop_without_start_is_harmless():
    listener = ZmqListener(None, "tcp://127.0.0.1:*")
    listener.stop()
    assert not listener.running


def test_bad_endpoint_raises():
    listener = ZmqListener(None, "bogus://nowhere")
    with pytest.raises(zmq.ZMQError):
        listener.start()
    assert not listener.running


def test_get_instance_is_singleton():
    first = ZmqListener.get_instance()
    second = ZmqListener.get_instance()
    assert first is second