import socket

import pytest

from dingdong.serve import build_server, main, parse_settings


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "WORKERS", "QUEUE_SIZE", "MAX_BODY_SIZE_MB"):
        monkeypatch.delenv(f"DINGDONG_{name}", raising=False)

    settings = parse_settings([])

    assert settings.host == "0.0.0.0"
    assert settings.port == 61001
    assert settings.workers == 25
    assert settings.queue_size == 10000
    assert settings.max_body_size_mb == 100
    assert settings.max_body_size_bytes == 100 * 1024 * 1024


def test_short_flags_override_environment(monkeypatch):
    monkeypatch.setenv("DINGDONG_WORKERS", "7")

    settings = parse_settings(["-h", "127.0.0.1", "-p", "8080", "-q", "20000", "-b", "200"])

    assert settings.listen_address == "127.0.0.1:8080"
    assert settings.workers == 7
    assert settings.queue_size == 20000
    assert settings.max_body_size_mb == 200

    assert parse_settings(["-w", "50"]).workers == 50


def test_zero_workers_is_accepted():
    assert parse_settings(["-w", "0"]).workers == 0


def test_invalid_queue_size_exits():
    with pytest.raises(SystemExit):
        parse_settings(["-q", "0"])


def test_help_uses_long_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_settings(["--help"])

    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "Ding Dong - High-Performance HTTP Server" in out
    assert "Request path containing 'dump'" in out


def test_build_server_uses_settings():
    settings = parse_settings(["-h", "127.0.0.1", "-p", "9099"])

    server = build_server(settings)

    assert server.config.host == "127.0.0.1"
    assert server.config.port == 9099
    assert server.config.access_log is False


def test_listen_failure_exits_with_status_one():
    taken = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    taken.bind(("127.0.0.1", 0))
    taken.listen(1)
    port = taken.getsockname()[1]
    try:
        with pytest.raises(SystemExit) as excinfo:
            main(["-h", "127.0.0.1", "-p", str(port), "-w", "0"])
    finally:
        taken.close()

    assert excinfo.value.code == 1
