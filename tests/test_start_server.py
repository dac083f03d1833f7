import uvicorn

import start_server
from app.config.settings import settings


def test_main_runs_uvicorn_with_configured_server(monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setitem(settings.SERVER, "port", 9100)
    monkeypatch.setitem(settings.SMS, "account_sid", "")

    start_server.main()

    app, kwargs = calls[0]
    assert app == "main:app"
    assert kwargs["port"] == 9100
    assert kwargs["reload"] is False
    assert kwargs["log_level"] == settings.LOG_LEVEL.lower()
    assert "sms (twilio)   disabled" in capsys.readouterr().out
