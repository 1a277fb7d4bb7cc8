#!/usr/bin/env python3
"""
Unit tests for the diagnostics runner.
Checks exit codes and report output against a stubbed upstream.
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import patch

import httpx

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from config.settings import Settings
from youtube138_mcp import diagnostics
from youtube138_mcp.dispatcher import ToolDispatcher

TEST_RAPIDAPI_KEY = "test_rapidapi_key_123456"


def stub_dispatcher(settings, statuses):
    """Dispatcher whose upstream answers with the given status per path."""
    calls = []

    def handler(request):
        calls.append(request.url.path)
        status = statuses.get(request.url.path, 200)
        return httpx.Response(status, json={"path": request.url.path, "items": ["x" * 2000]})

    return ToolDispatcher(settings, transport=httpx.MockTransport(handler)), calls


@pytest.fixture
def settings():
    return Settings(rapidapi_key=TEST_RAPIDAPI_KEY)


class TestDiagnosticsExitCodes:
    """Test diagnostics exit codes."""

    def test_bad_timeout_setting_exits_one(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("RAPIDAPI_KEY", TEST_RAPIDAPI_KEY)
        monkeypatch.setenv("YOUTUBE138_TIMEOUT", "soon")

        assert diagnostics.run(pause=0) == 1
        out = capsys.readouterr().out
        assert "Diagnostics aborted" in out
        assert "YOUTUBE138_TIMEOUT" in out

    def test_malformed_credentials_file_exits_one(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
        monkeypatch.delenv("YOUTUBE138_TIMEOUT", raising=False)
        (tmp_path / "credentials.yml").write_text("rapidapi: [unclosed\n")

        assert diagnostics.run(pause=0) == 1
        assert "Diagnostics aborted" in capsys.readouterr().out

    def test_missing_credential_exits_before_any_call(self, capsys):
        empty = Settings(rapidapi_key=None)
        dispatcher, calls = stub_dispatcher(empty, {})

        assert diagnostics.run(settings=empty, dispatcher=dispatcher, pause=0) == 1
        assert calls == []
        assert "RAPIDAPI_KEY" in capsys.readouterr().out

    def test_all_calls_succeed(self, settings, capsys):
        dispatcher, calls = stub_dispatcher(settings, {})

        assert diagnostics.run(settings=settings, dispatcher=dispatcher, pause=0) == 0
        assert calls == ["/search/", "/auto-complete/", "/home/"]

        out = capsys.readouterr().out
        assert "Passed: 3" in out
        assert "Failed: 0" in out

    def test_one_failure_fails_the_run(self, settings, capsys):
        dispatcher, calls = stub_dispatcher(settings, {"/auto-complete/": 403})

        assert diagnostics.run(settings=settings, dispatcher=dispatcher, pause=0) == 1
        # A failed call does not stop the remaining ones
        assert len(calls) == 3

        out = capsys.readouterr().out
        assert "Passed: 2" in out
        assert "HTTP status: 403" in out

    def test_unexpected_exception_exits_one(self, settings, capsys):
        dispatcher, _ = stub_dispatcher(settings, {})
        with patch.object(dispatcher, "invoke", side_effect=RuntimeError("boom")):
            assert diagnostics.run(settings=settings, dispatcher=dispatcher, pause=0) == 1
        assert "boom" in capsys.readouterr().out

    def test_main_exits_with_run_code(self):
        with patch.object(diagnostics, "run", return_value=1):
            with pytest.raises(SystemExit) as exc_info:
                diagnostics.main()
        assert exc_info.value.code == 1


class TestDiagnosticsOutput:
    """Test report formatting."""

    def test_key_is_masked(self, settings, capsys):
        dispatcher, _ = stub_dispatcher(settings, {})
        diagnostics.run(settings=settings, dispatcher=dispatcher, pause=0)

        out = capsys.readouterr().out
        assert TEST_RAPIDAPI_KEY not in out
        assert diagnostics.mask_key(TEST_RAPIDAPI_KEY) in out

    def test_long_payload_is_truncated(self, settings, capsys):
        dispatcher, _ = stub_dispatcher(settings, {})
        diagnostics.run(settings=settings, dispatcher=dispatcher, pause=0)
        assert "truncated" in capsys.readouterr().out

    def test_mask_key(self):
        assert diagnostics.mask_key("abcdefghijklmnop") == "abcdefghij..."


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
