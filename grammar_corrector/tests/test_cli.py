import types

from grammar_corrector import cli
from grammar_corrector.providers.openai import OpenAIProvider


def _fake_chat(content):
    async def fake_chat(self, req):
        return types.SimpleNamespace(ok=True, content=content, latency_ms=1, provider_meta={}, error=None)
    return fake_chat


def test_paste_goes_to_stdout(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk")
    monkeypatch.setattr(OpenAIProvider, "chat", _fake_chat("I went."), raising=True)
    rc = cli.main(["i has went"])
    out = capsys.readouterr()
    assert rc == 0
    assert out.out == "I went.\n"


def test_copy_writes_clipboard_file(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk")
    monkeypatch.setattr(OpenAIProvider, "chat", _fake_chat("I went."), raising=True)
    clip = tmp_path / "clip.txt"
    rc = cli.main(["--copy", "--clipboard", str(clip), "i has went"])
    assert rc == 0
    assert clip.read_text(encoding="utf-8") == "I went."
    assert "Response copied to clipboard" in capsys.readouterr().err


def test_missing_keys_exit_nonzero(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    rc = cli.main(["text"])
    assert rc == 1
    assert "Please configure either OpenAI or Gemini API key" in capsys.readouterr().err


def test_env_file_supplies_key(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("GOOGLE_API_KEY=g-from-file\nDEFAULT_PROVIDER=Gemini\n", encoding="utf-8")
    seen = {}

    async def fake_chat(self, req):
        seen["key"] = self.api_key
        return types.SimpleNamespace(ok=True, content="Ok.", latency_ms=1, provider_meta={}, error=None)

    from grammar_corrector.providers.gemini import GeminiProvider
    monkeypatch.setattr(GeminiProvider, "chat", fake_chat, raising=True)
    rc = cli.main(["text"])
    assert rc == 0
    assert seen["key"] == "g-from-file"


def test_clipboard_in_missing_directory_exits_nonzero(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk")
    monkeypatch.setattr(OpenAIProvider, "chat", _fake_chat("I went."), raising=True)
    rc = cli.main(["--copy", "--clipboard", str(tmp_path / "nope" / "clip.txt"), "i has went"])
    err = capsys.readouterr().err
    assert rc == 1
    assert "No such file or directory" in err
    assert "Response copied to clipboard" not in err


def test_bad_timeout_setting_exits_nonzero(monkeypatch, capsys, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENAI_API_KEY", "sk")
    monkeypatch.setenv("CORRECTOR_TIMEOUT_S", "abc")
    rc = cli.main(["text"])
    assert rc == 1
    assert "Invalid configuration: timeout_s" in capsys.readouterr().err
