"""Tests for the modelsetup command line."""

import yaml

import modelsetup.cli as cli
from modelsetup.setup.prompt_utils import SetupCancelled


def _fake_probe(reachable: bool):
    async def _probe(base_url, timeout=2.0, transport=None):
        return reachable, "ok" if reachable else "Connection failed"

    return _probe


def test_parse_args_defaults():
    args = cli.parse_args([])

    assert args.auth_choice is None
    assert args.config is None
    assert args.yes is False
    assert args.dry_run is False


def test_non_interactive_run_writes_config(monkeypatch, tmp_path):
    monkeypatch.setattr("modelsetup.setup.ollama.probe_ollama", _fake_probe(True))
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        yaml.safe_dump({"models": {"providers": {"openai": {"baseUrl": "https://api.openai.com/v1"}}}}),
        encoding="utf-8",
    )

    exit_code = cli.main(
        ["--auth-choice", "ollama-api", "--base-url", "http://gpu-box:11434", "--config", str(config_file)]
    )

    assert exit_code == 0
    saved = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    assert saved["models"]["providers"]["openai"] == {"baseUrl": "https://api.openai.com/v1"}
    assert saved["models"]["providers"]["ollama"] == {
        "baseUrl": "http://gpu-box:11434/v1",
        "api": "openai-completions",
        "models": [],
    }


def test_unreachable_without_yes_leaves_file_untouched(monkeypatch, tmp_path):
    monkeypatch.setattr("modelsetup.setup.ollama.probe_ollama", _fake_probe(False))
    config_file = tmp_path / "config.yaml"

    exit_code = cli.main(
        ["--auth-choice", "ollama-api", "--base-url", "http://down:11434", "--config", str(config_file)]
    )

    assert exit_code == 0
    assert not config_file.exists()


def test_unreachable_with_yes_writes_config(monkeypatch, tmp_path):
    monkeypatch.setattr("modelsetup.setup.ollama.probe_ollama", _fake_probe(False))
    config_file = tmp_path / "config.yaml"

    exit_code = cli.main(["--auth-choice", "ollama-api", "--yes", "--config", str(config_file)])

    assert exit_code == 0
    saved = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    assert saved["models"]["providers"]["ollama"]["baseUrl"] == "http://127.0.0.1:11434/v1"


def test_dry_run_does_not_write(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr("modelsetup.setup.ollama.probe_ollama", _fake_probe(True))
    config_file = tmp_path / "config.yaml"

    exit_code = cli.main(["--auth-choice", "ollama-api", "--yes", "--dry-run", "--config", str(config_file)])

    assert exit_code == 0
    assert not config_file.exists()
    assert "openai-completions" in capsys.readouterr().out


def test_unknown_auth_choice_fails(tmp_path, capsys):
    exit_code = cli.main(["--auth-choice", "anthropic-api", "--config", str(tmp_path / "c.yaml")])

    assert exit_code == 1
    assert "Unknown auth choice" in capsys.readouterr().out


def test_invalid_config_file_fails_without_overwriting(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("models: [unclosed\n", encoding="utf-8")

    exit_code = cli.main(["--auth-choice", "ollama-api", "--yes", "--config", str(config_file)])

    assert exit_code == 1
    assert config_file.read_text(encoding="utf-8") == "models: [unclosed\n"


def test_menu_selection_is_used_without_auth_choice(monkeypatch, tmp_path):
    monkeypatch.setattr("modelsetup.setup.ollama.probe_ollama", _fake_probe(True))
    captured: dict = {}

    def _fake_select(message, choices, default=None, allow_cancel=False):
        captured["values"] = [choice.value for choice in choices]
        return "ollama-api"

    monkeypatch.setattr("modelsetup.setup.prompt_utils.q_select", _fake_select)
    config_file = tmp_path / "config.yaml"

    exit_code = cli.main(["--yes", "--config", str(config_file)])

    assert exit_code == 0
    assert captured["values"] == ["ollama-api"]
    assert config_file.exists()


def test_cancel_returns_error(monkeypatch, tmp_path):
    def _cancel(*args, **kwargs):
        raise SetupCancelled()

    monkeypatch.setattr("modelsetup.setup.prompt_utils.q_select", _cancel)

    assert cli.main(["--config", str(tmp_path / "config.yaml")]) == 1


def test_build_prompter_selects_scripted_mode():
    scripted = cli.build_prompter(cli.parse_args(["--base-url", "http://x"]))
    terminal = cli.build_prompter(cli.parse_args([]))

    assert isinstance(scripted, cli.ScriptedPrompter)
    assert scripted.text_answer == "http://x"
    assert scripted.confirm_answer is False
    assert isinstance(terminal, cli.TerminalPrompter)


def test_list_models_section_is_rewritten_not_crashing(monkeypatch, tmp_path):
    monkeypatch.setattr("modelsetup.setup.ollama.probe_ollama", _fake_probe(True))
    config_file = tmp_path / "config.yaml"
    config_file.write_text("models:\n  - ab\nagents: {}\n", encoding="utf-8")

    exit_code = cli.main(["--auth-choice", "ollama-api", "--yes", "--config", str(config_file)])

    assert exit_code == 0
    saved = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    assert saved["agents"] == {}
    assert list(saved["models"]) == ["providers"]
    assert list(saved["models"]["providers"]) == ["ollama"]
