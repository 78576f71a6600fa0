"""
Tests for the CLI run flow and its terminal output.

Shows sample output for each scenario. Run with:
    pytest tests/test_cli.py -v
    pytest tests/test_cli.py -v -s   # see actual terminal output
"""

import re

import pytest

from autocommit.cli.args import parse_args
from autocommit.cli.main import _display_message, _resolve_language, main, run
from autocommit.config import Config
from autocommit.git import GitRepository
from autocommit.llm import CommitMessage, EmptyResponseError

ANSI_RE = re.compile(r'\033\[[0-9;]*m')

MESSAGE = CommitMessage(title="Add config loader", description="Reads .autocommitrc from cwd or home.")


class FakeClient:
    """Stands in for OpenRouterClient; records how it was built and called."""

    instances = []

    def __init__(self, api_key, model=None, api_url=None, result=MESSAGE):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.result = result
        self.calls = []
        FakeClient.instances.append(self)

    @property
    def name(self):
        return f"Fake ({self.model})"

    def generate(self, change_text, language=None):
        self.calls.append((change_text, language))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
    monkeypatch.delenv("AUTOCOMMIT_MODEL", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    FakeClient.instances = []


@pytest.fixture
def strip_ansi():
    """Return a function that removes ANSI escape codes."""
    def _strip(text: str) -> str:
        return ANSI_RE.sub('', text)
    return _strip


@pytest.fixture
def dirty_runner(make_runner):
    """A repository with one modified file."""
    return make_runner(outputs={'status': " M src/app.py\n", 'diff': "+print('hi')\n"})


def _run(runner, argv=(), config=None, client_factory=FakeClient, read_line=lambda prompt: "en"):
    args = parse_args(list(argv))
    return run(args, config or Config(), GitRepository(runner), client_factory=client_factory, read_line=read_line)


# ---------------------------------------------------------------------------
# Run flow
# ---------------------------------------------------------------------------

class TestRunFlow:

    def test_happy_path_commits_and_pushes(self, dirty_runner):
        assert _run(dirty_runner) == 0
        assert dirty_runner.commands == ['rev-parse', 'status', 'diff', 'add', 'commit', 'push']
        assert dirty_runner.calls[4] == ('commit', '-m', MESSAGE.title, '-m', MESSAGE.description)

    def test_change_text_reaches_the_client(self, dirty_runner):
        _run(dirty_runner)
        change_text, language = FakeClient.instances[0].calls[0]
        assert " M src/app.py" in change_text
        assert "+print('hi')" in change_text
        assert language == "English"

    def test_wait_label_names_the_model(self, dirty_runner, capsys, strip_ansi):
        _run(dirty_runner, argv=["-m", "openai/gpt-4o-mini"])
        out = strip_ansi(capsys.readouterr().out)
        assert "Generating commit message using Fake (openai/gpt-4o-mini)..." in out

    def test_empty_changes_stop_before_network_and_commit(self, make_runner, monkeypatch, capsys):
        monkeypatch.delenv("OPENROUTER_API_KEY")
        runner = make_runner()

        def no_prompt(prompt):
            raise AssertionError("language prompt must not be shown")

        assert _run(runner, read_line=no_prompt) == 0
        assert runner.commands == ['rev-parse', 'status', 'diff']
        assert FakeClient.instances == []
        assert "Nothing to commit" in capsys.readouterr().out

    def test_not_a_repository(self, make_runner, capsys):
        runner = make_runner(fail_on={'rev-parse'})
        assert _run(runner) == 1
        assert runner.commands == ['rev-parse']
        assert "Not inside a git repository" in capsys.readouterr().err

    def test_missing_api_key(self, dirty_runner, monkeypatch, capsys):
        monkeypatch.delenv("OPENROUTER_API_KEY")
        assert _run(dirty_runner) == 1
        assert FakeClient.instances == []
        assert 'add' not in dirty_runner.commands
        assert "OPENROUTER_API_KEY" in capsys.readouterr().err

    def test_generation_failure_aborts_before_side_effects(self, dirty_runner, capsys):
        def failing(api_key, **kwargs):
            return FakeClient(api_key, result=EmptyResponseError("LLM response contained no choices or empty content"), **kwargs)

        assert _run(dirty_runner, client_factory=failing) == 1
        assert dirty_runner.commands == ['rev-parse', 'status', 'diff']
        assert "no choices" in capsys.readouterr().err

    def test_commit_failure_skips_push(self, make_runner, capsys):
        runner = make_runner(outputs={'status': " M a.py\n"}, fail_on={'commit'})
        assert _run(runner) == 1
        assert 'push' not in runner.commands
        assert "Failed to commit" in capsys.readouterr().err

    def test_push_failure_is_reported(self, make_runner, capsys):
        runner = make_runner(outputs={'status': " M a.py\n"}, fail_on={'push'})
        assert _run(runner) == 1
        assert "Failed to push" in capsys.readouterr().err

    def test_no_push_flag(self, dirty_runner):
        assert _run(dirty_runner, argv=['--no-push']) == 0
        assert dirty_runner.commands[-1] == 'commit'

    def test_push_disabled_in_config(self, dirty_runner):
        assert _run(dirty_runner, config=Config(push=False)) == 0
        assert 'push' not in dirty_runner.commands

    def test_dry_run_only_generates(self, dirty_runner, capsys):
        assert _run(dirty_runner, argv=['--dry-run']) == 0
        assert dirty_runner.commands == ['rev-parse', 'status', 'diff']
        assert MESSAGE.title in capsys.readouterr().out

    def test_model_precedence(self, dirty_runner, monkeypatch):
        monkeypatch.setenv("AUTOCOMMIT_MODEL", "env/model")
        _run(dirty_runner, config=Config(model="config/model"))
        assert FakeClient.instances[-1].model == "env/model"

        _run(dirty_runner, argv=['-m', 'cli/model'], config=Config(model="config/model"))
        assert FakeClient.instances[-1].model == "cli/model"

    def test_api_url_from_config(self, dirty_runner):
        _run(dirty_runner, config=Config(api_url="http://localhost:9000/v1"))
        assert FakeClient.instances[0].api_url == "http://localhost:9000/v1"


# ---------------------------------------------------------------------------
# Language resolution
# ---------------------------------------------------------------------------

class TestResolveLanguage:

    @pytest.mark.parametrize("typed, expected", [
        ("es", "Spanish"),
        ("en", "English"),
        ("", "English"),
        ("de", "English"),
        ("??", "English"),
    ])
    def test_stdin_line(self, typed, expected):
        args = parse_args([])
        assert _resolve_language(args, Config(), lambda prompt: typed) == expected

    def test_prompt_text(self):
        seen = []
        _resolve_language(parse_args([]), Config(), lambda prompt: seen.append(prompt) or "")
        assert seen == ["Enter commit language (en/es) [en]: "]

    def test_eof_means_english(self):
        def eof(prompt):
            raise EOFError
        assert _resolve_language(parse_args([]), Config(), eof) == "English"

    def test_flag_skips_prompt(self):
        def no_prompt(prompt):
            raise AssertionError("should not prompt")
        assert _resolve_language(parse_args(['--lang', 'es']), Config(), no_prompt) == "Spanish"

    def test_config_language_skips_prompt(self):
        def no_prompt(prompt):
            raise AssertionError("should not prompt")
        assert _resolve_language(parse_args([]), Config(language="es"), no_prompt) == "Spanish"

    def test_spanish_reaches_client(self, dirty_runner):
        _run(dirty_runner, read_line=lambda prompt: "es")
        assert FakeClient.instances[0].calls[0][1] == "Spanish"


# ---------------------------------------------------------------------------
# Message display
# ---------------------------------------------------------------------------

class TestDisplayMessage:

    def test_title_and_description(self, capsys, strip_ansi):
        _display_message(MESSAGE, 70)
        out = strip_ansi(capsys.readouterr().out)
        assert MESSAGE.title in out
        assert MESSAGE.description in out

    def test_has_horizontal_rules(self, capsys, strip_ansi):
        _display_message(CommitMessage(title="Bump version", description=""), 70)
        out = strip_ansi(capsys.readouterr().out)
        lines = [l for l in out.split("\n") if l.strip()]
        assert all(c == "─" for c in lines[0].strip())
        assert all(c == "─" for c in lines[-1].strip())

    def test_long_title_warns(self, capsys, strip_ansi):
        _display_message(CommitMessage(title="x" * 90, description="body"), 70)
        out = strip_ansi(capsys.readouterr().out)
        assert "Title is 90 chars (limit 70)" in out

    def test_short_title_no_warning(self, capsys):
        _display_message(MESSAGE, 70)
        assert "limit" not in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

class TestMain:

    def test_display_config(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        assert main(['--display-config']) == 0
        out = capsys.readouterr().out
        assert "Current Configuration" in out
        assert "OPENROUTER_API_KEY" in out

    def test_install_completion(self, capsys):
        assert main(['--install-completion']) == 0
        assert "register-python-argcomplete autocommit" in capsys.readouterr().out

    def test_dotenv_supplies_api_key(self, tmp_path, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY")
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("OPENROUTER_API_KEY=sk-from-dotenv\n")

        from autocommit.config import get_api_key, load_environment
        load_environment()
        assert get_api_key() == "sk-from-dotenv"
