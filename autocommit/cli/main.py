"""CLI Main Entry Point"""

import argparse
from typing import Callable

from autocommit.cli.args import parse_args
from autocommit.cli.commands import display_config, run_install_completion
from autocommit.config import Config, get_api_key, get_env_model, load_config, load_environment
from autocommit.git import ChangeSet, GitError, GitRepository
from autocommit.llm import CommitMessage, LLMError, OpenRouterClient
from autocommit.output import RULE, Spinner, bold, dim, info, print_error, print_step, print_success, print_warning
from autocommit.prompts import PromptBuilder, language_from_code

LANGUAGE_PROMPT = "Enter commit language (en/es) [en]: "


def _resolve_language(args, config: Config, read_line: Callable[[str], str]) -> str:
    """--lang wins, then the config file, then one line from stdin."""
    code = args.lang or config.language
    if code is None:
        try:
            code = read_line(LANGUAGE_PROMPT)
        except EOFError:
            code = ""
    return language_from_code(code)


def _resolve_model(args, config: Config) -> str:
    """Precedence: CLI args > environment variables > config file"""
    return args.model or get_env_model() or config.model


def _generate_message(client, changes: ChangeSet, language: str) -> CommitMessage:
    """Run LLM generation with spinner and return the decoded message."""
    with Spinner(f"Generating commit message using {info(client.name)}..."):
        return client.generate(changes.text, language)


def _display_message(message: CommitMessage, max_title_length: int) -> None:
    """Display title and description between horizontal rules."""
    lines = [message.title] + (message.description.split('\n') if message.description else [])
    width = max((len(line) for line in lines), default=40)
    print(f"\n{dim(RULE * width)}")
    print(bold(message.title))
    if message.description:
        print()
        print(message.description)
    print(dim(RULE * width))

    if len(message.title) > max_title_length:
        print_warning(f"Title is {len(message.title)} chars (limit {max_title_length})")


def _print_verbose_stats(args, changes: ChangeSet, language: str, model: str) -> None:
    if not args.verbose:
        return
    prompt = PromptBuilder().build(changes.text, language)
    print(dim(f"  Model: {model}"))
    print(dim(f"  Language: {language}"))
    print(dim(f"  Prompt: ~{len(prompt)//4} tokens ({len(prompt)} chars)"))


def _commit_and_push(repo: GitRepository, message: CommitMessage, push: bool) -> int:
    """Stage, commit and optionally push. Stops at the first failing step."""
    try:
        print_step("Staging all changes...")
        repo.stage_all()

        print_step("Executing git commit...")
        repo.commit(message.title, message.description)
        print_success("Git commit successful.")

        if not push:
            print(dim("Push skipped."))
            return 0

        print_step("Executing git push...")
        repo.push()
        print_success("Git push successful.")
    except GitError as e:
        print_error(str(e))
        return 1
    return 0


def run(
    args: argparse.Namespace,
    config: Config,
    repo: GitRepository,
    client_factory=OpenRouterClient,
    read_line: Callable[[str], str] = input,
) -> int:
    """Collect changes, generate a message, commit and push.

    Returns:
        int: Exit code. 0 on success or when there is nothing to commit.
    """
    try:
        repo.verify()
        print_step("Git repository detected.")
        changes = repo.collect_changes()
    except GitError as e:
        print_error(str(e))
        return 1

    if changes.is_empty:
        print(info("No changes found. Nothing to commit."))
        return 0
    print_step("Git diff obtained.")

    api_key = get_api_key()
    if not api_key:
        print_error(
            "OPENROUTER_API_KEY environment variable not set:\n"
            "  export OPENROUTER_API_KEY='your-key-here'"
        )
        return 1

    language = _resolve_language(args, config, read_line)
    model = _resolve_model(args, config)
    _print_verbose_stats(args, changes, language, model)

    try:
        client = client_factory(api_key, model=model, api_url=config.api_url)
        message = _generate_message(client, changes, language)
    except LLMError as e:
        print_error(f"Error generating commit message: {e}")
        return 1

    _display_message(message, config.max_title_length)

    if args.dry_run:
        print(dim("Dry run: nothing staged, committed or pushed."))
        return 0

    return _commit_and_push(repo, message, push=config.push and not args.no_push)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    if args.install_completion:
        return run_install_completion()

    load_environment()

    if args.display_config:
        return display_config()

    config = load_config()
    try:
        return run(args, config, GitRepository())
    except KeyboardInterrupt:
        print()
        print(dim("Cancelled."))
        return 130
