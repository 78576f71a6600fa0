"""CLI Argument Parsing"""

import argparse
import argcomplete

from autocommit import LANGUAGE_CODES, __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='autocommit',
        description='Generate a commit message with an LLM, then commit and push',
        epilog='Example: autocommit --lang es (commits in Spanish)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-l', '--lang', type=str, choices=sorted(LANGUAGE_CODES), help='Commit language (skips the prompt)')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='OpenRouter model identifier')

    # Side effects
    parser.add_argument('--no-push', action='store_true', help='Commit but do not push')
    parser.add_argument('--dry-run', action='store_true', help='Print the generated message, do not stage, commit or push')

    # Output options
    parser.add_argument('--verbose', action='store_true', help='Show debug info (prompt size, model)')

    # Setup/config
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
