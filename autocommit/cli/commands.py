"""CLI Commands"""

import os
import sys
from dataclasses import fields

from autocommit import API_KEY_ENV
from autocommit.config import CONFIG_FILENAME, MODEL_ENV, Config, find_config_file, read_config_file
from autocommit.output import bold, dim, info, success, warning


def _format_setting(name: str, value) -> str:
    if name == 'language' and value is None:
        return 'ask'
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def display_config() -> int:
    """Display current configuration."""
    config_path = find_config_file()
    config = read_config_file(config_path) if config_path else Config()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no {CONFIG_FILENAME} found)")

    env_model = os.environ.get(MODEL_ENV)
    if env_model:
        print(f"  {dim('Environment overrides:')}")
        print(f"    {MODEL_ENV}={env_model}")

    key_state = success('set') if os.environ.get(API_KEY_ENV) else warning('missing')
    print(f"  {dim(API_KEY_ENV + ':')} {key_state}")

    print()
    print(f"  {bold('Settings:')}")
    width = max(len(f.name) for f in fields(config)) + 1
    for f in fields(config):
        label = f"{f.name}:".ljust(width)
        print(f"    {label} {info(_format_setting(f.name, getattr(config, f.name)))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  {CONFIG_FILENAME} (in current directory)")
    print(f"    Global: ~/{CONFIG_FILENAME}\n")

    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete autocommit)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, run:\n")
        print("  register-python-argcomplete --shell powershell autocommit | Out-String | Invoke-Expression\n")
        print("To make it permanent, add it to your $PROFILE.")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish autocommit | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0
