"""Terminal Output - status lines and the wait indicator for the API call."""

import os
import sys
import threading

_ANSI_CODES = {
    'bold': '1',
    'dim': '2',
    'error': '31',
    'success': '32',
    'warning': '33',
    'info': '36',
}


def _color_wanted() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    isatty = getattr(sys.stdout, 'isatty', None)
    return bool(isatty and isatty())


def _can_print(symbol: str) -> bool:
    try:
        symbol.encode(getattr(sys.stdout, 'encoding', None) or 'utf-8')
        return True
    except (UnicodeEncodeError, LookupError):
        return False


COLORS_ENABLED = _color_wanted()

CHECK = '✓' if _can_print('✓') else '[OK]'
CROSS = '✗' if _can_print('✗') else '[X]'
ARROW = '→' if _can_print('→') else '->'
WARN = '⚠' if _can_print('⚠') else '[!]'
RULE = '─' if _can_print('─') else '-'


def _styler(name: str):
    code = _ANSI_CODES[name]

    def apply(text: str) -> str:
        if not COLORS_ENABLED:
            return text
        return f"\033[{code}m{text}\033[0m"

    apply.__name__ = name
    return apply


bold = _styler('bold')
dim = _styler('dim')
error = _styler('error')
success = _styler('success')
warning = _styler('warning')
info = _styler('info')


def print_step(message: str) -> None:
    """Progress line for a git step or a detected state."""
    print(f"{dim(ARROW)} {message}")


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    print(f"{warning(WARN)} {warning(message)}")


class Spinner:
    """Shows `label` while the generation request blocks.

    On a TTY the label is animated and rewritten in place; anywhere else it is
    printed once so piped output still says what the run was waiting on.
    """
    FRAMES = '⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏' if _can_print('⠋') else '-\\|/'

    def __init__(self, label: str):
        self.label = label
        self._stop = threading.Event()
        self._thread = None
        self._animated = sys.stdout.isatty()

    def _animate(self):
        tick = 0
        while not self._stop.wait(0.08):
            frame = self.FRAMES[tick % len(self.FRAMES)]
            print(f"\r\033[K{frame} {self.label}", end='', flush=True)
            tick += 1

    def __enter__(self):
        if not self._animated:
            print(self.label, flush=True)
            return self
        self._thread = threading.Thread(target=self._animate, daemon=True)
        self._thread.start()
        return self

    def __exit__(self, *exc_info):
        if self._thread is None:
            return False
        self._stop.set()
        self._thread.join()
        print(f"\r\033[K{self.label}", flush=True)
        return False


__all__ = [
    "CHECK", "CROSS", "ARROW", "WARN", "RULE",
    "bold", "dim", "error", "success", "warning", "info",
    "print_step", "print_success", "print_error", "print_warning",
    "Spinner",
]
