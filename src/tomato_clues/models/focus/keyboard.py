"""Non-blocking keyboard input mapped to session actions."""

import sys
from typing import Literal, Optional

Action = Literal["toggle", "skip", "plus", "minus", "theme", "sound", "quit"]

KEY_BINDINGS: dict[str, Action] = {
    " ": "toggle",
    "p": "toggle",
    "n": "skip",
    "+": "plus",
    "=": "plus",
    "-": "minus",
    "d": "theme",
    "s": "sound",
    "q": "quit",
}


def key_to_action(key: Optional[str]) -> Optional[Action]:
    """Translate a raw key into an action, ignoring unbound keys."""
    if not key:
        return None
    return KEY_BINDINGS.get(key.lower())


class KeyboardHandler:
    """Reads single keys from the terminal without blocking.

    Uses termios/select on POSIX and msvcrt on Windows.
    """

    def __init__(self):
        self.old_settings = None
        self.fd = None
        self.msvcrt = None
        self._setup()

    def _setup(self):
        """Put the terminal into cbreak mode."""
        try:
            import msvcrt

            self.msvcrt = msvcrt
            return
        except ImportError:
            pass

        try:
            import termios
            import tty

            self.fd = sys.stdin.fileno()
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except Exception:
            # Not a terminal (piped input, tests)
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """Return one pending key or None."""
        if self.msvcrt is not None:
            if not self.msvcrt.kbhit():
                return None
            key = self.msvcrt.getch()
            if isinstance(key, bytes):
                key = key.decode("utf-8", errors="ignore")
            return key

        if self.old_settings is None:
            return None
        try:
            import select

            if select.select([sys.stdin], [], [], 0)[0]:
                return sys.stdin.read(1)
        except (OSError, ValueError):
            return None
        return None

    def read_action(self) -> Optional[Action]:
        return key_to_action(self.get_key())

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings is not None and self.fd is not None:
            import termios

            try:
                termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
            except termios.error:
                pass
