"""
Interactive yes/no confirmation.

Every mutating command asks before touching the filesystem unless
``--force`` was given. The prompt is hidden behind :class:`Confirmer` so
tests can answer without a terminal.
"""

import abc
import logging

from rich.console import Console

logger = logging.getLogger("stable_manager.confirm")

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def is_affirmative(answer: str) -> bool:
    """Return True for ``y`` or ``yes``, ignoring case and surrounding space."""
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS


class Confirmer(abc.ABC):
    """Base class for confirmation strategies."""

    @abc.abstractmethod
    def confirm(self, prompt: str) -> bool:
        """Return True when the action described by *prompt* may proceed."""
        pass


class ForcedConfirmer(Confirmer):
    """Confirms everything without asking."""

    def confirm(self, prompt: str) -> bool:
        logger.debug(f"Skipping confirmation (forced): {prompt}")
        return True


class ConsoleConfirmer(Confirmer):
    """Asks on the console and blocks until a line is entered."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def confirm(self, prompt: str) -> bool:
        try:
            answer = self.console.input(f"{prompt} (y/n) ", markup=False)
        except EOFError:
            logger.debug("End of input while waiting for confirmation")
            return False
        return is_affirmative(answer)


def make_confirmer(force: bool, console: Console) -> Confirmer:
    """Pick the confirmation strategy for a command invocation."""
    if force:
        return ForcedConfirmer()
    return ConsoleConfirmer(console)
