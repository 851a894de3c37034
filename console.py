"""
Operator-facing output and confirmation prompts.

Everything the pipeline prints or asks goes through a Console instance that is
passed in explicitly, so tests can capture the output and script the answers.
"""

import sys
from typing import Callable, List, Optional, TextIO


class Console:
    """Print messages and ask yes/no questions on a terminal."""

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        input_func: Callable[[str], str] = input,
    ):
        self.out = out
        self.err = err
        self.input_func = input_func

    def log(self, message: str) -> None:
        print(message, file=self.out or sys.stdout)

    def success(self, message: str) -> None:
        print(f"✅ {message}", file=self.out or sys.stdout)

    def warning(self, message: str) -> None:
        print(f"⚠️ Warning: {message}", file=self.err or sys.stderr)

    def error(self, message: str) -> None:
        print(f"❌ Error: {message}", file=self.err or sys.stderr)

    def confirm(self, question: str, assume_yes: bool = False) -> bool:
        """
        Ask a yes/no question. Only "y" or "yes" counts as agreement.

        Args:
            question (str): The question to show.
            assume_yes (bool): Answer "yes" without prompting.

        Returns:
            bool: True if the operator agreed.
        """
        if assume_yes:
            return True
        try:
            answer = self.input_func(f"{question} [y/n] ")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")


class RecordingConsole(Console):
    """
    A Console that keeps messages in memory and answers prompts from a list.

    Unanswered prompts are declined.
    """

    def __init__(self, answers=()):
        super().__init__()
        self.messages: List[str] = []
        self.warnings: List[str] = []
        self.errors: List[str] = []
        self.questions: List[str] = []
        self.answers = list(answers)

    def log(self, message):
        self.messages.append(message)

    def success(self, message):
        self.messages.append(message)

    def warning(self, message):
        self.warnings.append(message)

    def error(self, message):
        self.errors.append(message)

    def confirm(self, question, assume_yes=False):
        if assume_yes:
            return True
        self.questions.append(question)
        if not self.answers:
            return False
        return self.answers.pop(0)
