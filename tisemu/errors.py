"""Errors raised while running a program."""

RED = "\033[1;31m"
RESET = "\033[0m"


class ProgramError(Exception):
    """An error found in a program, tied to a file and a line."""

    def __init__(self, filename, line, message):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.message = message

    def format(self, color):
        """Render the error as ``file:line: error: message``, optionally in red."""
        red = RED if color else ""
        reset = RESET if color else ""
        return f"{red}{self.filename}:{self.line}: error: {self.message}{reset}"

    def __str__(self):
        return self.format(False)