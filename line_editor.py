# line_editor.py
#
# Assembles raw terminal keystrokes into command lines, echoing as it goes.

import os

ENTER = ("\r", "\n")
BACKSPACE = ("\x7f", "\x08")
TAB = "\t"
CTRL_C = "\x03"
CTRL_D = "\x04"
ESC = "\x1b"


class LineEditor:
    def __init__(self, vfs):
        self.vfs = vfs
        self.buffer = ""
        self.closed = False
        self._skip_lf = False
        self._in_escape = False

    def feed(self, data):
        """Consume keystroke text.

        Returns (echo, lines): the text to write back to the terminal and the
        command lines completed by this chunk, in order.
        """
        echo = []
        lines = []

        for ch in data:
            if self.closed:
                break

            # Drop arrow keys and other escape sequences.
            if self._in_escape:
                if ch.isalpha() or ch == "~":
                    self._in_escape = False
                continue
            if ch == ESC:
                self._in_escape = True
                continue

            if ch in ENTER:
                # Treat CRLF as a single Enter.
                if ch == "\n" and self._skip_lf:
                    self._skip_lf = False
                    continue
                self._skip_lf = ch == "\r"
                echo.append("\r\n")
                lines.append(self.buffer)
                self.buffer = ""
                continue
            self._skip_lf = False

            if ch in BACKSPACE:
                if self.buffer:
                    self.buffer = self.buffer[:-1]
                    echo.append("\b \b")
            elif ch == CTRL_C:
                self.buffer = ""
                echo.append("^C\r\n" + self.vfs.prompt())
            elif ch == CTRL_D:
                if not self.buffer:
                    self.closed = True
            elif ch == TAB:
                echo.append(self.complete())
            elif ch.isprintable():
                self.buffer += ch
                echo.append(ch)

        return "".join(echo), lines

    def complete(self):
        matches = self.vfs.completions(self.buffer)
        if not matches:
            return ""

        partial = self.buffer.split(" ")[-1].rsplit("/", 1)[-1]
        common = os.path.commonprefix(matches)
        addition = common[len(partial):]

        if addition:
            self.buffer += addition
            return addition

        if len(matches) == 1:
            return ""

        return "\r\n" + "  ".join(matches) + "\r\n" + self.vfs.prompt() + self.buffer
