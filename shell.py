# shell.py
#
# Turns one console line into output text by calling into the fake filesystem.

UNAME = "Linux"
UNAME_A = "Linux saic 6.1.0-saic #1 SMP PREEMPT_DYNAMIC x86_64 GNU/Linux"

CLEAR_SCREEN = "\x1b[2J\x1b[H"

HELP_TEXT = "\r\n".join([
    "Available commands:",
    "  help              show this list",
    "  ls [-l] [path]    list directory contents",
    "  cd [path]         change directory",
    "  cat <file>        print a file",
    "  pwd               print working directory",
    "  find [path]       list every path below a directory",
    "  whoami, id        show the current user",
    "  uname [-a]        show system information",
    "  echo <text>       print text",
    "  history           show previous commands",
    "  clear             clear the screen",
    "  exit              close the session",
])


def run_command(vfs, line, history=None):
    """Run one command line against vfs.

    Returns the text to print, or None when the session should end.
    """
    parts = line.split()

    if not parts:
        return ""

    cmd, args = parts[0], parts[1:]

    if cmd == "help":
        return HELP_TEXT

    # Filesystem commands
    if cmd == "ls":
        return vfs.ls(args)

    if cmd == "cd":
        return vfs.cd(args[0] if args else "")

    if cmd == "cat":
        return vfs.cat(args)

    if cmd == "pwd":
        return vfs.pwd()

    if cmd == "find":
        return vfs.find(args[0] if args else ".")

    # Identity commands
    if cmd == "whoami":
        return "root"

    if cmd == "id":
        return "uid=0(root) gid=0(root) groups=0(root)"

    if cmd == "uname":
        if "-a" in args:
            return UNAME_A
        return UNAME

    if cmd == "echo":
        return " ".join(args)

    if cmd == "history":
        return "\r\n".join(
            f"{i + 1:>4}  {c}" for i, c in enumerate(history or [])
        )

    if cmd == "clear":
        return CLEAR_SCREEN

    if cmd in ("exit", "logout"):
        return None

    return f"{cmd}: command not found"
