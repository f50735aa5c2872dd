# fake_filesystem.py

FILE = "file"
DIRECTORY = "directory"

NO_SUCH_FILE = "No such file or directory"
NOT_A_DIRECTORY = "Not a directory"
IS_A_DIRECTORY = "Is a directory"

PROMPT_LABEL = "root@saic"

# Decorative ls -l fields
LONG_PERMISSIONS = "rwxr-xr-x"
LONG_DATE = "Nov 19 10:00"
DIRECTORY_SIZE = 4096
LONG_FLAGS = ("-l", "-la", "-al")

# Fake directory structure: a str value is a file, a dict value is a directory.
# Insertion order is the listing order.
FAKE_TREE = {
    "README.txt": (
        "Welcome to SAIC CyberSec Club.\r\n"
        "We hack. We learn. We defend.\r\n"
        "Ethical hacking at IIT Mandi."
    ),
    "members.txt": (
        "SAIC Core Team Members:\r\n\r\n"
        "Coordinator:\r\n- Abhinandan Kumar\r\n\r\n"
        "Core Team:\r\n"
        "- Somit Gond\r\n- Ayush Gaurav\r\n- Utsav\r\n- Divyanshu\r\n"
        "- Abhijith R Nair\r\n- Pranav Shirbhate\r\n- Vishnu\r\n"
        "- Piyush Panpaliya\r\n- Piyush Dwivedi\r\n- Davda James\r\n"
        "- Arani Ghosh\r\n\r\n"
    ),
    "flag.txt": "SAIC{w3lc0m3_70_541c}",
    "exploits": {
        "cve-2024-1337.py": '# Exploit for CVE-2024-1337\nimport os\nprint("Exploiting...")',
        "buffer_overflow.c": (
            "// Buffer overflow example\n#include <stdio.h>\n"
            "void main() { char buf[10]; gets(buf); }"
        ),
    },
    "tools": {
        "nmap": '#!/bin/bash\necho "Nmap scan initiated..."',
        "metasploit": '#!/bin/bash\necho "Starting Metasploit Framework..."',
    },
    "secrets": {
        "passwords.txt": "admin:admin123\nroot:toor",
    },
}


class Node:
    def __init__(self, name, kind, content=None, children=None):
        self.name = name
        self.kind = kind
        self.content = content if kind == FILE else None
        self.children = (children or []) if kind == DIRECTORY else None
        # Back-reference only; ownership runs root -> children.
        self.parent = None

    @property
    def is_dir(self):
        return self.kind == DIRECTORY

    def child(self, name):
        for child in self.children or ():
            if child.name == name:
                return child
        return None

    def __repr__(self):
        return f"Node({self.name!r}, {self.kind!r})"


def make_file(name, content=""):
    return Node(name, FILE, content=content)


def make_dir(name, children=None):
    return Node(name, DIRECTORY, children=list(children or []))


def _nodes_from(spec):
    nodes = []
    for name, value in spec.items():
        if isinstance(value, dict):
            nodes.append(make_dir(name, _nodes_from(value)))
        else:
            nodes.append(make_file(name, value))
    return nodes


def set_parents(root):
    # Single top-down pass; the root keeps parent None.
    root.parent = None
    stack = [root]
    while stack:
        node = stack.pop()
        for child in node.children or ():
            child.parent = node
            if child.is_dir:
                stack.append(child)
    return root


def build_tree(spec=None):
    """Build the directory tree from a nested mapping (FAKE_TREE by default)."""
    root = make_dir("/", _nodes_from(FAKE_TREE if spec is None else spec))
    return set_parents(root)


def path_of(node):
    names = []
    while node is not None and node.parent is not None:
        names.append(node.name)
        node = node.parent
    return "/" + "/".join(reversed(names))


def _join(parent_path, name):
    if parent_path == "/":
        return f"/{name}"
    return f"{parent_path}/{name}"


class VirtualFileSystem:
    """In-memory, read-only directory tree with a movable current directory.

    Every public method takes and returns plain strings. User errors are
    reported as shell-style messages, never raised.
    """

    def __init__(self, tree=None):
        self.root = build_tree(tree)
        self.cwd = self.root

    def prompt(self):
        path = self.pwd()
        if path == "/":
            return f"{PROMPT_LABEL}:~$ "
        return f"{PROMPT_LABEL}:{path}$ "

    def pwd(self):
        return path_of(self.cwd)

    def resolve(self, path):
        # Returns the Node for path, or None when it does not resolve.
        if path in ("/", "~"):
            return self.root
        if path == ".":
            return self.cwd
        if path == "..":
            return self.cwd.parent or self.root

        parts = [p for p in path.split("/") if p and p != "."]
        current = self.root if path.startswith("/") else self.cwd

        for part in parts:
            if part == "..":
                current = current.parent or self.root
                continue
            if not current.is_dir:
                return None
            found = current.child(part)
            if found is None:
                return None
            current = found

        return current

    def ls(self, args=()):
        targets = [a for a in args if not a.startswith("-")]
        target = targets[0] if targets else "."
        node = self.resolve(target)

        if node is None:
            return f"ls: cannot access '{target}': {NO_SUCH_FILE}"

        if not node.is_dir:
            return node.name

        if not node.children:
            return ""

        if any(flag in LONG_FLAGS for flag in args):
            return "\r\n".join(self._long_entry(child) for child in node.children)

        return "  ".join(
            child.name + "/" if child.is_dir else child.name
            for child in node.children
        )

    def _long_entry(self, node):
        kind = "d" if node.is_dir else "-"
        size = DIRECTORY_SIZE if node.is_dir else len((node.content or "").encode("utf-8"))
        return f"{kind}{LONG_PERMISSIONS} 1 root root {size:>5} {LONG_DATE} {node.name}"

    def cd(self, path=""):
        if not path or path == "~":
            self.cwd = self.root
            return ""

        node = self.resolve(path)

        if node is None:
            return f"cd: {path}: {NO_SUCH_FILE}"

        if not node.is_dir:
            return f"cd: {path}: {NOT_A_DIRECTORY}"

        self.cwd = node
        return ""

    def cat(self, args=()):
        if not args:
            return "cat: missing operand"

        path = args[0]
        node = self.resolve(path)

        if node is None:
            return f"cat: {path}: {NO_SUCH_FILE}"

        if node.is_dir:
            return f"cat: {path}: {IS_A_DIRECTORY}"

        return node.content or ""

    def find(self, path="."):
        path = path or "."
        start = self.resolve(path)
        if start is None:
            return f"find: '{path}': {NO_SUCH_FILE}"

        if path.startswith("/"):
            display = path_of(start)
        else:
            display = path.rstrip("/") or path

        results = []
        # Pre-order, siblings in stored order.
        stack = [(start, display)]
        while stack:
            node, node_path = stack.pop()
            results.append(node_path)
            if node.is_dir:
                for child in reversed(node.children):
                    stack.append((child, _join(node_path, child.name)))

        return "\r\n".join(results)

    def completions(self, line):
        token = line.split(" ")[-1]

        search_path = "."
        partial = token
        slash = token.rfind("/")
        if slash != -1:
            search_path = token[:slash] or "/"
            partial = token[slash + 1:]

        node = self.resolve(search_path)
        if node is None or not node.is_dir:
            return []

        return [
            child.name + "/" if child.is_dir else child.name
            for child in node.children
            if child.name.startswith(partial)
        ]
