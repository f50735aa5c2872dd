# =========================
# SAIC Console SSH Server
# =========================
# Serves the SAIC club terminal over SSH using Paramiko. Every connection
# gets its own in-memory filesystem, a prompt, tab completion and a small
# set of shell commands. Finished sessions are logged as JSON lines.
#
# Logins are decorative: any username/password is accepted.
# =========================

import json
import os
import socket
import threading
import time

import paramiko

from fake_filesystem import VirtualFileSystem
from line_editor import LineEditor
from shell import run_command


HOST = "0.0.0.0"
PORT = 2222
HOST_KEY_PATH = "ssh_host_rsa.key"

# Log file where finished sessions are stored
LOG_FILE = "logs/console.log"

BANNER = (
    "Welcome to the SAIC CyberSec Club terminal.\r\n"
    "Type 'help' for a list of commands.\r\n"
    "\r\n"
)


def load_or_create_host_key(path):
    # Load an existing SSH host key if present.
    # Otherwise, generate and store a new one.

    if os.path.exists(path):
        return paramiko.RSAKey(filename=path)

    key = paramiko.RSAKey.generate(2048)
    key.write_private_key_file(path)
    return key


# SSH Server Interface

# defines how the SSH server behaves during authentication & session setup.
class ConsoleSSH(paramiko.ServerInterface):
    def __init__(self, addr):
        self.addr = addr
        self.event = threading.Event()
        self.username = None
        self.commands = []

    # Accept ANY username/password
    def check_auth_password(self, username, password):
        self.username = username
        return paramiko.AUTH_SUCCESSFUL

    # Only allow password authentication
    def get_allowed_auths(self, username):
        return "password"

    # Allow only session channels (no port forwarding, etc.)
    def check_channel_request(self, kind, chanid):
        if kind == "session":
            return paramiko.OPEN_SUCCEEDED
        return paramiko.OPEN_FAILED_ADMINISTRATIVELY_PROHIBITED

    def check_channel_pty_request(self, channel, term, width, height,
                                  pixelwidth, pixelheight, modes):
        return True

    # Allow an interactive shell
    def check_channel_shell_request(self, channel):
        self.event.set()
        return True


# Writes one finished session as JSON
def log_event(data, path=None):
    path = path or LOG_FILE
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "a") as f:
        f.write(json.dumps(data) + "\n")


# Runs the read / edit / execute loop on an open channel
def serve_session(chan, server):
    vfs = VirtualFileSystem()
    editor = LineEditor(vfs)

    chan.send((BANNER + vfs.prompt()).encode())

    while not editor.closed:
        try:
            data = chan.recv(1024)
        except (OSError, EOFError, paramiko.SSHException):
            break
        if not data:
            break

        # decode safely (ignore binary garbage)
        echo, lines = editor.feed(data.decode(errors="ignore"))
        out = [echo]

        for line in lines:
            line = line.strip()
            if line:
                server.commands.append(line)

            response = run_command(vfs, line, server.commands)
            if response is None:
                editor.closed = True
                out.append("logout\r\n")
                break
            if response:
                out.append(response + "\r\n")
            out.append(vfs.prompt())

        try:
            chan.send("".join(out).encode())
        except (OSError, EOFError, paramiko.SSHException):
            break

    return vfs


# Handles a single SSH connection from start to finish
def handle_connection(client, addr, host_key):
    # Wrap raw socket in a Paramiko SSH transport
    transport = paramiko.Transport(client)
    transport.add_server_key(host_key)

    server = ConsoleSSH(addr)

    # start SSH negotiation (key exchange, encryption, auth)
    try:
        transport.start_server(server=server)
    except paramiko.SSHException:
        transport.close()
        return

    chan = transport.accept(20)
    if chan is None:
        transport.close()
        return

    # wait for shell request to be confirmed
    server.event.wait(10)

    try:
        serve_session(chan, server)
    finally:
        log_event({
            "timestamp": time.time(),
            "source_ip": addr[0],
            "username": server.username,
            "commands": server.commands,
        })
        chan.close()
        transport.close()


# creates a TCP listener and spawns a thread per connection
def start_console(host=HOST, port=PORT):
    host_key = load_or_create_host_key(HOST_KEY_PATH)

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind((host, port))
    sock.listen(100)

    print(f"[+] SAIC console listening on port {port}")

    while True:
        client, addr = sock.accept()
        print(f"[+] Connection from {addr[0]}")
        threading.Thread(
            target=handle_connection, args=(client, addr, host_key), daemon=True
        ).start()


def main():
    try:
        start_console()
    except KeyboardInterrupt:
        print("\n[+] Shutting down")


if __name__ == "__main__":
    main()
