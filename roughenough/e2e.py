"""Live end-to-end check: start a server, run a client against it.

The server and client executables are looked up under
``target/<build mode>/`` relative to the current directory. A build mode
passes when the server stays up and the client exits cleanly.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
import time
from pathlib import Path
from typing import Optional, Sequence

BUILD_MODES = ("debug", "release")
SERVER_BINARY = "roughenough_server"
CLIENT_BINARY = "roughenough_client"
DEFAULT_STARTUP_DELAY = 0.2

# The public key belongs to the server's test seed of 32 zero bytes.
TEST_PUBLIC_KEY = "3b6a27bcceb6a42d62a3a8d02a6f0d73653215771de243a63ac048a18b59da29"
CLIENT_ARGS = ("127.0.0.1", "2003", "-n", "50", "-k", TEST_PUBLIC_KEY)


def _binary(build_mode: str, name: str) -> str:
    return str(Path("target") / build_mode / name)


def _err(message: str) -> None:
    print(message, file=sys.stderr)


def _run_client(client_path: str) -> bool:
    print("=== Running client with 50 requests...")
    try:
        result = subprocess.run(
            [client_path, *CLIENT_ARGS],
            stdin=subprocess.DEVNULL,
            capture_output=True,
        )
    except OSError as exc:
        _err(f"=== Failed to run client: {exc}")
        return False

    if result.returncode == 0:
        print("=== Client completed successfully")
        return True

    _err(f"=== Client failed with exit code: {result.returncode}")
    _err(f"=== Client stdout: {result.stdout.decode('utf-8', 'replace')}")
    _err(f"=== Client stderr: {result.stderr.decode('utf-8', 'replace')}")
    return False


def run_build_mode(build_mode: str, startup_delay: float = DEFAULT_STARTUP_DELAY) -> bool:
    """Start the server of ``build_mode``, query it with the client, stop it.

    Returns whether the server stayed up and the client succeeded.
    """
    server_path = _binary(build_mode, SERVER_BINARY)
    client_path = _binary(build_mode, CLIENT_BINARY)

    print("=== Starting server...")
    try:
        server = subprocess.Popen([server_path], stdin=subprocess.DEVNULL)
    except OSError as exc:
        _err(f"=== Failed to start server: {exc}")
        return False

    try:
        time.sleep(startup_delay)

        status = server.poll()
        if status is not None:
            _err(f"=== Server exited unexpectedly with status: {status}")
            return False

        return _run_client(client_path)
    finally:
        if server.poll() is None:
            server.kill()
        server.wait()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the end-to-end check for each build mode; return the exit status."""
    parser = argparse.ArgumentParser(
        prog="roughenough_integration_test",
        description="Start a server, run a client against it, check the client succeeds",
    )
    parser.add_argument(
        "modes",
        nargs="*",
        default=list(BUILD_MODES),
        help="Build modes to test [default: debug release]",
    )
    args = parser.parse_args(argv)

    print("=== Running end-to-end integration test...")
    for build_mode in args.modes:
        print(f"\n=== Testing {build_mode} ...")
        if not run_build_mode(build_mode):
            _err(f"=== {build_mode} test FAILED")
            return 1
        print(f"=== {build_mode} test PASSED")

    print("\n=== All end-to-end integration tests PASSED")
    return 0


if __name__ == "__main__":
    sys.exit(main())