#!/usr/bin/env python3
"""Launch the News Proxy API with uvicorn.

This script handles:
- Loading a local .env file
- Warning about a missing GNEWS_API_KEY
- Starting the FastAPI backend and waiting for its health check
- Graceful shutdown on Ctrl+C
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import time
import urllib.error
import urllib.request
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
UVICORN_APP = "src.news_proxy.api.server:app"


def check_env_vars() -> list[str]:
    """Check for required environment variables and return list of missing ones."""
    required = ["GNEWS_API_KEY"]

    missing = [var for var in required if not os.environ.get(var)]

    if missing:
        print(f"[env] WARNING: Missing required environment variables: {', '.join(missing)}")
        print("[env] /api/articles will answer 500 until they are set.")

    return missing


def start_process(label: str, command: Sequence[str], env: dict[str, str]) -> subprocess.Popen:
    """Launch a child process and return the handle."""

    print(f"[{label}] {' '.join(command)}")
    return subprocess.Popen(  # noqa: S603 - command constructed above
        command,
        cwd=ROOT_DIR,
        env=env,
    )


def wait_for_backend(base_url: str, timeout: float) -> None:
    """Poll the backend health endpoint until it responds or timeout occurs."""

    health_url = f"{base_url.rstrip('/')}" + "/health"
    deadline = time.time() + timeout
    print(f"[backend] Waiting for health check at {health_url} ...")
    while time.time() < deadline:
        try:
            with urllib.request.urlopen(health_url, timeout=3):  # noqa: S310
                print("[backend] Health check succeeded.")
                return
        except urllib.error.URLError:
            time.sleep(1.0)
    print("[backend] Health check timed out; the server may still be starting.")


def shutdown_process(proc: subprocess.Popen | None, label: str) -> None:
    if proc is None or proc.poll() is not None:
        return

    print(f"[{label}] Stopping...")
    proc.terminate()
    try:
        proc.wait(timeout=10)
    except subprocess.TimeoutExpired:
        print(f"[{label}] Terminate timed out. Killing...")
        proc.kill()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start the News Proxy FastAPI backend.")
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host/interface for the FastAPI server (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the FastAPI server (default: 8000).",
    )
    parser.add_argument(
        "--startup-timeout",
        type=float,
        default=30.0,
        help="Seconds to wait for the health endpoint before giving up on it.",
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable uvicorn auto-reload (enabled by default).",
    )
    parser.add_argument(
        "--skip-env-check",
        action="store_true",
        help="Skip checking for required environment variables.",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    env_file = ROOT_DIR / ".env"
    if env_file.exists():
        load_dotenv(env_file)
        print(f"[env] Loaded environment from {env_file}")

    if not args.skip_env_check:
        check_env_vars()

    base_url = f"http://{args.host}:{args.port}"
    backend_cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        UVICORN_APP,
        "--host",
        args.host,
        "--port",
        str(args.port),
    ]
    if not args.no_reload:
        backend_cmd.append("--reload")

    backend_proc = None
    try:
        backend_proc = start_process("backend", backend_cmd, os.environ.copy())
        wait_for_backend(base_url, args.startup_timeout)
        print(f"[runner] Articles endpoint: {base_url}/api/articles")
        print(f"[runner] API Docs: {base_url}/docs")

        status = backend_proc.wait()
        print(f"[backend] exited with status {status}.")
    except KeyboardInterrupt:
        print("\n[runner] Caught KeyboardInterrupt. Shutting down...")
    finally:
        shutdown_process(backend_proc, "backend")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
