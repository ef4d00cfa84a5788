""" Shared fixtures for the tests. """

import os
from pathlib import Path
import subprocess
import sys
import textwrap
from typing import Callable, Dict, Iterator, Optional

import pytest

from bequiet.host import set_inhibit_message
from bequiet.quiet import set_ignore


@pytest.fixture(autouse=True)
def reset_global_switches() -> Iterator[None]:
    set_ignore(False)
    set_inhibit_message(False)
    yield
    set_ignore(False)
    set_inhibit_message(False)


@pytest.fixture
def run_python() -> Callable[..., "subprocess.CompletedProcess[str]"]:
    """
    Returns: A function that executes a Python script in a child process with the package on the import path and
    returns the completed process with its captured output. Additional environment variables for the child process
    can be passed as a dictionary.
    """

    src_dir = str(Path(__file__).resolve().parents[1] / "src")

    def run(script: str, env_vars: Optional[Dict[str, str]] = None) -> "subprocess.CompletedProcess[str]":
        env = dict(os.environ)
        env.pop("BEQUIET_IGNORE", None)
        env.update(env_vars or {})
        env["PYTHONPATH"] = os.pathsep.join(path for path in [src_dir, env.get("PYTHONPATH", "")] if path)
        return subprocess.run(
            [sys.executable, "-c", textwrap.dedent(script)], capture_output=True, text=True, env=env, check=True
        )

    return run
