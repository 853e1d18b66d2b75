"""End-to-end tests asserting CLI commands behave as operators expect.

What:
  Launch the ``imfparse.cli`` module through ``python -m`` and validate the
  JSON output and exit codes of ``address``, ``phrase`` and ``check-config``.

Why:
  These tests ensure the entry point wiring, configuration discovery and
  error reporting work when invoked the same way operators do from a shell.

How:
  Construct subprocess invocations with a controlled ``PYTHONPATH`` pointing
  to the in-repo source tree, run them from a scratch directory, and assert on
  return codes, stdout and stderr.

Interfaces:
  ``test_cli_address``, ``test_cli_address_strict``, ``test_cli_invalid_address``,
  ``test_cli_phrase``, ``test_cli_check_config``, ``test_cli_bad_config``.

Invariants & Safety:
  - Tests run against the local source tree to avoid depending on installed
    packages.
  - stdout holds exactly one JSON document on success and nothing on failure.
"""

import json
import os
import pathlib
import subprocess
import sys


PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[2]


def _run_cli(*args: str, cwd: pathlib.Path) -> subprocess.CompletedProcess[str]:
    """Execute the imfparse CLI with the provided arguments.

    What:
      Spawns ``python -m imfparse.cli`` as a subprocess and returns the
      completed process handle.

    How:
      Clones the current environment while overriding ``PYTHONPATH`` to point
      at the repository source tree and removing ``IMFPARSE_CONFIG_PATH``,
      then executes :func:`subprocess.run` capturing stdout/stderr.

    Args:
      *args: Command-line arguments to pass to ``imfparse.cli``.
      cwd: Working directory, so ``./imfparse.yaml`` discovery is controlled.

    Returns:
      Completed subprocess result containing return code and output.
    """

    cmd = [sys.executable, "-m", "imfparse.cli", *args]
    env = dict(os.environ)
    env.pop("IMFPARSE_CONFIG_PATH", None)
    env["HOME"] = str(cwd)
    env["PYTHONPATH"] = f"{PROJECT_ROOT / 'imfparse' / 'src'}:{env.get('PYTHONPATH', '')}"
    return subprocess.run(cmd, text=True, capture_output=True, cwd=cwd, env=env)


def test_cli_address(tmp_path: pathlib.Path) -> None:
    """Verify ``address`` prints the canonical parts of an obsolete address.

    What:
      Runs the command on a value with comments, obsolete dots and a domain
      literal, and decodes stdout.

    Why:
      Confirms the CLI goes through the same facade as library callers,
      obsolete forms enabled by default.
    """

    result = _run_cli("address", '(work) "john". doe @ [10.0.0.1]', cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {
        "address": "john.doe@[10.0.0.1]",
        "local_part": "john.doe",
        "domain": "[10.0.0.1]",
    }


def test_cli_address_strict(tmp_path: pathlib.Path) -> None:
    result = _run_cli("address", "--strict", "john . doe@example.com", cwd=tmp_path)
    assert result.returncode == 1
    assert result.stdout == ""
    assert "invalid address" in result.stderr
    assert "addr-spec" in result.stderr


def test_cli_invalid_address(tmp_path: pathlib.Path) -> None:
    result = _run_cli("address", "foo@", cwd=tmp_path)
    assert result.returncode == 1
    assert "no more byte to read" in result.stderr
    assert "foo@" not in result.stderr


def test_cli_phrase(tmp_path: pathlib.Path) -> None:
    result = _run_cli("phrase", '"Doe, John" (work) Jr.', cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {"phrase": "Doe, John Jr."}


def test_cli_check_config(tmp_path: pathlib.Path) -> None:
    """Verify ``check-config`` reports defaults and validates explicit files."""

    result = _run_cli("check-config", cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["grammar"] == {"allow_obsolete": True, "max_input_bytes": 65536}

    config = tmp_path / "strict.yaml"
    config.write_text("grammar:\n  allow_obsolete: false\n", encoding="utf-8")
    result = _run_cli("check-config", str(config), cwd=tmp_path)
    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout)["grammar"]["allow_obsolete"] is False

    result = _run_cli("address", "--config", str(config), "a . b@c", cwd=tmp_path)
    assert result.returncode == 1


def test_cli_bad_config(tmp_path: pathlib.Path) -> None:
    config = tmp_path / "broken.yaml"
    config.write_text("grammar:\n  unknown: 1\n", encoding="utf-8")
    result = _run_cli("check-config", str(config), cwd=tmp_path)
    assert result.returncode == 1
    assert "configuration error" in result.stderr

    result = _run_cli("phrase", "--config", str(tmp_path / "missing.yaml"), "x", cwd=tmp_path)
    assert result.returncode == 1
    assert "Configuration file missing" in result.stderr
