"""
Tests for claw_readme.probe module.

The probe runs real subprocesses here, using the Python interpreter in
place of node so the tests do not depend on a Node.js install.
"""

import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

from claw_readme.probe import build_help_command, run_help


class TestBuildHelpCommand:
    """Tests for build_help_command()."""

    def test_default_interpreter(self, tmp_path):
        main_file = tmp_path / "index.js"

        assert build_help_command(main_file) == ["node", str(main_file), "--help"]


class TestRunHelp:
    """Tests for run_help()."""

    def test_captures_stdout(self, make_project):
        root = make_project(files={
            "cli.py": "import sys\nprint('Commands:')\nprint('  build   Build it')\n",
        })

        output = run_help(root / "cli.py", root, interpreter=sys.executable)

        assert "Commands:" in output
        assert "build   Build it" in output

    def test_passes_help_argument(self, make_project):
        root = make_project(files={"cli.py": "import sys\nprint(sys.argv[1:])\n"})

        output = run_help(root / "cli.py", root, interpreter=sys.executable)

        assert "--help" in output

    def test_runs_in_project_directory(self, make_project):
        root = make_project(files={"cli.py": "import os\nprint(os.getcwd())\n"})

        output = run_help(root / "cli.py", root, interpreter=sys.executable)

        assert Path(output.strip()).resolve() == root.resolve()

    def test_color_disabled(self, make_project):
        root = make_project(files={
            "cli.py": "import os\nprint(os.environ.get('FORCE_COLOR'), os.environ.get('NO_COLOR'))\n",
        })

        output = run_help(root / "cli.py", root, interpreter=sys.executable)

        assert output.strip() == "0 1"

    def test_stderr_and_exit_code_ignored(self, make_project):
        """Output printed before a failing exit is still returned."""
        root = make_project(files={
            "cli.py": (
                "import sys\n"
                "print('Options:')\n"
                "sys.stderr.write('boom')\n"
                "sys.exit(3)\n"
            ),
        })

        output = run_help(root / "cli.py", root, interpreter=sys.executable)

        assert output.strip() == "Options:"

    def test_timeout_returns_empty(self, make_project):
        """A hanging program yields no output at all."""
        root = make_project(files={
            "cli.py": "import time\nprint('partial', flush=True)\ntime.sleep(30)\n",
        })

        output = run_help(root / "cli.py", root, timeout=0.5, interpreter=sys.executable)

        assert output == ""

    def test_missing_interpreter_returns_empty(self, make_project):
        root = make_project(files={"cli.js": "console.log('hi')"})

        output = run_help(root / "cli.js", root, interpreter="definitely-not-a-real-node-binary")

        assert output == ""

    def test_spawn_error_returns_empty(self, make_project):
        root = make_project(files={"cli.js": ""})

        with patch("claw_readme.probe.subprocess.run", side_effect=PermissionError("denied")):
            assert run_help(root / "cli.js", root) == ""

    def test_timeout_expired_from_run(self, make_project):
        root = make_project(files={"cli.js": ""})
        error = subprocess.TimeoutExpired(cmd=["node"], timeout=2.0)

        with patch("claw_readme.probe.subprocess.run", side_effect=error):
            assert run_help(root / "cli.js", root) == ""
