"""Integration tests for the folderkit command-line interface.

These tests run the CLI in a subprocess against real directory trees:
- Drawing and listing trees with exclusions
- Creating directories with explicit modes
- Recursive permission changes with exceptions
- Recursive deletion
- Exit codes for usage errors and missing paths
- Output through a closed pipe
"""

import os
import platform
import stat
import subprocess
import sys

import pytest

# These tests are slow; they only run with --run-cli-tests
pytestmark = pytest.mark.skipif(
    "not config.getoption('--run-cli-tests')", reason="Only run when --run-cli-tests is given"
)


@pytest.fixture
def site(tmp_path):
    """Create a small web root with hidden files and nested directories."""
    (tmp_path / "www" / "img" / "thumbs").mkdir(parents=True)
    (tmp_path / "www" / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "www" / "index.html").write_text("<html></html>\n")
    (tmp_path / "www" / ".htaccess").write_text("Deny from all\n")
    (tmp_path / "www" / "img" / "logo.png").write_bytes(b"\x89PNG")
    (tmp_path / "www" / "img" / "thumbs" / "logo.png").write_bytes(b"\x89PNG")
    (tmp_path / "www" / "node_modules" / "lib" / "index.js").write_text("module.exports = {}\n")
    (tmp_path / "www" / "debug.log").write_text("trace\n")
    return tmp_path


def run_cli(args, cwd=None, timeout=10):
    """Run the folderkit CLI with the given arguments and capture its output."""
    cmd = [sys.executable, "-m", "folderkit.cli.main"] + args
    return subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, cwd=cwd, timeout=timeout)


def test_cli_tree(site):
    result = run_cli(["-r", str(site), "tree", "-H", "-x", "node_modules", "-i", "*.log", "www"])

    assert result.returncode == 0
    assert result.stdout == (
        "www/\n"
        "├── index.html\n"
        "└── img/\n"
        "    ├── logo.png\n"
        "    └── thumbs/\n"
        "        └── logo.png\n"
        "\n"
        "2 directories, 3 files\n"
    )


def test_cli_tree_list_relative_to_cwd(site):
    result = run_cli(["tree", "--list", "-k", "dirs", "-x", "node_modules", "www"], cwd=str(site))

    assert result.returncode == 0
    www = os.path.join(str(site), "www")
    assert result.stdout.splitlines() == [www, os.path.join(www, "img"), os.path.join(www, "img", "thumbs")]


def test_cli_tree_missing_path(site):
    result = run_cli(["-r", str(site), "tree", "nowhere"])

    assert result.returncode == 1
    assert result.stdout == ""
    assert "Path does not exist" in result.stderr


def test_cli_create_and_chmod(site):
    result = run_cli(["-r", str(site), "create", "-m", "750", "www/uploads/2024"])
    assert result.returncode == 0
    assert stat.S_IMODE(os.stat(site / "www" / "uploads" / "2024").st_mode) == 0o750

    result = run_cli(["-r", str(site), "-v", "chmod", "-R", "-x", ".htaccess", "www", "755"])
    assert result.returncode == 0
    assert stat.S_IMODE(os.stat(site / "www" / "img" / "logo.png").st_mode) == 0o755
    assert stat.S_IMODE(os.stat(site / "www" / ".htaccess").st_mode) != 0o755
    assert "changed to 755" in result.stderr


def test_cli_delete(site):
    result = run_cli(["-r", str(site), "delete", "www"])

    assert result.returncode == 0
    assert result.stdout == "11 entries removed\n"
    assert not (site / "www").exists()


def test_cli_delete_missing(site):
    result = run_cli(["-r", str(site), "delete", "nowhere"])

    assert result.returncode == 1
    assert "does not exist" in result.stderr


def test_cli_usage_errors(site):
    assert run_cli(["-r", "relative", "tree", "www"]).returncode == 2
    assert run_cli(["-r", str(site), "chmod", "www", "rwx"]).returncode == 2
    assert run_cli(["-r", str(site)]).returncode == 2


def test_cli_version():
    result = run_cli(["--version"])
    assert result.returncode == 0
    assert result.stdout.startswith("folderkit ")


@pytest.mark.skipif(platform.system() == "Windows", reason="Signal testing not reliable on Windows")
def test_cli_closed_pipe(site):
    """Piping a long listing into head must not print a traceback."""
    for i in range(2000):
        (site / "www" / f"file{i:04d}.txt").write_text("")

    process = subprocess.run(
        f"{sys.executable} -m folderkit.cli.main -r {site} tree www | head -n 5",
        shell=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        timeout=30,
    )

    assert len(process.stdout.splitlines()) == 5
    assert "Traceback" not in process.stderr
