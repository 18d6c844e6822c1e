"""Shared test fixtures and configuration."""

import shutil
import subprocess
import tempfile
from pathlib import Path

import pytest

from taskgit.hunks import ApplyResult


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_diff():
    """Two-file unified diff: src/a.txt with 3 hunks, docs/readme.md with 1."""
    return """diff --git a/src/a.txt b/src/a.txt
index 3b18e51..a1c2d3e 100644
--- a/src/a.txt
+++ b/src/a.txt
@@ -1,5 +1,5 @@
 line 1
-line 2
+line two
 line 3
 line 4
 line 5
@@ -12,7 +12,7 @@
 line 12
 line 13
 line 14
-line 15
+line fifteen
 line 16
 line 17
 line 18
@@ -25,4 +25,4 @@
 line 25
 line 26
 line 27
-line 28
+line twenty-eight
diff --git a/docs/readme.md b/docs/readme.md
index 83db48f..bf269f4 100644
--- a/docs/readme.md
+++ b/docs/readme.md
@@ -1,3 +1,4 @@ Title
 # Title
+
 Some text
 More text
"""


@pytest.fixture
def new_file_diff():
    """Diff for a newly added file (git emits four header lines)."""
    return """diff --git a/src/new.py b/src/new.py
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/src/new.py
@@ -0,0 +1,2 @@
+def hello():
+    return "hi"
"""


@pytest.fixture
def binary_diff():
    """Diff for a binary file."""
    return """diff --git a/image.png b/image.png
index 1234567..abcdefg 100644
Binary files a/image.png and b/image.png differ
"""


class FakeBackend:
    """RepositoryBackend that records calls and fails applies on demand.

    Args:
        fail_suffixes: Patch file suffixes (e.g. "-ac.patch") whose apply fails.
    """

    def __init__(self, fail_suffixes=()):
        self.fail_suffixes = tuple(fail_suffixes)
        self.calls = []
        self.applied_contents = []

    def revert_file(self, file_name):
        self.calls.append(("revert", file_name))

    def apply_patch(self, patch_path):
        patch_path = Path(patch_path)
        # Scratch files must exist while they are being applied
        self.applied_contents.append(patch_path.read_bytes().decode("utf-8", "surrogateescape"))
        self.calls.append(("apply", patch_path.name[-9:]))
        if patch_path.name.endswith(self.fail_suffixes):
            return ApplyResult(success=False, stderr=f"error: patch failed: {patch_path.name}")
        return ApplyResult(success=True)

    def stage_file(self, file_name):
        self.calls.append(("stage", file_name))


@pytest.fixture
def make_backend():
    """Factory for FakeBackend with custom failing patch suffixes."""
    return FakeBackend


@pytest.fixture
def fake_backend():
    """Backend where every apply succeeds."""
    return FakeBackend()


@pytest.fixture
def failing_backend():
    """Backend where applying the accepted-hunks patch fails."""
    return FakeBackend(fail_suffixes=("-ac.patch",))


def _git(repo_dir, *args):
    subprocess.run(["git", *args], cwd=repo_dir, capture_output=True, check=True)


@pytest.fixture
def temp_repo(tmp_path):
    """Create a temporary git repository with a committed 28-line file."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_dir = tmp_path / "test_repo"
    repo_dir.mkdir()

    _git(repo_dir, "init")
    _git(repo_dir, "config", "user.email", "test@example.com")
    _git(repo_dir, "config", "user.name", "Test User")
    _git(repo_dir, "config", "core.autocrlf", "false")

    (repo_dir / "src").mkdir()
    (repo_dir / "src" / "a.txt").write_text(
        "".join(f"line {n}\n" for n in range(1, 29))
    )
    _git(repo_dir, "add", "src/a.txt")
    _git(repo_dir, "commit", "-m", "Initial commit")

    return repo_dir
