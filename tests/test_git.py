"""Tests for the git remote table wrapper."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from git_ssb import git
from git_ssb.exceptions import GitCommandError, GitEnvironmentError


def _completed(args: list[str], returncode: int = 0, stdout: str = "", stderr: str = "") -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(["git", *args], returncode, stdout, stderr)


class ParseSymrefTests(unittest.TestCase):
    def test_head_branch(self) -> None:
        output = "ref: refs/heads/main\tHEAD\n0123456789abcdef\tHEAD\n"
        self.assertEqual(git.parse_symref(output), "main")

    def test_no_symref(self) -> None:
        self.assertIsNone(git.parse_symref("0123456789abcdef\tHEAD\n"))


class GitRemoteTableTests(unittest.TestCase):
    def test_lists_remotes_in_git_order(self) -> None:
        with mock.patch.object(git, "run_git", return_value=_completed(["remote"], stdout="ssb\norigin\n")):
            table = git.GitRemoteTable()
            self.assertEqual(table.list_remotes(), ["ssb", "origin"])
            self.assertTrue(table.has_remote("origin"))
            self.assertFalse(table.has_remote("upstream"))

    def test_url_of_missing_remote(self) -> None:
        with mock.patch.object(git, "run_git", return_value=_completed(["remote"], stdout="origin\n")) as run:
            self.assertIsNone(git.GitRemoteTable().url_of("ssb"))
        run.assert_called_once()

    def test_not_a_repository(self) -> None:
        failed = _completed(["remote"], 128, stderr="fatal: not a git repository (or any of the parent directories): .git\n")
        with mock.patch.object(git, "run_git", return_value=failed):
            with self.assertRaises(GitEnvironmentError) as ctx:
                git.GitRemoteTable().list_remotes()
        self.assertIn("not a git repository", str(ctx.exception))

    def test_add_remote_failure(self) -> None:
        failed = _completed(["remote", "add"], 3, stderr="error: remote ssb already exists.\n")
        with mock.patch.object(git, "run_git", return_value=failed):
            with self.assertRaises(GitCommandError):
                git.GitRemoteTable().add_remote("ssb", "ssb://x")

    def test_detached_head(self) -> None:
        with mock.patch.object(git, "run_git", return_value=_completed(["symbolic-ref"], 1)):
            self.assertIsNone(git.GitRemoteTable().current_branch())

    def test_missing_git_binary(self) -> None:
        with mock.patch.object(subprocess, "run", side_effect=FileNotFoundError("git")):
            with self.assertRaises(GitEnvironmentError):
                git.run_git(["remote"])


if __name__ == "__main__":
    unittest.main()
