"""Tests for `[<repo>:]<branch>` parsing."""

from __future__ import annotations

import unittest

from git_ssb.address import format_address, parse_address, split_address
from git_ssb.exceptions import EmptyBranchNameError, UnknownRepoReferenceError
from git_ssb.models import Address, RemoteName, RepoId, RepoUrl
from git_ssb.resolver import RepoResolver
from tests.support import REPO_A, REPO_B, FakeRemoteTable


class SplitAddressTests(unittest.TestCase):
    def test_branch_only(self) -> None:
        self.assertEqual(split_address("master"), (None, "master"))

    def test_surrounding_whitespace_is_trimmed(self) -> None:
        self.assertEqual(split_address("  my branch \n"), (None, "my branch"))

    def test_repo_and_branch(self) -> None:
        self.assertEqual(split_address("origin:master"), ("origin", "master"))

    def test_url_prefix_keeps_scheme(self) -> None:
        self.assertEqual(split_address(f"ssb://{REPO_A}:dev"), (f"ssb://{REPO_A}", "dev"))

    def test_escaped_colon_in_repo(self) -> None:
        self.assertEqual(split_address("odd\\:name:main"), ("odd:name", "main"))

    def test_escaped_colon_without_separator_stays_in_branch(self) -> None:
        self.assertEqual(split_address("a\\:b"), (None, "a\\:b"))

    def test_empty_branch(self) -> None:
        for text in ("origin:", "", "   ", f"ssb://{REPO_A}:"):
            with self.subTest(text=text):
                with self.assertRaises(EmptyBranchNameError):
                    split_address(text)


class ParseAddressTests(unittest.TestCase):
    def setUp(self) -> None:
        self.resolver = RepoResolver(FakeRemoteTable({"origin": f"ssb://{REPO_A}"}))

    def test_known_remote(self) -> None:
        self.assertEqual(
            parse_address("origin:master", self.resolver),
            Address(repo_ref=RemoteName("origin"), branch="master"),
        )

    def test_no_prefix(self) -> None:
        self.assertEqual(parse_address("master", self.resolver), Address(repo_ref=None, branch="master"))

    def test_unknown_prefix(self) -> None:
        with self.assertRaises(UnknownRepoReferenceError):
            parse_address("elsewhere:master", self.resolver)

    def test_parse_inverts_format(self) -> None:
        refs = [None, RemoteName("origin"), RepoId(REPO_B), RepoUrl(f"ssb://{REPO_B}")]
        for ref in refs:
            with self.subTest(ref=ref):
                text = format_address(ref, "topic/thing")
                self.assertEqual(parse_address(text, self.resolver), Address(ref, "topic/thing"))


if __name__ == "__main__":
    unittest.main()
