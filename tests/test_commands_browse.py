"""
Tests for browse and compare.
"""

import pytest

from hubwrap.core.errors import UsageError


class TestBrowse:
    """hub browse."""

    def test_current_repository(self, hub, git_repo):
        git_repo()
        args = hub("browse")
        assert args.to_exec() == ["open", "https://github.com/defunkt/hub"]

    def test_url_only(self, hub, git_repo):
        git_repo()
        args = hub("browse", "-u")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub"]

    def test_other_repository_subpage(self, hub, git_repo):
        git_repo()
        args = hub("browse", "-u", "mislav/dotfiles", "issues")
        assert args.to_exec() == ["echo", "https://github.com/mislav/dotfiles/issues"]

    def test_own_repository(self, hub):
        args = hub("browse", "-u", "dotfiles")
        assert args.to_exec() == ["echo", "https://github.com/tpw/dotfiles"]

    def test_commits_of_current_branch(self, hub, git_repo):
        git_repo(branch="refs/heads/feature", upstream="refs/remotes/origin/feature")
        args = hub("browse", "-u", "--", "commits")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub/commits/feature"]

    def test_tree_of_tracked_branch(self, hub, git_repo):
        git_repo(branch="refs/heads/feature", upstream="refs/remotes/origin/feature")
        args = hub("browse", "-u")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub/tree/feature"]

    def test_wiki(self, hub, git_repo):
        git_repo(remotes={"origin": "git@github.com:defunkt/hub.wiki.git"})
        args = hub("browse", "-u")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub/wiki"]

    def test_browser_with_arguments(self, hub, git_repo, ctx):
        git_repo()
        ctx._config = ctx.config.model_copy(update={"browser": "firefox --new-tab"})
        args = hub("browse")
        assert args.to_exec() == ["firefox", "--new-tab", "https://github.com/defunkt/hub"]

    def test_paginate_flag_warns(self, hub, git_repo, stderr):
        git_repo()
        args = hub("browse", "-u", "-p")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub"]
        assert "the `-p` flag has no effect anymore" in stderr()

    def test_no_project(self, hub, git_repo):
        git_repo(remotes={"origin": "git@bitbucket.org:defunkt/hub.git"})
        with pytest.raises(UsageError, match=r"Usage: hub browse \[<USER>/\]<REPOSITORY>"):
            hub("browse")


class TestCompare:
    """hub compare."""

    def test_range(self, hub, git_repo):
        git_repo()
        args = hub("compare", "-u", "refactor")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub/compare/refactor"]

    def test_two_dot_range_becomes_three_dots(self, hub, git_repo):
        git_repo()
        args = hub("compare", "-u", "1.0..fix")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub/compare/1.0...fix"]

    def test_other_owner(self, hub, git_repo):
        git_repo()
        args = hub("compare", "-u", "mislav", "v1.0...v1.1")
        assert args.to_exec() == ["echo", "https://github.com/mislav/hub/compare/v1.0...v1.1"]

    def test_tracked_branch(self, hub, git_repo):
        git_repo(branch="refs/heads/feature", upstream="refs/remotes/origin/feature")
        args = hub("compare", "-u")
        assert args.to_exec() == ["echo", "https://github.com/defunkt/hub/compare/feature"]

    def test_master_needs_range(self, hub, git_repo):
        git_repo()
        with pytest.raises(UsageError, match=r"Usage: hub compare"):
            hub("compare")
