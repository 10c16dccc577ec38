"""
Tests for rules that bring in someone else's commits: checkout, cherry-pick, am/apply.
"""

import pytest

from hubwrap.core.errors import DomainError, GitHubAPIError, TransportError
from hubwrap.core.github import PullRequest

PULL_URL = "https://github.com/defunkt/hub/pull/73"


@pytest.fixture
def pull(api, git_repo):
    """Pull request #73 on defunkt/hub, opened from mislav:feature."""
    git_repo()
    request = PullRequest(number=73, html_url=PULL_URL, head_label="mislav:feature")
    api.pulls[("defunkt/hub", "73")] = request
    return request


class TestCheckout:
    """checkout of a pull request URL."""

    def test_adds_remote_and_tracking_branch(self, hub, pull):
        args = hub("checkout", PULL_URL)
        assert args.commands() == [
            ["git", "remote", "add", "-f", "-t", "feature", "mislav", "git://github.com/mislav/hub.git"],
            ["git", "checkout", "--track", "-B", "mislav-feature", "mislav/feature"],
        ]

    def test_custom_branch_name(self, hub, pull):
        args = hub("checkout", PULL_URL, "review")
        assert args.tokens == ["checkout", "--track", "-B", "review", "mislav/feature"]

    def test_existing_remote(self, hub, pull, git_repo):
        git_repo(
            remotes={
                "origin": "git://github.com/defunkt/hub.git",
                "mislav": "git://github.com/mislav/hub.git",
            }
        )
        args = hub("checkout", PULL_URL)
        assert args.prior_commands == [
            ["git", "remote", "set-branches", "--add", "mislav", "feature"],
            ["git", "fetch", "mislav", "+refs/heads/feature:refs/remotes/mislav/feature"],
        ]

    def test_private_fork(self, hub, pull):
        pull.head_repo_private = True
        args = hub("checkout", PULL_URL)
        assert args.prior_commands[0][-1] == "git@github.com:mislav/hub.git"

    def test_deleted_fork(self, hub, pull):
        pull.head_repo_present = False
        with pytest.raises(DomainError, match="mislav's fork is not available anymore"):
            hub("checkout", PULL_URL)

    def test_fetch_failure(self, hub, git_repo, api, monkeypatch: pytest.MonkeyPatch):
        git_repo()

        def fail(project, number):
            raise GitHubAPIError(404, "Not Found")

        monkeypatch.setattr(api, "fetch_pull_request", fail)
        with pytest.raises(TransportError, match=r"Error fetching pull request: Not Found \(HTTP 404\)"):
            hub("checkout", PULL_URL)

    @pytest.mark.parametrize(
        "target", ["master", "https://github.com/defunkt/hub/issues/73", "https://example.com/pull/1"]
    )
    def test_other_targets_untouched(self, hub, git_repo, target: str):
        git_repo()
        assert not hub("checkout", target).is_changed()


class TestCherryPick:
    """cherry-pick of commit URLs and owner@sha."""

    def test_commit_url(self, hub, git_repo):
        git_repo()
        args = hub("cherry-pick", "https://github.com/mislav/hub/commit/a319d88")
        assert args.commands() == [
            ["git", "remote", "add", "-f", "mislav", "git://github.com/mislav/hub.git"],
            ["git", "cherry-pick", "a319d88"],
        ]

    def test_owner_at_sha_with_existing_remote(self, hub, git_repo):
        git_repo(
            remotes={
                "origin": "git://github.com/defunkt/hub.git",
                "mislav": "git@github.com:mislav/hub.git",
            }
        )
        args = hub("cherry-pick", "mislav@a319d88")
        assert args.commands() == [
            ["git", "fetch", "mislav"],
            ["git", "cherry-pick", "a319d88"],
        ]

    def test_owner_at_sha_adds_remote(self, hub, git_repo):
        git_repo()
        args = hub("cherry-pick", "xoebus@a319d88")
        assert args.prior_commands == [
            ["git", "remote", "add", "-f", "xoebus", "git://github.com/xoebus/hub.git"],
        ]

    def test_owner_at_sha_needs_github_origin(self, hub, git_repo):
        git_repo(remotes={"origin": "git@bitbucket.org:defunkt/hub.git"})
        with pytest.raises(DomainError, match="doesn't point to a GitHub repository"):
            hub("cherry-pick", "mislav@a319d88")

    def test_mainline_untouched(self, hub, git_repo):
        git_repo()
        args = hub("cherry-pick", "-m", "1", "mislav@a319d88")
        assert not args.is_changed()

    def test_plain_sha_untouched(self, hub, git_repo):
        git_repo()
        assert not hub("cherry-pick", "a319d88").is_changed()


class TestAm:
    """am/apply of pull request, commit and gist URLs."""

    @pytest.fixture(autouse=True)
    def tmpdir_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TMPDIR", "/tmp-dir")

    def test_pull_request(self, hub):
        args = hub("am", "-3", "https://github.com/defunkt/hub/pull/55")
        assert args.commands() == [
            [
                "curl",
                "-#LA",
                "hub 0.1.0",
                "https://github.com/defunkt/hub/pull/55.patch",
                "-o",
                "/tmp-dir/55.patch",
            ],
            ["git", "am", "-3", "/tmp-dir/55.patch"],
        ]

    def test_pull_request_files_tab(self, hub):
        args = hub("am", "https://github.com/defunkt/hub/pull/55/files#diff-1")
        assert args.prior_commands[0][3] == "https://github.com/defunkt/hub/pull/55.patch"

    def test_commit(self, hub):
        args = hub("apply", "https://github.com/davidbalbert/hub/commit/fdb9921")
        assert args.prior_commands[0][3] == "https://github.com/davidbalbert/hub/commit/fdb9921.patch"
        assert args.tokens == ["apply", "/tmp-dir/fdb9921.patch"]

    def test_gist(self, hub):
        args = hub("apply", "https://gist.github.com/8da7fb575debd88c54cf")
        assert args.prior_commands[0][3] == "https://gist.github.com/8da7fb575debd88c54cf.txt"
        assert args.tokens == ["apply", "/tmp-dir/gist-8da7fb575debd88c54cf.txt"]

    def test_noop_downloads_nothing(self, hub):
        args = hub("--noop", "am", "https://github.com/defunkt/hub/pull/55")
        assert args.is_dry_run()
        assert args.prior_commands[0][0] == "curl"

    def test_local_patch_untouched(self, hub):
        assert not hub("am", "0001-fix.patch").is_changed()

    def test_foreign_url_untouched(self, hub):
        assert not hub("am", "https://example.com/fix.patch").is_changed()
