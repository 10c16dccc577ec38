"""
Help text shown by ``hub help``, ``hub help hub`` and ``-h`` on custom
commands.
"""

from __future__ import annotations

import re

IMPROVED_HELP_TEXT = """\
usage: git [--version] [--exec-path[=<path>]] [--html-path] [--man-path] [--info-path]
           [-p|--paginate|--no-pager] [--no-replace-objects] [--bare]
           [--git-dir=<path>] [--work-tree=<path>] [--namespace=<name>]
           [-c name=value] [--help]
           <command> [<args>]

Basic Commands:
   init       Create an empty git repository or reinitialize an existing one
   add        Add new or modified files to the staging area
   rm         Remove files from the working directory and staging area
   mv         Move or rename a file, a directory, or a symlink
   status     Show the status of the working directory and staging area
   commit     Record changes to the repository

History Commands:
   log        Show the commit history log
   diff       Show changes between commits, commit and working tree, etc
   show       Show information about commits, tags or files

Branching Commands:
   branch     List, create, or delete branches
   checkout   Switch the active branch to another branch
   merge      Join two or more development histories (branches) together
   tag        Create, list, delete, sign or verify a tag object

Remote Commands:
   clone      Clone a remote repository into a new directory
   fetch      Download data, tags and branches from a remote repository
   pull       Fetch from and merge with another repository or a local branch
   push       Upload data, tags and branches to a remote repository
   remote     View and manage a set of remote repositories

Advanced commands:
   reset      Reset your staging area or working directory to another point
   rebase     Re-apply a series of patches in one branch onto another
   bisect     Find by binary search the change that introduced a bug
   grep       Print files with lines matching a pattern in your codebase

GitHub Commands:
   pull-request   Open a pull request on GitHub
   fork           Make a fork of a remote repository on GitHub and add as remote
   create         Create this repository on GitHub and add GitHub as origin
   browse         Open a GitHub page in the default browser
   compare        Open a compare page on GitHub

See 'git help <command>' for more information on a specific command.
"""

HUB_MANUAL = """\
HUB(1)                           Hub Manual                           HUB(1)

NAME
    hub - git + hub = github

SYNOPSIS
    hub [--noop] COMMAND OPTIONS
    hub alias [-s] [SHELL]

  Expanded git commands:
    git init -g OPTIONS
    git clone [-p] OPTIONS [USER/]REPOSITORY DIRECTORY
    git remote add [-p] OPTIONS USER[/REPOSITORY]
    git remote set-url [-p] OPTIONS REMOTE-NAME USER[/REPOSITORY]
    git fetch USER-1,[USER-2,...]
    git checkout PULLREQ-URL [BRANCH]
    git cherry-pick GITHUB-REF
    git am GITHUB-URL
    git apply GITHUB-URL
    git push REMOTE-1,REMOTE-2,...,REMOTE-N [REF]
    git submodule add [-p] OPTIONS [USER/]REPOSITORY DIRECTORY

  Custom git commands:
    git create [NAME] [-p] [-d DESCRIPTION] [-h HOMEPAGE]
    git browse [-u] [[USER/]REPOSITORY] [SUBPAGE]
    git compare [-u] [USER] [START...]END
    git fork [--no-remote]
    git pull-request [-f] [TITLE|-i ISSUE] [-b BASE] [-h HEAD]

DESCRIPTION
    hub enhances various git commands to ease most common workflows with
    GitHub.

    git init -g
        Create a git repository as with git-init(1) and add remote origin
        at "git@github.com:USER/REPOSITORY.git"; USER is your GitHub
        username and REPOSITORY is the current working directory basename.

    git clone [-p] [USER/]REPOSITORY DIRECTORY
        Clone repository "git://github.com/USER/REPOSITORY.git" into
        DIRECTORY as with git-clone(1). When USER/ is omitted, assumes
        your GitHub login. With -p, clone private repositories over SSH.
        For repositories under your GitHub login, -p is implicit.

    git remote add [-p] USER[/REPOSITORY]
        Add remote "git://github.com/USER/REPOSITORY.git" as with
        git-remote(1). When /REPOSITORY is omitted, the basename of the
        current working directory is used. With -p, use private remote
        "git@github.com:USER/REPOSITORY.git". If USER is "origin" then
        uses your GitHub login.

    git fetch USER-1,[USER-2,...]
        Adds missing remote(s) with git remote add prior to fetching from
        them.

    git checkout PULLREQ-URL [BRANCH]
        Checks out the head of the pull request as a local branch, to
        allow for reviewing, rebasing and otherwise cleaning up the
        commits in the pull request before merging. The name of the local
        branch can explicitly be set with BRANCH.

    git cherry-pick GITHUB-REF
        Cherry-pick a commit from a fork using either full URL to the
        commit or GitHub-flavored Markdown notation, which is user@sha.
        If the remote doesn't yet exist, it will be added. A git-fetch(1)
        user is issued prior to the cherry-pick attempt.

    git [am|apply] GITHUB-URL
        Downloads the patch file for the pull request or commit at the URL
        and applies that patch from disk with git am or git apply.
        Similar to cherry-pick, but doesn't add new remotes. git am
        creates commits while preserving authorship info while apply only
        applies the patch to the working copy.

    git push REMOTE-1,REMOTE-2,...,REMOTE-N [REF]
        Push REF to each of REMOTE-1 through REMOTE-N by executing
        multiple git push commands.

    git create [-p] [-d DESCRIPTION] [-h HOMEPAGE] [NAME]
        Create a new public GitHub repository from the current git
        repository and add remote origin at
        "git@github.com:USER/REPOSITORY.git". With -p, create a private
        repository, and -d and -h set the repository's description and
        homepage URL, respectively. If NAME is omitted, name of the GitHub
        repository will be the same as name of the current working
        directory. If NAME is in the ORGANIZATION/NAME form, the
        repository will be created under that organization.

    git browse [-u] [[USER/]REPOSITORY] [SUBPAGE]
        Open repository's GitHub page in the system's default web browser
        using open(1) or the BROWSER env variable. If the repository isn't
        specified, browse opens the page of the repository found in the
        current directory. If SUBPAGE is specified, the browser will open
        on the specified subpage: one of "wiki", "commits", "issues" or
        other (the default is "tree"). With -u, outputs the URL rather
        than opening the browser.

    git compare [-u] [USER] [START...]END
        Open a GitHub compare view page in the system's default web
        browser. START to END are branch names, tag names, or commit
        SHA1s specifying the range of history to compare. If a range with
        two dots (a..b) is given, it will be transformed into one with
        three dots. If START is omitted, GitHub will compare against the
        base branch (the default is "master"). With -u, outputs the URL
        rather than opening the browser.

    git fork [--no-remote]
        Forks the original project (referenced by "origin" remote) on
        GitHub and adds a new remote for it under your username.

    git pull-request [-f] [TITLE|-i ISSUE] [-b BASE] [-h HEAD]
        Opens a pull request on GitHub for the project that the "origin"
        remote points to. The default head of the pull request is the
        current branch. Both base and head of the pull request can be
        explicitly given in one of the following formats: "branch",
        "owner:branch", "owner/repo:branch". This command will abort
        operation if it detects that the current topic branch has local
        commits that are not yet pushed to its upstream branch on the
        remote. To skip this check, use -f.

        If TITLE is omitted, a text editor will open in which title and
        body of the pull request can be entered in the same manner as git
        commit message.

        If instead of normal TITLE an issue number is given with -i, the
        pull request will be attached to an existing GitHub issue.
        Alternatively, instead of title you can paste a full URL to an
        issue on GitHub.

    git alias [-s] [SHELL]
        Writes shell aliasing code for SHELL (bash, sh, zsh, csh, ksh,
        fish) to standard output. With -s, output a script suitable for
        eval.

CONFIGURATION
    hub reads GITHUB_USER and GITHUB_TOKEN from the environment, falling
    back to the "github.user" and "github.token" git config values.
    GITHUB_HOST selects a GitHub Enterprise host. Set HUB_PROTOCOL (or the
    "hub.protocol" git config value) to "https" to use HTTPS remote URLs.
    Settings may also be stored in ~/.config/hubwrap/config.json.

BUGS
    https://github.com/github/hub/issues
"""


def usage_for(command: str, manual: str = HUB_MANUAL) -> str | None:
    """
    Synopsis line for ``command`` from the manual, or None.

    Example:
        >>> usage_for("fork")
        'git fork [--no-remote]'
    """
    pattern = re.compile(rf"(git|hub) {re.escape(command)}(\s|$)")
    for line in manual.splitlines():
        if pattern.search(line):
            return line.strip()
    return None


__all__ = ["HUB_MANUAL", "IMPROVED_HELP_TEXT", "usage_for"]
