# tests/test_git_scenarios.py
"""
Scenario tests replaying command sequences through GitCli.

Commit hashes and dates change on every run, so transcripts use the
COMMIT_HASH and COMMIT_DATE placeholders in their place.
"""

from tests.helpers import DASHES, expected


def log_entry(message):
    return ["Commit COMMIT_HASH", "Author: Tester", "Date: COMMIT_DATE", "", message, ""]


INIT = [DASHES, "Command: init", "Project initialized"]
UP_TO_DATE_MASTER = [DASHES, "Command: status", "Current branch is 'master'", "Everything up to date"]


def add_and_commit(file_name, content, message):
    return [
        DASHES, f"Create file '{file_name}' with content '{content}'",
        DASHES, f"Command: add {file_name}", "Add completed successful",
        DASHES, f"Command: commit {message}", "Files committed",
    ]


class TestGitScenarios:
    """Transcripts of complete command sequences."""

    def test_add(self, session):
        session.create_file("file.txt", "aaa")
        session.status()
        session.add("file.txt")
        session.status()
        session.commit("First commit")
        session.status()
        session.log()

        assert session.transcript() == expected(
            *INIT,
            DASHES, "Create file 'file.txt' with content 'aaa'",
            DASHES, "Command: status", "Current branch is 'master'",
            "Untracked files:", "", "New files:", "\tfile.txt", "",
            DASHES, "Command: add file.txt", "Add completed successful",
            DASHES, "Command: status", "Current branch is 'master'",
            "Ready to commit:", "", "New files:", "\tfile.txt", "",
            DASHES, "Command: commit First commit", "Files committed",
            *UP_TO_DATE_MASTER,
            DASHES, "Command: log",
            *log_entry("First commit"),
        )

    def test_multiple_commits(self, session):
        file1 = "file1.txt"
        file2 = "file2.txt"
        session.create_file(file1, "aaa")
        session.create_file(file2, "bbb")
        session.status()
        session.add(file1)
        session.add(file2)
        session.status()
        session.rm(file2)
        session.status()
        session.commit("Add file1.txt")
        session.add(file2)
        session.commit("Add file2.txt")
        session.status()
        session.log()

        assert session.transcript() == expected(
            *INIT,
            DASHES, "Create file 'file1.txt' with content 'aaa'",
            DASHES, "Create file 'file2.txt' with content 'bbb'",
            DASHES, "Command: status", "Current branch is 'master'",
            "Untracked files:", "", "New files:", "\tfile1.txt", "\tfile2.txt", "",
            DASHES, "Command: add file1.txt", "Add completed successful",
            DASHES, "Command: add file2.txt", "Add completed successful",
            DASHES, "Command: status", "Current branch is 'master'",
            "Ready to commit:", "", "New files:", "\tfile1.txt", "\tfile2.txt", "",
            DASHES, "Command: rm file2.txt", "Rm completed successful",
            DASHES, "Command: status", "Current branch is 'master'",
            "Untracked files:", "", "New files:", "\tfile2.txt", "",
            "Ready to commit:", "", "New files:", "\tfile1.txt", "",
            DASHES, "Command: commit Add file1.txt", "Files committed",
            DASHES, "Command: add file2.txt", "Add completed successful",
            DASHES, "Command: commit Add file2.txt", "Files committed",
            *UP_TO_DATE_MASTER,
            DASHES, "Command: log",
            *log_entry("Add file2.txt"),
            *log_entry("Add file1.txt"),
        )

    def test_checkout_file(self, session):
        file = "file.txt"
        session.create_file(file, "aaa")
        session.add(file)
        session.commit("Add file.txt")

        session.delete_file(file)
        session.status()
        session.checkout_files("--", file)
        session.file_content(file)
        session.status()

        session.create_file(file, "bbb")
        session.file_content(file)
        session.status()
        session.checkout_files("--", file)
        session.file_content(file)
        session.status()

        assert session.transcript() == expected(
            *INIT,
            *add_and_commit(file, "aaa", "Add file.txt"),
            DASHES, "Delete file file.txt",
            DASHES, "Command: status", "Current branch is 'master'",
            "Untracked files:", "", "Removed files:", "\tfile.txt", "",
            DASHES, "Command: checkout -- file.txt", "Checkout completed successful",
            DASHES, "Command: content of file file.txt", "aaa",
            *UP_TO_DATE_MASTER,
            DASHES, "Create file 'file.txt' with content 'bbb'",
            DASHES, "Command: content of file file.txt", "bbb",
            DASHES, "Command: status", "Current branch is 'master'",
            "Untracked files:", "", "Modified files:", "\tfile.txt", "",
            DASHES, "Command: checkout -- file.txt", "Checkout completed successful",
            DASHES, "Command: content of file file.txt", "aaa",
            *UP_TO_DATE_MASTER,
        )

    def test_reset(self, session):
        file = "file.txt"
        session.create_file(file, "aaa")
        session.add(file)
        session.commit("First commit")

        session.create_file(file, "bbb")
        session.add(file)
        session.commit("Second commit")
        session.log()

        session.reset(1)
        session.file_content(file)
        session.log()

        session.create_file(file, "ccc")
        session.add(file)
        session.commit("Third commit")
        session.log()

        assert session.transcript() == expected(
            *INIT,
            *add_and_commit(file, "aaa", "First commit"),
            *add_and_commit(file, "bbb", "Second commit"),
            DASHES, "Command: log",
            *log_entry("Second commit"),
            *log_entry("First commit"),
            DASHES, "Command: reset HEAD~1", "Reset successful",
            DASHES, "Command: content of file file.txt", "aaa",
            DASHES, "Command: log",
            *log_entry("First commit"),
            *add_and_commit(file, "ccc", "Third commit"),
            DASHES, "Command: log",
            *log_entry("Third commit"),
            *log_entry("First commit"),
        )

    def test_checkout(self, session):
        file = "file.txt"
        session.create_file(file, "aaa")
        session.add(file)
        session.commit("First commit")

        session.create_file(file, "bbb")
        session.add(file)
        session.commit("Second commit")
        session.log()

        session.checkout_revision(1)
        session.status()
        session.log()

        session.checkout_master()
        session.status()
        session.log()

        assert session.transcript() == expected(
            *INIT,
            *add_and_commit(file, "aaa", "First commit"),
            *add_and_commit(file, "bbb", "Second commit"),
            DASHES, "Command: log",
            *log_entry("Second commit"),
            *log_entry("First commit"),
            DASHES, "Command: checkout HEAD~1", "Checkout completed successful",
            DASHES, "Command: status", "Error while performing status: Head is detached",
            DASHES, "Command: log",
            *log_entry("First commit"),
            DASHES, "Command: checkout master", "Checkout completed successful",
            *UP_TO_DATE_MASTER,
            DASHES, "Command: log",
            *log_entry("Second commit"),
            *log_entry("First commit"),
        )
        assert (session.project_dir / file).read_text() == "bbb"

    def test_branches(self, session):
        session.create_file_and_commit("file1.txt", "aaa")

        session.create_branch("develop")
        session.create_file_and_commit("file2.txt", "bbb")

        session.status()
        session.log()
        session.show_branches()
        session.checkout_master()
        session.status()
        session.log()

        session.create_branch("new-feature")
        session.create_file_and_commit("file3.txt", "ccc")
        session.status()
        session.log()

        session.checkout_branch("develop")
        session.status()
        session.log()

        assert session.transcript() == expected(
            *INIT,
            *add_and_commit("file1.txt", "aaa", "file1.txt"),
            DASHES, "Command: branch-create develop",
            "Branch develop created successfully", "You can checkout it with 'checkout develop'",
            *add_and_commit("file2.txt", "bbb", "file2.txt"),
            DASHES, "Command: status", "Current branch is 'develop'", "Everything up to date",
            DASHES, "Command: log",
            *log_entry("file2.txt"),
            *log_entry("file1.txt"),
            DASHES, "Command: show-branches", "Available branches:", "develop", "master",
            DASHES, "Command: checkout master", "Checkout completed successful",
            *UP_TO_DATE_MASTER,
            DASHES, "Command: log",
            *log_entry("file1.txt"),
            DASHES, "Command: branch-create new-feature",
            "Branch new-feature created successfully", "You can checkout it with 'checkout new-feature'",
            *add_and_commit("file3.txt", "ccc", "file3.txt"),
            DASHES, "Command: status", "Current branch is 'new-feature'", "Everything up to date",
            DASHES, "Command: log",
            *log_entry("file3.txt"),
            *log_entry("file1.txt"),
            DASHES, "Command: checkout develop", "Checkout completed successful",
            DASHES, "Command: status", "Current branch is 'develop'", "Everything up to date",
            DASHES, "Command: log",
            *log_entry("file2.txt"),
            *log_entry("file1.txt"),
        )
        assert not (session.project_dir / "file3.txt").exists()
        assert (session.project_dir / "file2.txt").read_text() == "bbb"

    def test_branch_remove(self, session):
        session.create_file_and_commit("file1.txt", "aaa")
        session.create_branch("develop")
        session.create_file_and_commit("file2.txt", "bbb")
        session.status()
        session.checkout_branch("master")
        session.status()
        session.remove_branch("develop")
        session.show_branches()

        assert session.transcript() == expected(
            *INIT,
            *add_and_commit("file1.txt", "aaa", "file1.txt"),
            DASHES, "Command: branch-create develop",
            "Branch develop created successfully", "You can checkout it with 'checkout develop'",
            *add_and_commit("file2.txt", "bbb", "file2.txt"),
            DASHES, "Command: status", "Current branch is 'develop'", "Everything up to date",
            DASHES, "Command: checkout master", "Checkout completed successful",
            *UP_TO_DATE_MASTER,
            DASHES, "Command: branch-remove develop", "Branch develop removed successfully",
            DASHES, "Command: show-branches", "Available branches:", "master",
        )
