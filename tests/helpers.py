# tests/helpers.py
"""
Shared helpers for MiniGit tests: transcript recording and file setup.
"""

import io
import re

from minigit.core.git_cli import GitCli, GitConstants

DASHES = "----------------------------"

_HASH_RE = re.compile(r"\b[0-9a-f]{40}\b")
_DATE_RE = re.compile(r"^Date: .*$", re.MULTILINE)


def normalize_transcript(text: str) -> str:
    """Replaces commit hashes and dates, which differ on every run"""
    text = _HASH_RE.sub("COMMIT_HASH", text)
    return _DATE_RE.sub("Date: COMMIT_DATE", text)


def expected(*lines: str) -> str:
    return "\n".join(lines) + "\n"


class GitSession:
    """Replays command sequences and records a transcript of their output"""

    def __init__(self, project_dir, settings):
        self.project_dir = project_dir
        self.output = io.StringIO()
        self.cli = GitCli(str(project_dir), settings=settings)
        self.cli.set_output_stream(self.output)

    def _header(self, text: str):
        self.output.write(f"{DASHES}\n{text}\n")

    def run_command(self, command: str, *args: str):
        self._header("Command: " + (command + " " + " ".join(args)).strip())
        self.cli.run_command(command, list(args))

    def run_relative_command(self, command: str, to: int):
        self._header(f"Command: {command} HEAD~{to}")
        revision = self.cli.get_relative_revision_from_head(to)
        self.cli.run_command(command, [revision])

    # echo content > file_name
    def create_file(self, file_name: str, content: str):
        self._header(f"Create file '{file_name}' with content '{content}'")
        path = self.project_dir / file_name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    # rm file_name
    def delete_file(self, file_name: str):
        self._header(f"Delete file {file_name}")
        path = self.project_dir / file_name
        if path.exists():
            path.unlink()

    # cat file_name
    def file_content(self, file_name: str):
        path = self.project_dir / file_name
        content = path.read_text() if path.exists() else "null"
        self._header(f"Command: content of file {file_name}")
        self.output.write(f"{content}\n")

    def status(self):
        self.run_command(GitConstants.STATUS)

    def add(self, *files: str):
        self.run_command(GitConstants.ADD, *files)

    def rm(self, *files: str):
        self.run_command(GitConstants.RM, *files)

    def commit(self, message: str):
        self.run_command(GitConstants.COMMIT, message)

    def reset(self, to: int):
        self.run_relative_command(GitConstants.RESET, to)

    def checkout_files(self, *args: str):
        self.run_command(GitConstants.CHECKOUT, *args)

    def checkout_revision(self, to: int):
        self.run_relative_command(GitConstants.CHECKOUT, to)

    def checkout_master(self):
        self.checkout_branch(GitConstants.MASTER)

    def checkout_branch(self, branch: str):
        self.run_command(GitConstants.CHECKOUT, branch)

    def log(self):
        self.run_command(GitConstants.LOG)

    def create_branch(self, branch: str):
        self.run_command(GitConstants.BRANCH_CREATE, branch)

    def remove_branch(self, branch: str):
        self.run_command(GitConstants.BRANCH_REMOVE, branch)

    def show_branches(self):
        self.run_command(GitConstants.SHOW_BRANCHES)

    def merge(self, branch: str):
        self.run_command(GitConstants.MERGE, branch)

    def create_file_and_commit(self, file_name: str, content: str):
        self.create_file(file_name, content)
        self.add(file_name)
        self.commit(file_name)

    def transcript(self) -> str:
        return normalize_transcript(self.output.getvalue())


def write(directory, name, content):
    """Creates or overwrites a working file, with parent directories."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def commit_file(git, directory, name, content, message=None):
    """Writes, stages and commits one file; returns the new commit hash."""
    write(directory, name, content)
    git.add([name])
    git.commit(message or name)
    return git.head_file.get_current_commit_hash()
