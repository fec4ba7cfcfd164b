"""Durable key/blob storage: a JSON file, or a file on a git branch."""

import logging
import os
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Protocol

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.objects import Blob, Tree

from monoboard.errors import StorageError

logger = logging.getLogger(__name__)

FALLBACK_IDENTITY = {
    "GIT_AUTHOR_NAME": "monoboard",
    "GIT_AUTHOR_EMAIL": "monoboard@localhost",
    "GIT_COMMITTER_NAME": "monoboard",
    "GIT_COMMITTER_EMAIL": "monoboard@localhost",
}


class Storage(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, text: str) -> None: ...


class FileStorage:
    """Stores each key as <directory>/<key>.json."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()

    def path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> str | None:
        """Return the stored text, or None if nothing was saved yet."""
        try:
            return self.path(key).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Could not read {self.path(key)}: {exc}") from exc

    def write(self, key: str, text: str) -> None:
        """Replace the stored text atomically."""
        target = self.path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{key}_", suffix=".tmp", dir=self.directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp, target)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Could not write {target}: {exc}") from exc


# --- Git-backed storage ---


def _tree_get(tree: Tree, name: str) -> Blob | Tree | None:
    """Get an item from a tree by name, returning None if not found."""
    try:
        return tree[name]
    except KeyError:
        return None


class GitStorage:
    """Stores each key as <key>.json on a dedicated branch.

    Writes go through git plumbing and never touch the working tree or
    the index. Every changed write is one commit on the branch.
    """

    def __init__(self, repo_path: str | Path, branch: str = "monoboard") -> None:
        self.repo_path = Path(repo_path).expanduser().resolve()
        self.branch = branch

    def _repo(self) -> Repo:
        try:
            return Repo(self.repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as exc:
            raise StorageError(f"{self.repo_path} is not a git repository") from exc

    def _git(self, args: list[str], input_text: str | None = None, env: dict | None = None) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ["git", *args],
                cwd=self.repo_path,
                input=input_text.encode("utf-8") if input_text is not None else None,
                capture_output=True,
                check=True,
                env=env,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            stderr = getattr(exc, "stderr", b"") or b""
            raise StorageError(f"git {args[0]} failed: {stderr.decode('utf-8', 'replace').strip() or exc}") from exc
        return result.stdout.decode("utf-8").strip()

    def _tip(self, repo: Repo) -> str | None:
        if self.branch not in [h.name for h in repo.heads]:
            return None
        return repo.heads[self.branch].commit.hexsha

    def _commit_env(self, repo: Repo) -> dict[str, Any]:
        """Environment for commit-tree, with a fallback identity if none is configured."""
        reader = repo.config_reader()
        if reader.has_option("user", "name") and reader.has_option("user", "email"):
            return dict(os.environ)
        return {**FALLBACK_IDENTITY, **os.environ}

    def read(self, key: str) -> str | None:
        """Return the blob text on the branch tip, or None if absent."""
        repo = self._repo()
        tip = self._tip(repo)
        if tip is None:
            return None
        blob = _tree_get(repo.commit(tip).tree, f"{key}.json")
        if not isinstance(blob, Blob):
            return None
        try:
            return blob.data_stream.read().decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StorageError(f"{key}.json on {self.branch} is not UTF-8") from exc

    def write(self, key: str, text: str, message: str = "Update board") -> None:
        """Commit text as <key>.json on the branch, keeping other files."""
        repo = self._repo()
        tip = self._tip(repo)
        name = f"{key}.json"
        blob_sha = self._git(["hash-object", "-w", "--stdin"], input_text=text)

        entries: list[tuple[str, str, str, str]] = []
        if tip is not None:
            for item in repo.commit(tip).tree:
                if item.name == name:
                    if item.hexsha == blob_sha:
                        logger.debug("%s unchanged on %s, skipping commit", name, self.branch)
                        return
                    continue
                entries.append((f"{item.mode:06o}", item.type, item.hexsha, item.name))
        entries.append(("100644", "blob", blob_sha, name))

        lines = [f"{mode} {typ} {sha}\t{entry_name}" for mode, typ, sha, entry_name in entries]
        tree_sha = self._git(["mktree"], input_text="\n".join(lines) + "\n")

        parent_args = ["-p", tip] if tip else []
        commit = self._git(["commit-tree", tree_sha, *parent_args, "-m", message], env=self._commit_env(repo))
        self._git(["update-ref", f"refs/heads/{self.branch}", commit])


def open_storage(config: dict[str, Any]) -> Storage:
    """Build the storage backend named by config['storage']."""
    kind = config.get("storage", "file")
    if kind == "git":
        return GitStorage(config.get("repo", "."), branch=config.get("branch", "monoboard"))
    if kind == "file":
        return FileStorage(config.get("data_dir", "~/.local/share/monoboard"))
    raise ValueError(f"Unknown storage backend '{kind}'")
