"""Git implementation of the SCM provider.

Runs the ``git`` executable in the working directory. All operations return
Result types.

Usage:
    provider = GitScmProvider()
    provider.initialize(init)

    match provider.tag("core-1.0.0", "Release 1.0.0"):
        case Ok(_):
            print("tagged")
        case Err(e):
            print(f"tag failed: {e.message}")
"""

from __future__ import annotations

import re
import shlex
from collections.abc import Sequence
from pathlib import Path

from mrel.core.result import Err, Ok, Result
from mrel.output.console import ConsoleProtocol
from mrel.platform.process import ProcessError
from mrel.platform.process import run as run_process
from mrel.repository.http import basic_auth_header
from mrel.scm.initialization import ScmProviderInitialization
from mrel.scm.provider import ScmError, ScmStatus

__all__ = ["GitScmProvider"]

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0
_NETWORK_COMMANDS = frozenset({"clone", "fetch", "pull", "push"})


class GitScmProvider:
    """SCM provider backed by the git command line.

    Credential policy: an SSH key, when given, is passed via
    ``GIT_SSH_COMMAND`` and the password is ignored. Otherwise a username
    (and password or token) is sent as an HTTP basic ``Authorization`` header.
    Without either, git's own agent and credential helpers apply.
    """

    def __init__(self) -> None:
        self._init: ScmProviderInitialization | None = None
        self._env: dict[str, str] = {}
        self._config_flags: list[str] = []

    @property
    def working_directory(self) -> Path | None:
        return self._init.working_directory if self._init else None

    def initialize(self, initialization: ScmProviderInitialization) -> Result[None, ScmError]:
        if self._init is not None:
            return Err(
                ScmError(
                    kind="already_initialized",
                    command="initialize",
                    message="the provider was already initialized",
                )
            )

        self._init = initialization
        # Never block a release run on an interactive credential prompt.
        self._env = {"GIT_TERMINAL_PROMPT": "0"}

        if initialization.ssh_private_key is not None:
            key = str(Path(initialization.ssh_private_key).expanduser())
            self._env["GIT_SSH_COMMAND"] = f"ssh -i {shlex.quote(key)} -o IdentitiesOnly=yes"
            if initialization.ssh_private_key_passphrase is not None:
                self._warn(
                    "git cannot pass an SSH key passphrase to ssh; "
                    "load the key into an ssh-agent if it is encrypted"
                )
        elif initialization.username is not None:
            header = basic_auth_header(initialization.username, initialization.password)
            self._config_flags = ["-c", f"http.extraHeader=Authorization: {header}"]

        return Ok(None)

    def checkout(self, remote_url: str, branch: str | None = None) -> Result[None, ScmError]:
        """Clone into the working directory, or switch branch if already cloned."""
        init = self._init
        if init is None:
            return Err(_not_initialized("checkout"))

        workdir = init.working_directory
        if (workdir / ".git").exists():
            if branch is None:
                return Ok(None)
            return self._simple(init, ["checkout", branch], "checkout")

        workdir.parent.mkdir(parents=True, exist_ok=True)
        args = ["clone"]
        if branch is not None:
            args += ["--branch", branch]
        args += [remote_url, str(workdir)]
        result = self._git(init, args, cwd=workdir.parent)
        if isinstance(result, Err):
            return Err(_command_failed("clone", result.error))
        return Ok(None)

    def status(self) -> Result[ScmStatus, ScmError]:
        """Runs ``git status --porcelain=v1 -b`` and parses the output."""
        init = self._init
        if init is None:
            return Err(_not_initialized("status"))
        match self._git(init, ["status", "--porcelain=v1", "-b"]):
            case Err(e):
                return Err(_command_failed("status", e))
            case Ok(stdout):
                return Ok(_parse_status(stdout))

    def is_clean(self) -> bool:
        match self.status():
            case Ok(status):
                return status.is_clean
            case Err(_):
                return False

    def commit(self, message: str, paths: Sequence[str] = ()) -> Result[str, ScmError]:
        init = self._init
        if init is None:
            return Err(_not_initialized("commit"))

        if paths:
            added = self._git(init, ["add", "--", *paths])
            if isinstance(added, Err):
                return Err(_command_failed("add", added.error))
            committed = self._git(init, ["commit", "-m", message])
        else:
            committed = self._git(init, ["commit", "-a", "-m", message])
        if isinstance(committed, Err):
            return Err(_command_failed("commit", committed.error))

        match self._git(init, ["rev-parse", "HEAD"]):
            case Err(e):
                return Err(_command_failed("rev-parse", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def tag(self, name: str, message: str) -> Result[None, ScmError]:
        init = self._init
        if init is None:
            return Err(_not_initialized("tag"))
        if self.has_tag(name):
            return Err(ScmError(kind="tag_exists", command="tag", message=f"tag '{name}' already exists"))
        return self._simple(init, ["tag", "-a", name, "-m", message], "tag")

    def has_tag(self, name: str) -> bool:
        init = self._init
        if init is None:
            return False
        match self._git(init, ["tag", "--list", name]):
            case Ok(stdout):
                return name in stdout.split()
            case Err(_):
                return False

    def push(self, include_tags: bool = True) -> Result[None, ScmError]:
        init = self._init
        if init is None:
            return Err(_not_initialized("push"))
        args = ["push", "--follow-tags"] if include_tags else ["push"]
        return self._simple(init, args, "push")

    def _simple(self, init: ScmProviderInitialization, args: list[str], command: str) -> Result[None, ScmError]:
        result = self._git(init, args)
        if isinstance(result, Err):
            return Err(_command_failed(command, result.error))
        return Ok(None)

    def _git(
        self, init: ScmProviderInitialization, args: list[str], cwd: Path | None = None
    ) -> Result[str, ProcessError]:
        workdir = init.working_directory
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if args[0] in _NETWORK_COMMANDS else _GIT_TIMEOUT_SECONDS
        location = [] if args[0] == "clone" else ["-C", str(workdir)]
        self._debug(f"git {' '.join(args)}")
        return run_process(
            ["git", *self._config_flags, *location, *args],
            cwd=cwd or workdir,
            extra_env=self._env,
            timeout=timeout,
        )

    def _console(self) -> ConsoleProtocol | None:
        return self._init.console if self._init else None

    def _warn(self, message: str) -> None:
        console = self._console()
        if console is not None:
            console.warning(message)

    def _debug(self, message: str) -> None:
        console = self._console()
        if console is not None:
            console.debug(message)


def _not_initialized(command: str) -> ScmError:
    return ScmError(kind="not_initialized", command=command, message="initialize() was not called")


def _command_failed(command: str, error: ProcessError) -> ScmError:
    return ScmError(
        kind="command_failed",
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or f"git {command} failed",
    )


def _parse_status(output: str) -> ScmStatus:
    """Parse ``git status --porcelain=v1 -b`` output."""
    lines = [ln for ln in output.splitlines() if ln.strip()]
    if not lines:
        return ScmStatus(branch="")

    # First line is branch info: ## branch...upstream [ahead N, behind M]
    branch, upstream = _parse_branch_line(lines[0])
    ahead, behind = _parse_ahead_behind(lines[0])
    paths = tuple(line[3:] for line in lines[1:] if len(line) > 3)
    return ScmStatus(branch=branch, upstream=upstream, ahead=ahead, behind=behind, changed_paths=paths)


def _parse_branch_line(line: str) -> tuple[str, str | None]:
    s = line.strip()
    if s.startswith("##"):
        s = s[2:].lstrip()
    s = s.split(" [", 1)[0].strip()
    if s.startswith("HEAD (no branch)"):
        return ("", None)
    if "..." in s:
        left, right = s.split("...", 1)
        return (left.strip(), right.strip())
    return (s, None)


def _parse_ahead_behind(line: str) -> tuple[int, int]:
    match = re.search(r"\[([^\]]+)\]", line)
    if not match:
        return (0, 0)
    inside = match.group(1)
    ahead_match = re.search(r"ahead\s+(\d+)", inside)
    behind_match = re.search(r"behind\s+(\d+)", inside)
    return (
        int(ahead_match.group(1)) if ahead_match else 0,
        int(behind_match.group(1)) if behind_match else 0,
    )
