"""Services for the clone command: a lister feeding a fixed pool of clone workers."""

from __future__ import annotations

import os
import queue
import sys
import threading
from collections.abc import Callable, Iterable

from ...core.constants import DIR_MODE, MAX_WORKERS, PER_PAGE
from ...core.git_client import GitClient
from ...core.github_client import GitHubClient, GitHubError
from ...core.types import CloneReport, CloneResult, Repository, RunState

CloneFn = Callable[[str, str, str], CloneResult]

_DONE = object()  # end-of-stream marker, one per worker


class CloneAborted(RuntimeError):
    def __init__(self, report: CloneReport) -> None:
        super().__init__(f"clone failed: {report.error}")
        self.report = report


def validate_workers(workers: int) -> int:
    if not 1 <= workers <= MAX_WORKERS:
        raise ValueError(f"workers must be between 1 and {MAX_WORKERS}, got {workers}")
    return workers


class WorkerPool:
    """N threads draining a bounded queue of repositories into a clone function.

    The first failed clone sets ``cancel``; from then on workers stop cloning
    and only drain what is left, recording it as aborted.
    """

    def __init__(
        self,
        workers: int,
        root: str,
        clone: CloneFn,
        report: CloneReport,
        cancel: threading.Event | None = None,
        maxsize: int = PER_PAGE,
    ) -> None:
        self.workers = validate_workers(workers)
        self.root = root
        self.clone = clone
        self.report = report
        self.cancel = cancel or threading.Event()
        self.queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._threads: list[threading.Thread] = []

    def start(self) -> None:
        for w in range(1, self.workers + 1):
            t = threading.Thread(target=self._work, name=f"clone-worker-{w}", daemon=True)
            t.start()
            self._threads.append(t)

    def submit(self, repo: Repository) -> None:
        self.queue.put(repo)

    def close(self) -> None:
        for _ in self._threads:
            self.queue.put(_DONE)

    def join(self) -> None:
        for t in self._threads:
            t.join()

    def _work(self) -> None:
        while True:
            repo = self.queue.get()
            if repo is _DONE:
                return
            if self.cancel.is_set():
                self.report.record_aborted(repo)
                continue
            try:
                result = self.clone(repo.name, repo.ssh_url, self.root)
            except Exception as e:
                result = CloneResult(ok=False, error=f"{e!r}")
            self.report.record(repo, result)
            if not result.ok:
                self.cancel.set()
                print(f"clone failed, giving up on everything now: {result.error}", file=sys.stderr)


def _feed(pool: WorkerPool, repos: Iterable[Repository]) -> None:
    for repo in repos:
        if pool.cancel.is_set():
            return
        pool.submit(repo)


def clone_org(
    org: str,
    dest: str,
    token: str,
    workers: int = 1,
    *,
    list_first: bool = False,
    client: GitHubClient | None = None,
    git: GitClient | None = None,
) -> CloneReport:
    """Clone every repository of org into dest using a pool of workers.

    Raises CloneAborted when a clone failed and GitHubError when listing failed.
    """
    report = CloneReport(state=RunState.validating)
    if not token:
        raise ValueError("a GitHub token is required")
    validate_workers(workers)
    os.makedirs(dest, mode=DIR_MODE, exist_ok=True)

    client = client or GitHubClient(token)
    git = git or GitClient()
    pool = WorkerPool(workers, dest, git.clone_shallow, report)

    report.state = RunState.running
    pool.start()
    print(f"Gently fetching list of all {org} repos... may take a minute")
    try:
        if list_first:
            repos = client.list_org_repos(org)
            print(f"Found {len(repos)} repositories. Cloning to '{dest}'...")
            _feed(pool, repos)
        else:
            _feed(pool, client.iter_org_repos(org))
    except GitHubError as e:
        report.error = str(e)
        pool.cancel.set()
        raise
    finally:
        pool.close()
        pool.join()
        report.state = RunState.aborted if pool.cancel.is_set() else RunState.done

    if report.state == RunState.aborted:
        raise CloneAborted(report)
    return report
