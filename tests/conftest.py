"""Shared test fixtures: an in-memory GitHub org listing and a fake git binary."""

import json
import os
import subprocess
import threading
import urllib.error
import urllib.request
from urllib.parse import parse_qs, urlencode, urlparse

import pytest


class FakeResponse:
    def __init__(self, body, link=None):
        self._body = json.dumps(body).encode("utf-8")
        self.headers = {"Link": link} if link else {}

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeGitHub:
    """Serves GET /orgs/<org>/repos pages, with Link headers, from a list of names."""

    def __init__(self, names, fail_on_page=None):
        self.names = list(names)
        self.fail_on_page = fail_on_page
        self.requests = []

    def __call__(self, req, timeout=None):
        url = req.full_url
        self.requests.append(req)
        parsed = urlparse(url)
        q = parse_qs(parsed.query)
        page, per_page = int(q["page"][0]), int(q["per_page"][0])
        if page == self.fail_on_page:
            raise urllib.error.HTTPError(url, 502, "Bad Gateway", hdrs=None, fp=None)

        start = (page - 1) * per_page
        body = [
            {"name": n, "ssh_url": f"git@github.com:acme/{n}.git", "fork": False}
            for n in self.names[start : start + per_page]
        ]
        link = None
        if start + per_page < len(self.names):
            nq = urlencode({"type": "all", "per_page": per_page, "page": page + 1})
            link = f'<{parsed.scheme}://{parsed.netloc}{parsed.path}?{nq}>; rel="next"'
        return FakeResponse(body, link)


class FakeGit:
    """Stands in for subprocess.check_call: records calls and creates the checkout dir."""

    def __init__(self, fail=()):
        self.fail = set(fail)
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, cmd, cwd=None, stderr=None):
        with self._lock:
            self.calls.append((list(cmd), cwd))
        name = cmd[-1].rsplit("/", 1)[-1].removesuffix(".git")
        if name in self.fail:
            raise subprocess.CalledProcessError(128, cmd)
        os.makedirs(os.path.join(cwd, name))
        return 0

    @property
    def cloned(self):
        return [cmd[-1].rsplit("/", 1)[-1].removesuffix(".git") for cmd, _ in self.calls]


def repo_names(n):
    return [f"repo-{i:03d}" for i in range(n)]


@pytest.fixture
def fake_github(monkeypatch):
    def install(names, fail_on_page=None):
        server = FakeGitHub(names, fail_on_page=fail_on_page)
        monkeypatch.setattr(urllib.request, "urlopen", server)
        return server

    return install


@pytest.fixture
def fake_git(monkeypatch):
    def install(fail=()):
        git = FakeGit(fail=fail)
        monkeypatch.setattr(subprocess, "check_call", git)
        return git

    return install
