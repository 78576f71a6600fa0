"""Shared fakes: a recording git runner and a canned urlopen."""

import io
import json
import urllib.error

import pytest

from autocommit.git import GitError, GitRunner


class FakeRunner(GitRunner):
    """Records git calls; answers from a dict keyed by the first argument."""

    def __init__(self, outputs=None, fail_on=()):
        self.outputs = outputs or {}
        self.fail_on = set(fail_on)
        self.calls = []

    def run(self, *args):
        self.calls.append(args)
        if args[0] in self.fail_on:
            raise GitError(f"Git command failed: git {' '.join(args)}\nfatal: boom")
        return self.outputs.get(args[0], "")

    @property
    def commands(self):
        return [c[0] for c in self.calls]


class FakeResponse:
    def __init__(self, status, body, read_exc=None):
        self.status = status
        self._body = body
        self._read_exc = read_exc
        self.closed = False

    def read(self):
        if self._read_exc is not None:
            raise self._read_exc
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.closed = True


class FakeOpener:
    """Stands in for urllib.request.urlopen."""

    def __init__(self, status=200, body=b"", exc=None, read_exc=None):
        self.status = status
        self.body = body
        self.exc = exc
        self.read_exc = read_exc
        self.requests = []
        self.responses = []
        self.error_bodies = []

    def __call__(self, req):
        self.requests.append(req)
        if self.exc is not None:
            raise self.exc
        if self.status >= 400:
            error_body = io.BytesIO(self.body)
            self.error_bodies.append(error_body)
            raise urllib.error.HTTPError(req.full_url, self.status, "error", {}, error_body)
        response = FakeResponse(self.status, self.body, self.read_exc)
        self.responses.append(response)
        return response

    @property
    def sent_body(self):
        return json.loads(self.requests[-1].data.decode('utf-8'))


def envelope(content):
    """Chat-completions response whose first choice carries content."""
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]}).encode('utf-8')


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_opener():
    return FakeOpener


@pytest.fixture
def make_envelope():
    return envelope
