"""
Pytest configuration and fixtures
"""
import copy
import os
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

# Settings are read at import time
os.environ.setdefault("OPENAI_API_KEY", "test-key")
os.environ.setdefault("MONGO_URI", "mongodb://localhost:27017")
os.environ.setdefault("MONGO_DB", "language_coach_test")

from fastapi.testclient import TestClient

from app.api.deps import get_conversations, get_llm, get_messages, get_study_plans
from app.main import app


class FakeClock:
    """Stands in for the server clock behind $currentDate."""

    def __init__(self, start=None, step=timedelta(milliseconds=1)):
        self.now = start or datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def sort(self, key_or_list, direction=None):
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction)]
        for key, dir_ in reversed(keys):
            self.docs.sort(key=lambda d: d[key], reverse=dir_ == -1)
        return self

    def limit(self, n):
        if n:
            self.docs = self.docs[:n]
        return self

    async def to_list(self, length=None):
        return [copy.deepcopy(d) for d in self.docs[:length]]


class FakeCollection:
    """In-memory subset of the async pymongo collection API used by the repository."""

    def __init__(self, clock=None, fail_with=None):
        self.docs = []
        self.clock = clock or FakeClock()
        self.fail_with = fail_with
        self.writes = 0

    def _matches(self, doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def _check(self):
        if self.fail_with is not None:
            raise self.fail_with

    async def find_one(self, query):
        self._check()
        for doc in self.docs:
            if self._matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query):
        self._check()
        return FakeCursor([d for d in self.docs if self._matches(d, query)])

    async def update_one(self, query, update, upsert=False):
        self._check()
        self.writes += 1
        doc = next((d for d in self.docs if self._matches(d, query)), None)
        if doc is None:
            if not upsert:
                return SimpleNamespace(matched_count=0, upserted_id=None)
            doc = dict(query)
            self.docs.append(doc)
        for key, value in update.get("$set", {}).items():
            doc[key] = copy.deepcopy(value)
        for key, value in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + value
        if "$currentDate" in update:
            now = self.clock()
            for key in update["$currentDate"]:
                doc[key] = now
        return SimpleNamespace(matched_count=1, upserted_id=doc["_id"])


class FakeCompletionClient:
    """Scripted completion client: replies are consumed in order, exceptions are raised."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def complete(self, messages, max_tokens, temperature=None):
        self.calls.append({
            "messages": copy.deepcopy(messages),
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        reply = self.replies.pop(0) if self.replies else "OK"
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SimpleNamespace(
        study_plans=FakeCollection(clock),
        conversations=FakeCollection(clock),
        messages=FakeCollection(clock),
    )


@pytest.fixture
def llm():
    return FakeCompletionClient()


@pytest.fixture
def client(store, llm):
    app.dependency_overrides[get_llm] = lambda: llm
    app.dependency_overrides[get_study_plans] = lambda: store.study_plans
    app.dependency_overrides[get_conversations] = lambda: store.conversations
    app.dependency_overrides[get_messages] = lambda: store.messages
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
