"""Shared test fixtures."""

import pytest


class FakeScheduler:
    """Records add_job calls; jobs only run when run_pending() is called."""

    def __init__(self):
        self.jobs = []
        self.running = False

    def add_job(self, func, trigger=None, args=None, **kwargs):
        self.jobs.append((func, trigger, list(args or []), kwargs))

    def pending(self):
        return [job for job in self.jobs if job[1] is None]

    def run_pending(self):
        jobs = self.pending()
        self.jobs = [job for job in self.jobs if job[1] is not None]
        for func, _, args, _ in jobs:
            func(*args)

    def start(self):
        self.running = True

    def shutdown(self, wait=True):
        self.running = False


@pytest.fixture
def scheduler():
    return FakeScheduler()
