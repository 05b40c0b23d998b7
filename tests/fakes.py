from weekplanner.core.exceptions import SaveFailure


class FakeScheduler:
    """Manual clock with tkinter's after/after_cancel interface."""

    def __init__(self):
        self.now_ms = 0
        self._next_id = 0
        self.jobs = {}

    def after(self, ms, func):
        self._next_id += 1
        job_id = f"after#{self._next_id}"
        self.jobs[job_id] = (self.now_ms + ms, func)
        return job_id

    def after_cancel(self, job_id):
        self.jobs.pop(job_id, None)

    def advance(self, ms):
        target = self.now_ms + ms
        while True:
            due = [(when, job_id) for job_id, (when, _) in self.jobs.items() if when <= target]
            if not due:
                break
            when, job_id = min(due)
            self.now_ms = when
            _, func = self.jobs.pop(job_id)
            func()
        self.now_ms = target


class FakeClient:
    """In-memory remote that stores whatever it is sent."""

    def __init__(self, scheduler=None, stored=None, load_error=None):
        self.scheduler = scheduler
        self.stored = stored
        self.load_error = load_error
        self.save_error = None
        self.saves = []  # (time_ms, snapshot)
        self.load_calls = 0

    def load(self):
        self.load_calls += 1
        if self.load_error is not None:
            raise self.load_error
        return self.stored.copy() if self.stored is not None else None

    def save(self, snapshot):
        if self.save_error is not None:
            raise self.save_error
        when = self.scheduler.now_ms if self.scheduler is not None else None
        self.saves.append((when, snapshot))
        self.stored = snapshot.copy()


def failing_save():
    return SaveFailure("Save request failed: connection refused")
