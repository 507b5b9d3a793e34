class Job:
    """A recurring callback registered with a Scheduler.

    Interval jobs are called with no arguments once per interval crossed.
    Frame jobs (interval None) are called every advance with the elapsed ms.
    """
    def __init__(self, interval_ms, callback, name=None):
        if interval_ms is not None and interval_ms <= 0:
            raise ValueError("interval must be positive")
        self.interval_ms = interval_ms
        self.callback = callback
        self.name = name or getattr(callback, "__name__", "job")
        self.elapsed = 0.0
        self.cancelled = False

    @property
    def per_frame(self):
        return self.interval_ms is None


class Scheduler:
    """Cooperative timer wheel driven by elapsed milliseconds.

    Whoever owns the frame loop calls `advance(dt_ms)`; due jobs run in
    registration order. Nothing here is threaded.
    """
    def __init__(self):
        self.jobs = []

    def every(self, interval_ms, callback, name=None) -> Job:
        job = Job(interval_ms, callback, name)
        self.jobs.append(job)
        return job

    def every_frame(self, callback, name=None) -> Job:
        return self.every(None, callback, name)

    def cancel(self, job):
        if job is None:
            return
        job.cancelled = True
        if job in self.jobs:
            self.jobs.remove(job)

    def advance(self, dt_ms):
        for job in list(self.jobs):
            if job.cancelled:
                continue
            if job.per_frame:
                job.callback(dt_ms)
                continue
            job.elapsed += dt_ms
            while job.elapsed >= job.interval_ms and not job.cancelled:
                job.elapsed -= job.interval_ms
                job.callback()
