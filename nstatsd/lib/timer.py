import functools
import time


class Timer:
    """
    Context manager and decorator reporting the duration of a block, in
    milliseconds, as a statsd timing.
    """

    def __init__(self, client, stat, sample_rate=1):
        """
        :param client: StatsClient receiving the timing
        :param stat: name of the timing stat
        :param sample_rate: forwarded to StatsClient.timing
        """
        self.client = client
        self.stat = stat
        self.sample_rate = sample_rate
        self.duration_ms = None
        self._start = None

    def __enter__(self):
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args, **kwargs):
        self.duration_ms = 1000.0 * (time.perf_counter() - self._start)
        self.client.timing(self.stat, self.duration_ms, self.sample_rate)

    def __call__(self, f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            with Timer(self.client, self.stat, self.sample_rate):
                return f(*args, **kwargs)
        return wrapper
