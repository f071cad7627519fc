import tornado.ioloop
from tornado.concurrent import Future, future_set_exception_unless_cancelled, \
                               future_set_result_unless_cancelled

from nstatsd.lib.Statsd import StatsClientSingleton


class AsyncStatsClient:
    """ IOLoop facade over a StatsClient.
        Each operation schedules the send as an IOLoop callback and returns a
        Future resolved with True when a datagram was sent, False when it was
        sampled out or the client is disabled.
    """

    def __init__(self, client=None, ioloop=None):
        self.client = client if client is not None else StatsClientSingleton()
        self.ioloop = ioloop if ioloop is not None else tornado.ioloop.IOLoop.current()

    def increment(self, stat, sample_rate=1):
        return self._dispatch(self.client.increment, stat, sample_rate=sample_rate)

    def decrement(self, stat, sample_rate=1):
        return self._dispatch(self.client.decrement, stat, sample_rate=sample_rate)

    def update_stats(self, stat, delta=1, sample_rate=1):
        return self._dispatch(self.client.update_stats, stat, delta, sample_rate=sample_rate)

    def gauge(self, stat, value, sample_rate=1):
        return self._dispatch(self.client.gauge, stat, value, sample_rate=sample_rate)

    def timing(self, stat, duration_ms, sample_rate=1):
        return self._dispatch(self.client.timing, stat, duration_ms, sample_rate=sample_rate)

    def _dispatch(self, method, *args, **kwargs):
        future = Future()

        def on_sent(sent):
            future_set_result_unless_cancelled(future, sent)

        def run():
            try:
                method(*args, callback=on_sent, **kwargs)
            except Exception as e:
                future_set_exception_unless_cancelled(future, e)

        self.ioloop.add_callback(run)
        return future
