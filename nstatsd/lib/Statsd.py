import logging
import threading
from enum import Enum

from nstatsd.config import ClientConfig, StatsdConfig
from nstatsd.errors import ClientDisposedError, SendError
from nstatsd.lib.sampler import Sampler
from nstatsd.lib.timer import Timer
from nstatsd.lib.UDPTransport import UDPTransport
from nstatsd.lib.wireFormatter import MetricKind, coerce_value, encode_line, \
                                      format_lines, validate_stat


class ClientState(Enum):
    READY = 'ready'
    DISPOSED = 'disposed'


class StatsClient:
    """ Sends counters, gauges and timings to a statsd collector over UDP.

        Every operation is fire-and-forget and safe to call from several
        threads. A disabled client is a silent no-op. A disposed client
        raises ClientDisposedError on every send.
    """

    def __init__(self, config=None, transport=None, sampler=None, strict=False):
        """
        :param config: ClientConfig, read from StatsdConfig when omitted
        :param transport: object exposing send(bytes) and close(), a
            UDPTransport towards config.host:config.port when omitted
        :param sampler: Sampler deciding which sampled metrics are sent
        :param strict: propagate SendError instead of logging it
        :raise ConfigurationError: invalid settings
        :raise TransportConstructionError: unresolvable host or socket failure
        """
        self.logger = logging.getLogger("nstatsd")
        self.config = config if config is not None else ClientConfig.from_settings(StatsdConfig)
        self.strict = strict
        self.sampler = sampler if sampler is not None else Sampler()
        self.send_errors = 0
        self._lock = threading.Lock()
        if transport is None and self.config.enabled:
            transport = UDPTransport(self.config.host, self.config.port)
        self._transport = transport
        self._state = ClientState.READY
        self.logger.debug("statsd client ready, host:{} port:{} prefix:{} enabled:{}"
                          .format(self.config.host, self.config.port,
                                  self.config.prefix, self.config.enabled))

    @property
    def state(self):
        return self._state

    @property
    def disposed(self):
        return self._state is ClientState.DISPOSED

    def increment(self, stat, sample_rate=1, callback=None):
        """
        Increment a counter by one.
        :param stat: name of the counter
        :param sample_rate: probability of sending, 1 sends every value
        :param callback: called with True once a datagram is sent, False otherwise
        """
        self.update_stats(stat, 1, sample_rate, callback)

    def decrement(self, stat, sample_rate=1, callback=None):
        """
        Decrement a counter by one.
        """
        self.update_stats(stat, -1, sample_rate, callback)

    def update_stats(self, stat, delta=1, sample_rate=1, callback=None):
        """
        Update one or several counters by an arbitrary amount.
        :param stat: name of the counter, or a list of names (one datagram each)
        :param delta: amount added to the counter, may be negative
        """
        self._send(stat, delta, MetricKind.COUNTER, sample_rate, callback)

    def gauge(self, stat, value, sample_rate=1, callback=None):
        """
        Set a gauge to an absolute value.
        """
        self._send(stat, value, MetricKind.GAUGE, sample_rate, callback)

    def timing(self, stat, duration_ms, sample_rate=1, callback=None):
        """
        Send a timing, in milliseconds.
        """
        self._send(stat, duration_ms, MetricKind.TIMING, sample_rate, callback)

    def timer(self, stat, sample_rate=1):
        """
        Context manager or decorator timing a block with this client.
        """
        return Timer(self, stat, sample_rate)

    def close(self):
        """
        Release the socket. Only the first call has an effect.
        :return: True if this call disposed the client
        """
        with self._lock:
            if self._state is ClientState.DISPOSED:
                return False
            self._state = ClientState.DISPOSED
        if self._transport is not None:
            self._transport.close()
        self.logger.debug("statsd client disposed, host:{} port:{}"
                          .format(self.config.host, self.config.port))
        return True

    dispose = close

    def __enter__(self):
        return self

    def __exit__(self, *args, **kwargs):
        self.close()

    def _send(self, stats, value, kind, sample_rate, callback):
        if self._state is ClientState.DISPOSED:
            raise ClientDisposedError("statsd client is disposed")
        if not self.config.enabled:
            return _notify(callback, False)

        stats = (stats,) if isinstance(stats, str) else tuple(stats)
        for stat in stats:
            validate_stat(stat)
        value = coerce_value(kind, value)

        if not self.sampler.should_send(sample_rate):
            return _notify(callback, False)

        sent = False
        for line in format_lines(self.config.prefix, stats, value, kind, sample_rate):
            try:
                self._transport.send(encode_line(line))
                sent = True
            except SendError as e:
                if self._state is ClientState.DISPOSED:
                    raise ClientDisposedError("statsd client is disposed") from e
                if self.strict:
                    raise
                with self._lock:
                    self.send_errors += 1
                self.logger.warning("statsd metric lost, line:{} error:{}".format(line, e))
        _notify(callback, sent)


def _notify(callback, sent):
    if callback is not None:
        callback(sent)


class StatsClientSingleton:
    """ Process wide StatsClient built from StatsdConfig on first access.
        A failed construction is not cached: the next access retries.
    """
    __instance = None
    __lock = threading.Lock()

    def __new__(cls):
        instance = StatsClientSingleton.__instance
        if instance is None:
            with StatsClientSingleton.__lock:
                if StatsClientSingleton.__instance is None:
                    try:
                        StatsClientSingleton.__instance = StatsClient(
                            ClientConfig.from_settings(StatsdConfig))
                    except Exception as e:
                        logging.getLogger("nstatsd").error(
                            "statsd client construction failed: {}".format(e))
                        raise
                instance = StatsClientSingleton.__instance
        return instance

    @classmethod
    def close(cls):
        """
        Dispose the process wide client; the next access builds a new one
        from the current StatsdConfig.
        """
        with StatsClientSingleton.__lock:
            instance = StatsClientSingleton.__instance
            StatsClientSingleton.__instance = None
        if instance is not None:
            instance.close()
        return instance is not None
