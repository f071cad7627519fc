import itertools
import random
import threading
import time

from nstatsd.errors import InvalidSampleRateError

_seed_base = time.time_ns()
_seed_counter = itertools.count(1)
_seed_lock = threading.Lock()


def next_seed():
    """ Unique seed for a new generator: process start time plus a counter,
        so generators created at the same instant still differ
    """
    with _seed_lock:
        return _seed_base + next(_seed_counter)


class Sampler:
    """ Decides whether a sampled metric is sent.
        Every thread draws from its own generator: there is no shared random
        state and no lock on the send path.
    """

    def __init__(self, random_factory=random.Random):
        self._random_factory = random_factory
        self._local = threading.local()

    def should_send(self, sample_rate):
        if sample_rate >= 1:
            return True
        if sample_rate <= 0:
            raise InvalidSampleRateError(
                'sample rate must be in (0, 1], got {!r}'.format(sample_rate))
        return self._generator().random() <= sample_rate

    def _generator(self):
        rng = getattr(self._local, 'rng', None)
        if rng is None:
            rng = self._local.rng = self._random_factory(next_seed())
        return rng
