import math
import numbers
import re
from collections import namedtuple
from enum import Enum

from nstatsd.errors import InvalidStatError, InvalidValueError

RESERVED_CHARACTERS = re.compile(r'[:|@\r\n]')


class MetricKind(Enum):
    COUNTER = 'c'
    GAUGE = 'g'
    TIMING = 'ms'


MetricSample = namedtuple('MetricSample', 'name kind value sample_rate')
MetricSample.__new__.__defaults__ = (1,)


def normalize_prefix(prefix):
    """ Make a non-empty prefix end with the "." separator
        "app" -> "app.", "app." -> "app.", "" -> ""
    """
    if prefix is None or not prefix.strip():
        return ''
    if prefix.endswith('.'):
        return prefix
    return '{}.'.format(prefix)


def validate_stat(stat):
    """
    Reject stat names the collector would mis-parse.
    :param stat: metric name, without prefix
    :raise InvalidStatError: empty name, leading or trailing dot, protocol
        reserved character (":", "|", "@", newline) or non ASCII character
    """
    if not isinstance(stat, str) or not stat:
        raise InvalidStatError('stat name must be a non-empty string, got {!r}'.format(stat))
    if stat.startswith('.') or stat.endswith('.'):
        raise InvalidStatError('stat name cannot start or end with a dot: {!r}'.format(stat))
    if RESERVED_CHARACTERS.search(stat):
        raise InvalidStatError('stat name contains a reserved character: {!r}'.format(stat))
    try:
        stat.encode('ascii')
    except UnicodeEncodeError:
        raise InvalidStatError('stat name is not ASCII: {!r}'.format(stat))
    return stat


def format_line(prefix, stat, value, kind, sample_rate=1):
    """ Build one StatsD line: <prefix><stat>:<value>|<type>[|@<rate>]
        The rate tag is only written for rates strictly below 1.
    """
    line = '{}{}:{}|{}'.format(prefix, stat, value, kind.value)
    if sample_rate < 1:
        line = '{}|@{}'.format(line, sample_rate)
    return line


def format_sample(prefix, sample):
    return format_line(prefix, sample.name, sample.value, sample.kind, sample.sample_rate)


def format_lines(prefix, stats, value, kind, sample_rate=1):
    """ Format the same value for several stats, one line per stat.
        Lines are never joined: each one is sent as its own datagram.
    """
    return [format_line(prefix, stat, value, kind, sample_rate) for stat in stats]


def coerce_value(kind, value):
    """
    Check a metric value against its kind.
    Counters and gauges take integers; timings take non-negative
    milliseconds, rounded to the nearest integer.
    :raise InvalidValueError: on a value the kind does not accept
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidValueError('{} value must be a number, got {!r}'.format(kind.name.lower(), value))
    if not math.isfinite(value):
        raise InvalidValueError('{} value must be finite, got {!r}'.format(kind.name.lower(), value))
    if kind is MetricKind.TIMING:
        if value < 0:
            raise InvalidValueError('timing cannot be negative: {!r}'.format(value))
        return int(round(value))
    if not isinstance(value, numbers.Integral):
        raise InvalidValueError('{} value must be an integer, got {!r}'.format(kind.name.lower(), value))
    return int(value)


def encode_line(line):
    try:
        return line.encode('ascii')
    except UnicodeEncodeError:
        raise InvalidStatError('statsd line is not ASCII: {!r}'.format(line))
