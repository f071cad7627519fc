from collections import namedtuple
from os import environ

from nstatsd.errors import ConfigurationError, InvalidStatError
from nstatsd.lib.wireFormatter import normalize_prefix, validate_stat

get = environ.get

TRUE_VALUES = ('true', '1', 'yes')
FALSE_VALUES = ('false', '0', 'no')


class StatsdConfig:
    """
    This class contains the statsd client configuration parameters.
    Values are kept raw; ClientConfig.from_settings coerces them.
    """
    host = get('NSTATSD_HOST', 'localhost')
    port = get('NSTATSD_PORT', '8125')
    enabled = get('NSTATSD_ENABLED', 'true')
    prefix = get('NSTATSD_PREFIX', '')


class ClientConfig(namedtuple('ClientConfig', 'host port prefix enabled')):
    """
    Typed and validated settings of a StatsClient.
    """
    __slots__ = ()

    def __new__(cls, host='localhost', port=8125, prefix='', enabled=True):
        if not isinstance(host, str) or not host.strip():
            raise ConfigurationError('host must be a non-empty string, got {!r}'.format(host))
        port = _parse_port(port)
        enabled = _parse_bool(enabled)
        return super(ClientConfig, cls).__new__(
            cls, host.strip(), port, _parse_prefix(prefix), enabled)

    @classmethod
    def from_settings(cls, settings=StatsdConfig):
        """
        Build a ClientConfig from a settings object exposing the host, port,
        prefix and enabled attributes, e.g. StatsdConfig.
        :raise ConfigurationError: on a missing or invalid setting
        """
        values = {}
        for name in cls._fields:
            try:
                values[name] = getattr(settings, name)
            except AttributeError:
                raise ConfigurationError('missing statsd setting: {}'.format(name))
        return cls(**values)


def _parse_port(value):
    if isinstance(value, bool):
        raise ConfigurationError('port must be an integer, got {!r}'.format(value))
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError('port must be an integer, got {!r}'.format(value))
    if not 1 <= port <= 65535:
        raise ConfigurationError('port out of range 1-65535: {}'.format(port))
    return port


def _parse_prefix(value):
    if not isinstance(value, str):
        raise ConfigurationError('prefix must be a string, got {!r}'.format(value))
    prefix = normalize_prefix(value)
    if prefix:
        try:
            validate_stat(prefix[:-1])
        except InvalidStatError as e:
            raise ConfigurationError('invalid prefix {!r}: {}'.format(value, e)) from e
    return prefix


def _parse_bool(value):
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ConfigurationError('enabled must be a boolean flag, got {!r}'.format(value))
