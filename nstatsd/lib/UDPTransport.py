import logging
import socket
import threading

from nstatsd.errors import SendError, TransportClosedError, \
                           TransportConstructionError


class UDPTransport:
    """ Owns one outbound UDP socket towards the statsd collector.
        Each send is a single datagram: no acknowledgment, retry or queue.
    """

    def __init__(self, host, port):
        """
        Resolve the collector address once and open the socket.
        :param host: collector host name or IP address
        :param port: collector UDP port
        :raise TransportConstructionError: on resolution or socket failure
        """
        self.logger = logging.getLogger("nstatsd")
        self._lock = threading.Lock()
        self._closed = False
        try:
            family, socktype, proto, _, address = socket.getaddrinfo(
                host, port, 0, socket.SOCK_DGRAM)[0]
        except (OSError, UnicodeError) as e:
            raise TransportConstructionError(
                "cannot resolve statsd host {}:{}: {}".format(host, port, e)) from e
        try:
            self._sock = socket.socket(family, socktype, proto)
        except OSError as e:
            raise TransportConstructionError(
                "cannot create statsd socket for {}:{}: {}".format(host, port, e)) from e
        self._address = address
        self.logger.debug("statsd transport ready, host:{} port:{} address:{}"
                          .format(host, port, address))

    @property
    def address(self):
        return self._address

    @property
    def closed(self):
        return self._closed

    def send(self, data):
        """
        Send raw bytes as one datagram.
        :raise TransportClosedError: when the transport was closed
        :raise SendError: when the socket refuses the datagram
        """
        if self._closed:
            raise TransportClosedError("statsd transport is closed")
        try:
            self._sock.sendto(data, self._address)
        except OSError as e:
            # close() may have run between the check and the syscall
            if self._closed:
                raise TransportClosedError("statsd transport is closed") from e
            raise SendError("cannot send statsd datagram to {}: {}"
                            .format(self._address, e)) from e

    def close(self):
        """ Close the socket, only the first call has an effect
        """
        with self._lock:
            if self._closed:
                return False
            self._closed = True
        self._sock.close()
        self.logger.debug("statsd transport closed, address:{}".format(self._address))
        return True
