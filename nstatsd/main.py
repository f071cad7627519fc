import time

from nstatsd.lib.Statsd import StatsClientSingleton
from nstatsd.lib.logger import configure_logger


def run(logger):
    """
    Send one metric of each kind through the process wide client
    :param logger:
    """
    start = time.perf_counter()
    logger.info("Writing to StatsD")
    try:
        client = StatsClientSingleton()
        client.increment("test.increment")
        client.decrement("test.decrement")
        client.timing("test.increment", 1000.0 * (time.perf_counter() - start))
        client.gauge("test.gauge", 25)
    finally:
        StatsClientSingleton.close()
    logger.info("Done!")


def main():
    run(configure_logger(log_file=None))


if __name__ == "__main__":
    main()
