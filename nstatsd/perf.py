import sys
import time

from nstatsd.lib.Statsd import StatsClientSingleton
from nstatsd.lib.logger import configure_logger

DEFAULT_ITERATIONS = 100000


def run(logger, iterations=DEFAULT_ITERATIONS):
    """
    Send `iterations` increments as fast as possible and report the elapsed time
    :return: elapsed seconds
    """
    logger.info("Sending {} increments".format(iterations))
    client = StatsClientSingleton()
    start = time.perf_counter()
    try:
        for _ in range(iterations):
            client.increment("performancetest.increment")
    finally:
        StatsClientSingleton.close()
    elapsed = time.perf_counter() - start
    logger.info("Took {:.3f} seconds to complete, {} lost".format(elapsed, client.send_errors))
    return elapsed


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    iterations = int(argv[0]) if argv else DEFAULT_ITERATIONS
    run(configure_logger(log_file=None), iterations)


if __name__ == "__main__":
    main()
