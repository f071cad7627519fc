import logging
from logging.handlers import RotatingFileHandler


def configure_logger(log_file='nstatsd.log'):
    """
    configure the nstatsd logger object with handlers
    """
    app_log = logging.getLogger("nstatsd")
    app_log.setLevel(logging.INFO)
    default_formatter = logging.Formatter('%(asctime)-15s %(levelname)s %(message)s')

    # console log
    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG)
    ch.formatter = default_formatter
    app_log.addHandler(ch)

    # File log (max 100MB: 100*2**20B)
    if log_file:
        file_handler = RotatingFileHandler(log_file,
                                           maxBytes=100*2**20, backupCount=10)
        file_handler.setLevel(logging.INFO)
        file_handler.formatter = default_formatter
        app_log.addHandler(file_handler)
    return app_log
