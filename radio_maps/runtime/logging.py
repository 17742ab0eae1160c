import sys
import logging


def reset_logging(level=logging.INFO):
    """
    Config the logger such that logging.info(...) works like print(...)
    """
    root_logger = logging.getLogger()

    # clear any existing handlers
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    # config logging to console as if calling print(...)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root_logger.addHandler(console_handler)

    # set logging level
    root_logger.setLevel(level)


def switch_log_file(log_file, level=logging.DEBUG):
    """Write records down to `level` into log_file, replacing any previous log file.

    The console keeps its own level, so debug records of the evaluator only reach the file.
    """
    root_logger = logging.getLogger()

    # remove all existing file handler
    for h in list(root_logger.handlers):
        if isinstance(h, logging.FileHandler):
            root_logger.removeHandler(h)
            h.close()

    # add its own file hander
    file_handler = logging.FileHandler(log_file, encoding='utf-8')
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter("%(name)s %(levelname)s %(message)s"))
    root_logger.addHandler(file_handler)

    if root_logger.getEffectiveLevel() > level:
        root_logger.setLevel(level)
    return file_handler
