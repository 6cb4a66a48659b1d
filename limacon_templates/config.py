import sys
import logging
import numpy as np

__all__ = ["lt_dtype", "lt_logger", "set_logging_output"]

lt_dtype = np.float64

lt_logger = logging.getLogger("limacon_templates")
lt_logger.setLevel(logging.INFO)
# own handlers below; do not repeat messages through the root logger
lt_logger.propagate = False
out_handler = logging.StreamHandler(sys.stdout)
out_handler.setLevel(logging.INFO)
out_handler.setFormatter(logging.Formatter("%(message)s"))
lt_logger.addHandler(out_handler)


def set_logging_output(stdout=True, filename=None, **kwargs):
    """
    Change where limacon_templates log messages go.
    All stream and file handlers currently attached to ``lt_logger`` are
    removed, then new handlers are added based on the arguments.

    Parameters:
        stdout (bool): If True, log messages are printed to standard output. Default is True.
        filename (str): If given, log messages are also written to this file. Default is None.
        stdout_level (int): Logging level for stdout. Default is logging.INFO.
        stdout_formatter (logging.Formatter): Formatter for stdout. Default is logging.Formatter('%(message)s').
        filename_level (int): Logging level for the log file. Default is logging.INFO.
        filename_formatter (logging.Formatter): Formatter for the log file.
                        Default is logging.Formatter('%(asctime)s:%(levelname)s: %(message)s').
        level (int): Level of the logger itself. Default leaves it unchanged.
    """
    hi = 0
    while hi < len(lt_logger.handlers):
        if isinstance(lt_logger.handlers[hi], logging.StreamHandler):
            # FileHandler is a StreamHandler too
            lt_logger.removeHandler(lt_logger.handlers[hi])
        else:
            hi += 1

    if "level" in kwargs:
        lt_logger.setLevel(kwargs["level"])

    if stdout:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(kwargs.get("stdout_level", logging.INFO))
        handler.setFormatter(
            kwargs.get("stdout_formatter", logging.Formatter("%(message)s"))
        )
        lt_logger.addHandler(handler)
        lt_logger.debug("logging now going to stdout")
    if filename is not None:
        handler = logging.FileHandler(filename)
        handler.setLevel(kwargs.get("filename_level", logging.INFO))
        handler.setFormatter(
            kwargs.get(
                "filename_formatter",
                logging.Formatter("%(asctime)s:%(levelname)s: %(message)s"),
            )
        )
        lt_logger.addHandler(handler)
        lt_logger.debug("logging now going to %s" % filename)
