# Make logger
import logging
import os
import threading
import time

from absl import logging as absl_logging
from rich.console import Console

PID = os.getpid()

"""
Clone ABSL log prefix so conversion logs carry the pid and thread and are coloured with rich
"""
def get_initial_for_level(level):
    """Gets the initial that should start the log line for the given level.

    It returns:
    - 'D' when: level < STANDARD_INFO.
    - 'I' when: STANDARD_INFO <= level < STANDARD_WARNING.
    - 'W' when: STANDARD_WARNING <= level < STANDARD_ERROR.
    - 'E' when: STANDARD_ERROR <= level < STANDARD_CRITICAL.
    - 'F' when: level >= STANDARD_CRITICAL.

    Args:
      level: int, a Python standard logging level.

    Returns:
      The first initial as it would be logged by the C++ logging module.
    """
    if level < absl_logging.converter.STANDARD_INFO:
        return 'D'
    if level < absl_logging.converter.STANDARD_WARNING:
        return 'I'
    elif level < absl_logging.converter.STANDARD_ERROR:
        return 'W'
    elif level < absl_logging.converter.STANDARD_CRITICAL:
        return 'E'
    else:
        return 'F'


def get_log_prefix(record):
    """Returns the rich-markup log prefix for the log record.

    Args:
      record: logging.LogRecord, the record to get prefix for.
    """
    created_tuple = time.localtime(record.created)
    created_microsecond = int(record.created % 1.0 * 1e6)

    severity = get_initial_for_level(record.levelno)
    sev_colours = {"I": "white", "D": "green"}
    sev_colour = sev_colours.get(severity, "not dim red")

    return '[dim]\\[[%s bold]%c[/%s bold] %04d-%02d-%02d [white]%02d:%02d:%02d.%06d[/white] [yellow]%d[/yellow] [bright_magenta italic]%s %s[/bright_magenta italic]:%d][/dim] ' % (
        sev_colour,
        severity,
        sev_colour,
        created_tuple.tm_year,
        created_tuple.tm_mon,
        created_tuple.tm_mday,
        created_tuple.tm_hour,
        created_tuple.tm_min,
        created_tuple.tm_sec,
        created_microsecond,
        PID,
        threading.current_thread().name,
        record.filename,
        record.lineno)

console = Console(color_system="windows", force_interactive=True, width=10_000)

class LogFormatter(logging.Formatter):
    """
    Log formatter, we use rich to colour the prefix. Neither the prefix nor the message
    are run through rich's highlighter so the text stays greppable
    """
    def format(self, record: logging.LogRecord) -> str:
        prefix = get_log_prefix(record)
        log = super(LogFormatter, self).format(record)
        with console.capture() as capture:
            console.print(prefix, end="", markup=True, highlight=False)
            # The message itself is printed verbatim, brackets in it are not markup
            console.print(log, end="", markup=False, highlight=False)
        return capture.get()


formatter = LogFormatter()
logger = absl_logging.get_absl_logger()


def install_formatter(debug: bool = False):
    """
    Route absl logs through the rich formatter, only applications (the cli) call this
    so importing the library never touches the root handlers
    """
    absl_logging.use_absl_handler()
    absl_logging.get_absl_handler().setFormatter(formatter)
    if debug:
        absl_logging.set_verbosity(absl_logging.DEBUG)
    return logger


def build_logger(*args, **kwargs):
    return logger
