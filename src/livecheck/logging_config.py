"""Where the suite's report lines go.

Every ``[TEST n]`` line and the HTTP request report are INFO records on
``livecheck.*`` loggers. ``setup_logging()`` sends them to:

* a per-run DEBUG file, ``{report_dir}/logs/run-<timestamp>.log`` (CLI and
  e2e runs alike);
* a console stream in ``REPORT_FORMAT`` (CLI runs only). Under pytest the
  console side belongs to pytest's ``log_cli`` handler, configured with the
  same format in pyproject.toml, so the e2e session passes ``console=False``.

Only handlers installed here are ever removed, so pytest's capture
handlers on the root logger survive a call.
"""

import logging
from datetime import datetime
from pathlib import Path

REPORT_FORMAT = "%(asctime)s %(message)s"
REPORT_DATEFMT = "%H:%M:%S"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"

NOISY_LOGGERS = ("nodriver", "uc", "websockets")

_OWNER_ATTR = "_livecheck_handler"


def _own(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _OWNER_ATTR, True)
    return handler


def teardown_logging() -> None:
    """Detach and close every handler ``setup_logging()`` installed."""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if getattr(h, _OWNER_ATTR, False)]:
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    report_dir: str = "reports",
    console_level: int = logging.INFO,
    console: bool = True,
) -> Path:
    """Attach the run log (and optionally a console stream) to the root logger.

    Safe to call repeatedly: handlers from a previous call are replaced,
    anything else on the root logger is left alone.

    Args:
        report_dir: Base report directory. ``logs/`` is created inside it.
        console_level: Minimum level for console output.
        console: Add a console handler. False when pytest owns the console.

    Returns:
        Path to the newly created log file.
    """
    teardown_logging()

    log_dir = Path(report_dir) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"run-{datetime.now():%Y-%m-%d-%H%M%S}.log"

    root = logging.getLogger()
    if console:
        stream = _own(logging.StreamHandler())
        stream.setLevel(console_level)
        stream.setFormatter(logging.Formatter(REPORT_FORMAT, datefmt=REPORT_DATEFMT))
        root.addHandler(stream)
        if root.level == logging.NOTSET or root.level > console_level:
            root.setLevel(console_level)

    file_handler = _own(logging.FileHandler(str(log_file), encoding="utf-8"))
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    root.addHandler(file_handler)

    # Our records reach the file at DEBUG whatever the root level is.
    logging.getLogger("livecheck").setLevel(logging.DEBUG)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return log_file
