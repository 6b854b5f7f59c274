# Tinct project, MIT license.
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Tinct: styled text for terminals.

Tinct turns styled strings, bracket markup and ANSI-coded input into
width-bounded, color-correct terminal output. The building blocks are:

- :mod:`tinct.color` and :mod:`tinct.style` describe how text looks;
- :mod:`tinct.text` holds text with styled spans and lays it out;
- :mod:`tinct.segment` is the final stream of styled pieces;
- :mod:`tinct.markup` and :mod:`tinct.ansi` turn strings into :class:`~tinct.text.Text`;
- :mod:`tinct.render` ties it all together.

Quick example::

    >>> import tinct.render
    >>> options = tinct.render.RenderOptions(width=20, color_system=None)
    >>> segments = tinct.render.render("[bold]Hello[/bold], world!", options)
    >>> "".join(segment.text for segment in segments)
    'Hello, world!\\n'


Placeholders
------------

.. autodata:: MISSING


Warnings and logging
--------------------

.. autoclass:: TinctWarning

.. autofunction:: enable_internal_logging

"""

from __future__ import annotations

import enum as _enum
import logging as _logging
import os as _os
import sys as _sys
import warnings

from tinct import _typing as _t
from tinct._version import __version__, __version_tuple__

__all__ = [
    "MISSING",
    "Missing",
    "TinctWarning",
    "enable_internal_logging",
]


class _Placeholders(_enum.Enum):
    MISSING = "<missing>"

    def __bool__(self) -> _t.Literal[False]:
        return False  # pragma: no cover

    def __repr__(self):
        return f"tinct.{self.name}"  # pragma: no cover

    def __str__(self) -> str:
        return self.value  # pragma: no cover


Missing: _t.TypeAlias = _t.Literal[_Placeholders.MISSING]
"""
Type of the :data:`MISSING` placeholder.

"""

MISSING: Missing = _Placeholders.MISSING
"""
Indicates that some value is missing.

"""


class TinctWarning(RuntimeWarning):
    """
    Base class for all runtime warnings.

    """


_logger = _logging.getLogger("tinct.internal")
_logger.propagate = False

__stderr_handler = _logging.StreamHandler(_sys.__stderr__)
__stderr_handler.setLevel("CRITICAL")
_logger.addHandler(__stderr_handler)


def enable_internal_logging(
    path: str | None = None, level: str | int | None = None, propagate=None
):  # pragma: no cover
    """
    Enable Tinct's internal logging.

    This function enables :func:`logging.captureWarnings`, and enables printing
    of :class:`TinctWarning` messages, and sets up logging channels ``tinct.internal``
    and ``py.warning``.

    :param path:
        if given, adds handlers that output internal log messages to the given file.
    :param level:
        configures logging level for file handler. Default is ``DEBUG``.
    :param propagate:
        if given, enables or disables log message propagation from ``tinct.internal``
        and ``py.warning`` to the root logger.

    """

    if path:
        if level is None:
            level = _os.environ.get("TINCT_DEBUG", "").strip().upper() or "DEBUG"
        if level in ["1", "Y", "YES", "TRUE"]:
            level = "DEBUG"
        file_handler = _logging.FileHandler(path, delay=True)
        file_handler.setFormatter(
            _logging.Formatter("%(filename)s:%(lineno)d: %(levelname)s: %(message)s")
        )
        file_handler.setLevel(level)
        _logger.setLevel(level)
        _logger.addHandler(file_handler)
        _logging.getLogger("py.warnings").addHandler(file_handler)

    _logging.captureWarnings(True)
    warnings.simplefilter("default", category=TinctWarning)

    if propagate is not None:
        _logging.getLogger("py.warnings").propagate = propagate
        _logger.propagate = propagate


_debug = "TINCT_DEBUG" in _os.environ or "TINCT_DEBUG_FILE" in _os.environ
if _debug:  # pragma: no cover
    enable_internal_logging(
        path=_os.environ.get("TINCT_DEBUG_FILE") or "tinct.log", propagate=False
    )
else:
    warnings.simplefilter("ignore", category=TinctWarning, append=True)
