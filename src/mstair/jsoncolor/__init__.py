"""
package: mstair.jsoncolor
"""

# <AUTOGEN_INIT>
from mstair.jsoncolor import (
    api,
    cli,
    config,
    exceptions,
    formatter,
    logging_utils,
    model,
    sink,
    styles,
    terminal,
)


__all__ = [
    "api",
    "cli",
    "config",
    "exceptions",
    "formatter",
    "logging_utils",
    "model",
    "sink",
    "styles",
    "terminal",
]
# </AUTOGEN_INIT>

__version__ = "0.1.0"
