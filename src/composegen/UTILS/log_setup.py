# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Logging configuration for the CLI.
"""
import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "composegen"


def setup_logging(verbose: bool = False, debug: bool = False) -> logging.Logger:
    """
    Configures the ``composegen`` logger to write to stderr.

    Log levels:
    - Normal: only warnings and errors
    - Verbose (-v): INFO, shows lookups, writes and merges
    - Debug (COMPOSEGEN_DEBUG=1): DEBUG, shows everything

    :param verbose: Enable INFO output.
    :param debug: Enable DEBUG output.
    :return: The configured logger.
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    # stdout stays free for generated output and JSON records
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose or debug,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers = [handler]
    logger.propagate = False
    return logger
