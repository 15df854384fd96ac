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
Runtime settings read from the environment and an optional .env file.
"""
import os
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel

DEFAULT_OUTPUT = "docker-compose.yml"
DEFAULT_FORMAT_VERSION = "3.8"


class Settings(BaseModel):
    """
    Settings for a composegen invocation.
    """
    output: str = DEFAULT_OUTPUT
    format_version: str = DEFAULT_FORMAT_VERSION
    no_color: bool = False
    debug: bool = False


def load_settings(env_file: Optional[str] = None,
                  environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Loads settings from the process environment.

    A ``.env`` file (the given one, or the nearest one from the working
    directory upwards) is loaded first; variables already set in the
    environment take precedence over it.

    Recognized variables: ``COMPOSEGEN_OUTPUT``, ``COMPOSEGEN_FORMAT_VERSION``,
    ``NO_COLOR`` and ``COMPOSEGEN_DEBUG``.

    :param env_file: Explicit path to a .env file.
    :param environ: Environment to read instead of ``os.environ``.
    :return: The settings.
    """
    if environ is None:
        dotenv_path = env_file or find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path, override=False)
        environ = os.environ

    return Settings(
        output=environ.get("COMPOSEGEN_OUTPUT") or DEFAULT_OUTPUT,
        format_version=environ.get("COMPOSEGEN_FORMAT_VERSION") or DEFAULT_FORMAT_VERSION,
        no_color=bool(environ.get("NO_COLOR")),
        debug=bool(environ.get("COMPOSEGEN_DEBUG")),
    )
