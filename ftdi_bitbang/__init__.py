# Copyright 2024 Google LLC
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

from .options import (CommandOptions, DeviceSelection, parse_options,
                      print_help)
from .device import FtdiDevice, find_devices, open_device
from .cli import run_command


def open_from_argv(argv=None, command=None):
    '''Parse the common options and open the selected device.

    Raises `UsageError` or `DeviceError`; use `run_command` to turn those
    into an exit status.
    '''
    return open_device(parse_options(argv, command))
