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

import logging
import sys

from . import device, exceptions, options
from . import logging as ftdi_logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def run_command(command, argv=None, prog=None, stdout=None, stderr=None):
    '''Parse the command line, open the device and hand it to `command`.

    Returns the process exit status instead of exiting, so that callers
    (and tests) decide what to do with it.
    '''
    if argv is None:
        argv = sys.argv[1:]
    if prog is None:
        prog = sys.argv[0]
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        selection = options.parse_options(argv, command, prog=prog)
    except exceptions.UsageError as e:
        if e.message:
            stderr.write('{}\n'.format(e.message))
        if e.show_help:
            options.print_help(prog, command, stdout)
        return e.status

    ftdi_logging.configure(command.verbosity)
    logger.debug('%r', selection)

    try:
        if not command.open_device:
            status = command.run(selection)
        else:
            with device.open_device(selection) as dev:
                status = command.run(dev)
    except exceptions.DeviceError as e:
        stderr.write('{}\n'.format(e))
        return e.status
    return status or 0


def main(command, argv=None):
    sys.exit(run_command(command, argv))
