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

EXIT_USAGE = 1
EXIT_DEVICE = 2
EXIT_RESET = 3


class FtdiBitbangError(Exception):
    status = 1

    def __str__(self):
        return ' '.join(str(arg) for arg in self.args)


class UsageError(FtdiBitbangError):
    '''Bad command line. The usage text is printed when `show_help` is set.'''

    status = EXIT_USAGE

    def __init__(self, message=None, show_help=False):
        if message is None:
            super(UsageError, self).__init__()
        else:
            super(UsageError, self).__init__(message)
        self.message = message
        self.show_help = show_help


class HelpRequested(UsageError):

    def __init__(self):
        super(HelpRequested, self).__init__(show_help=True)


class DeviceError(FtdiBitbangError):
    status = EXIT_DEVICE


class ContextError(DeviceError):
    pass


class InterfaceError(DeviceError):
    pass


class NoDeviceError(DeviceError):
    pass


class DeviceOpenError(DeviceError):
    pass


class DeviceResetError(DeviceError):
    status = EXIT_RESET
