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

import sys

from . import cli, device, exceptions, options
from .logging import usb_id_tag


class ProbeCommand(options.CommandOptions):
    '''Open the selected device and say what it is, or list candidates.'''

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout
        self.list_only = False
        self.verbosity = 0

    def add_options(self, parser):
        parser.add_option('-L', '--list', dest='list', flag=True,
                          help='list compatible devices and exit')
        parser.add_option('-v', '--verbose', dest='verbose', flag=True,
                          help='verbose logging, repeat for debug output')

    def try_claim_option(self, name, value):
        if name == 'list':
            self.list_only = True
            self.open_device = False
            return True
        if name == 'verbose':
            self.verbosity += 1
            return True
        return False

    def print_extra_help(self, stream):
        stream.write(
            'Probe options:\n'
            '  -L, --list                 list compatible devices and exit\n'
            '  -v, --verbose              verbose logging, repeat for debug output\n'
            '\n')

    def run(self, target):
        if self.list_only:
            return self.list_devices(target)
        return self.describe(target)

    def list_devices(self, selection):
        found = device.find_devices(selection)
        if not found:
            raise exceptions.NoDeviceError('unable to find any matching device')
        for desc in found:
            self.stream.write('{} bus {} address {} serial {} description {}\n'
                              .format(usb_id_tag(desc.vid, desc.pid),
                                      desc.bus, desc.address, desc.sn,
                                      desc.description))
        return 0

    def describe(self, dev):
        usb_dev = dev.ftdi.usb_dev
        self.stream.write('{} {} interface {}\n'.format(
            usb_id_tag(usb_dev.idVendor, usb_dev.idProduct),
            dev.ftdi.ic_name, dev.interface))
        return 0


def main(args=None):
    cli.main(ProbeCommand(), args)


if __name__ == '__main__':
    main()
