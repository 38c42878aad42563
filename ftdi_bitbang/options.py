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

'''
Common command line options

Every tool in the family selects its FTDI device with the same set of
flags. This module parses them into a `DeviceSelection` and lets each tool
layer its own flags on top through a `CommandOptions` subclass.
'''

import argparse
import os
import sys

from . import exceptions

# Interface numbers follow libftdi: 0 picks the first port, 1-4 are A-D.
INTERFACE_ANY = 0
INTERFACE_MAX = 4

USB_ID_MAX = 0xffff

COMMON_HELP = '''
Usage:
 {prog} [options]

Definitions for options:
 ID = hexadecimal word
 INTERFACE = integer between 0 and 4 depending on device type

Options:
  -h, --help                 display this help and exit
  -V, --vid=ID               usb vendor id
  -P, --pid=ID               usb product id
                             as default vid and pid are zero, so any first compatible ftdi device is used
  -D, --description=STRING   usb description (product) to use for opening right device, default none
  -S, --serial=STRING        usb serial to use for opening right device, default none
  -I, --interface=INTERFACE  ftx232 interface number, defaults to first
  -R, --reset                do usb reset on the device at start

'''


class DeviceSelection(object):
    '''Which device to open and how.

    A vid and pid of zero match any compatible device; the first one
    found is used.
    '''

    def __init__(self, vid=0, pid=0, description=None, serial=None,
                 interface=INTERFACE_ANY, reset=False):
        self.vid = vid
        self.pid = pid
        self.description = description
        self.serial = serial
        self.interface = interface
        self.reset = reset

    @property
    def match_any(self):
        return self.vid == 0 and self.pid == 0

    def __repr__(self):
        return ('DeviceSelection(vid=0x%04x, pid=0x%04x, description=%r, '
                'serial=%r, interface=%d, reset=%r)' % (
                    self.vid, self.pid, self.description, self.serial,
                    self.interface, self.reset))


class CommandOptions(object):
    '''Hooks a command uses to extend the common option set.

    Every parsed option, common ones included, is offered to
    `try_claim_option` before the common handler sees it.

    `run` receives the open `FtdiDevice`, or the `DeviceSelection` itself
    when `open_device` is False.
    '''

    open_device = True
    verbosity = 0

    def add_options(self, parser):
        pass

    def try_claim_option(self, name, value):
        return False

    def print_extra_help(self, stream):
        pass

    def run(self, target):
        return 0


def _parse_int(text, base):
    # int() also takes digit-grouping underscores, strtol() does not
    if '_' in text:
        raise ValueError('digit separators not allowed: {!r}'.format(text))
    return int(text, base)


def parse_usb_id(text, what):
    '''Parse a hexadecimal USB vendor or product id.'''
    try:
        value = _parse_int(text, 16)
    except (TypeError, ValueError):
        raise exceptions.UsageError('invalid usb {} value'.format(what))
    if value < 0 or value > USB_ID_MAX:
        raise exceptions.UsageError('invalid usb {} value'.format(what))
    return value


def parse_interface(text):
    try:
        value = _parse_int(text, 10)
    except (TypeError, ValueError):
        raise exceptions.UsageError('invalid interface')
    if value < INTERFACE_ANY or value > INTERFACE_MAX:
        raise exceptions.UsageError('invalid interface')
    return value


def apply_common_option(selection, name, value):
    if name == 'vid':
        selection.vid = parse_usb_id(value, 'vid')
    elif name == 'pid':
        selection.pid = parse_usb_id(value, 'pid')
    elif name == 'description':
        selection.description = value
    elif name == 'serial':
        selection.serial = value
    elif name == 'interface':
        selection.interface = parse_interface(value)
    elif name == 'reset':
        selection.reset = True
    elif name == 'help':
        raise exceptions.HelpRequested()
    else:
        raise exceptions.UsageError('unrecognized option: {}'.format(name),
                                    show_help=True)


class _DispatchValue(argparse.Action):

    def __call__(self, parser, namespace, values, option_string=None):
        parser.dispatch(self.dest, values)


class _DispatchFlag(argparse.Action):

    def __init__(self, option_strings, dest, **kwargs):
        super(_DispatchFlag, self).__init__(option_strings, dest, nargs=0,
                                            **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.dispatch(self.dest, None)


class OptionParser(argparse.ArgumentParser):
    '''Routes each option, in command line order, to the command first and
    to the common handler second.

    Nothing is stored in the argparse namespace and nothing here exits the
    process: bad input raises `UsageError`.
    '''

    def __init__(self, selection, command, prog=None):
        super(OptionParser, self).__init__(prog=prog, add_help=False,
                                           conflict_handler='resolve')
        self.selection = selection
        self.command = command

        self.add_option('-h', '--help', dest='help', flag=True)
        self.add_option('-V', '--vid', dest='vid', metavar='ID')
        self.add_option('-P', '--pid', dest='pid', metavar='ID')
        self.add_option('-D', '--description', dest='description',
                        metavar='STRING')
        self.add_option('-S', '--serial', dest='serial', metavar='STRING')
        self.add_option('-I', '--interface', dest='interface',
                        metavar='INTERFACE')
        self.add_option('-R', '--reset', dest='reset', flag=True)

    def add_option(self, *flags, flag=False, **kwargs):
        '''Declare an option. Flags take no value; the command sees None.

        Re-declaring a flag string already in use replaces the older
        definition of that string.
        '''
        kwargs['action'] = _DispatchFlag if flag else _DispatchValue
        kwargs.setdefault('default', argparse.SUPPRESS)
        return self.add_argument(*flags, **kwargs)

    def dispatch(self, name, value):
        if self.command.try_claim_option(name, value):
            return
        apply_common_option(self.selection, name, value)

    def error(self, message):
        raise exceptions.UsageError(message, show_help=True)


def parse_options(argv=None, command=None, prog=None):
    '''Parse `argv` (without the program name) into a `DeviceSelection`.

    Raises `UsageError` for malformed values, unknown options and help
    requests.
    '''
    if command is None:
        command = CommandOptions()
    if argv is None:
        argv = sys.argv[1:]
    selection = DeviceSelection()
    parser = OptionParser(selection, command, prog=prog)
    command.add_options(parser)
    parser.parse_args(argv)
    return selection


def print_help(prog, command=None, stream=None):
    if stream is None:
        stream = sys.stdout
    stream.write(COMMON_HELP.format(prog=os.path.basename(prog)))
    if command is not None:
        command.print_extra_help(stream)
