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

from pyftdi.ftdi import Ftdi, FtdiError
from pyftdi.usbtools import UsbDeviceDescriptor, UsbTools, UsbToolsError
import usb.core
import usb.util

from . import exceptions
from . import logging as ftdi_logging
from .options import INTERFACE_ANY, INTERFACE_MAX

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DRIVER_ERRORS = (FtdiError, UsbToolsError, usb.core.USBError, ValueError,
                 IOError)

NO_SUCH_PORT = 'No such FTDI port'


def compatible_ids():
    '''Every (vid, pid) pair pyftdi knows how to drive.'''
    ids = set()
    for vid, products in Ftdi.PRODUCT_IDS.items():
        ids.update((vid, pid) for pid in products.values())
    return sorted(ids)


def find_devices(selection=None):
    '''Enumerate attached compatible devices.

    Returns `UsbDeviceDescriptor`s in the order pyftdi reports them.
    A non-zero vid or pid in `selection` narrows the search, and a serial
    or description set there must match exactly.
    '''
    vps = compatible_ids()
    if selection is not None and not selection.match_any:
        if selection.vid and selection.pid:
            vps = [(selection.vid, selection.pid)]
        elif selection.vid:
            vps = [vp for vp in vps if vp[0] == selection.vid]
        else:
            vps = [vp for vp in vps if vp[1] == selection.pid]
    if not vps:
        return []
    try:
        found = Ftdi.find_all(vps)
    except DRIVER_ERRORS as e:
        raise exceptions.NoDeviceError(
                'unable to enumerate ftdi devices: {}'.format(e))
    descriptors = [descriptor for descriptor, _ in found]
    if selection is not None:
        if selection.serial is not None:
            descriptors = [d for d in descriptors if d.sn == selection.serial]
        if selection.description is not None:
            descriptors = [d for d in descriptors
                           if d.description == selection.description]
    return descriptors


class FtdiDevice(object):
    '''An open FTDI device. Close it, or use it as a context manager.'''

    def __init__(self, ftdi, interface, descriptor=None):
        self._ftdi = ftdi
        self.interface = interface
        self.descriptor = descriptor

    @property
    def ftdi(self):
        '''The underlying `pyftdi.ftdi.Ftdi` handle.'''
        if self._ftdi is None:
            raise ValueError('device is closed')
        return self._ftdi

    @property
    def closed(self):
        return self._ftdi is None

    def reset(self):
        try:
            self.ftdi.reset()
        except DRIVER_ERRORS as e:
            raise exceptions.DeviceResetError(
                    'failed to reset device: {}'.format(e))

    def close(self):
        if self._ftdi is None:
            return
        ftdi, self._ftdi = self._ftdi, None
        usb_dev = ftdi.usb_dev
        ftdi.close()
        # PyFTDI doesn't do a good job of cleaning up - make sure we release the usb device
        if usb_dev is not None:
            usb.util.dispose_resources(usb_dev)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class DeviceOpener(object):
    '''Turns a `DeviceSelection` into one open `FtdiDevice`.

    The steps mirror libftdi: allocate a context, select the interface,
    open either the first compatible device or the one matching the
    descriptor, then optionally reset the chip. Nothing is retried.
    '''

    def __init__(self, selection):
        self.selection = selection
        self.logger = ftdi_logging.TaggedAdapter(
                logger, {'tag': ftdi_logging.usb_id_tag(selection.vid,
                                                        selection.pid)})
        self._ftdi = None
        self._interface = INTERFACE_ANY

    def create_context(self):
        try:
            self._ftdi = Ftdi()
        except DRIVER_ERRORS as e:
            raise exceptions.ContextError('ftdi context allocation failed: {}'
                                          .format(e))

    def set_interface(self, interface):
        if interface < INTERFACE_ANY or interface > INTERFACE_MAX:
            raise exceptions.InterfaceError(
                    'unable to set selected interface on ftdi device: '
                    '{}'.format(interface))
        self._interface = interface

    def open_first(self):
        devices = find_devices()
        if not devices:
            raise exceptions.NoDeviceError('unable to find any matching device')
        self.logger.debug('%d compatible device(s), using the first',
                          len(devices))
        return self._open(devices[0])

    def open_desc(self):
        selection = self.selection
        descriptor = UsbDeviceDescriptor(selection.vid, selection.pid, None,
                                         None, selection.serial, 0,
                                         selection.description)
        return self._open(descriptor)

    def _open(self, descriptor):
        try:
            usb_dev = UsbTools.get_device(descriptor)
        except DRIVER_ERRORS as e:
            raise exceptions.DeviceOpenError(
                    'unable to open ftdi device: {}'.format(e))
        try:
            self._ftdi.open_from_device(usb_dev, self._interface)
        except ValueError as e:
            UsbTools.release_device(usb_dev)
            raise self._interface_error(e)
        except DRIVER_ERRORS as e:
            UsbTools.release_device(usb_dev)
            # pyftdi checks the port count against the chip before anything
            # else and reports a missing port as a plain FtdiError
            if str(e).startswith(NO_SUCH_PORT):
                raise self._interface_error(e)
            raise exceptions.DeviceOpenError(
                    'unable to open ftdi device: {}'.format(e))
        return FtdiDevice(self._ftdi, self._interface, descriptor)

    def _interface_error(self, cause):
        return exceptions.InterfaceError(
                'unable to set selected interface on ftdi device: '
                '{} ({})'.format(self._interface, cause))

    def open(self):
        selection = self.selection
        self.create_context()
        self.set_interface(selection.interface)
        if selection.match_any:
            device = self.open_first()
        else:
            device = self.open_desc()
        self.logger.info('opened interface %d', device.interface)

        if selection.reset:
            try:
                device.reset()
            except exceptions.DeviceResetError:
                device.close()
                raise
            self.logger.info('device reset')
        return device


def open_device(selection):
    '''Open the device described by `selection`.

    Raises a `DeviceError` subclass when the device can't be opened, and
    `DeviceResetError` when the requested reset fails.
    '''
    return DeviceOpener(selection).open()
