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

import io
import unittest
from unittest import mock

from pyftdi.usbtools import UsbDeviceDescriptor

from ftdi_bitbang import __main__ as probe
from ftdi_bitbang import cli, exceptions


class TestProbeCommand(unittest.TestCase):

    def setUp(self):
        configure_patcher = mock.patch('ftdi_bitbang.logging.configure')
        self.configure = configure_patcher.start()
        self.addCleanup(configure_patcher.stop)

        self.output = io.StringIO()
        self.stderr = io.StringIO()
        self.uut = probe.ProbeCommand(self.output)

    def run_command(self, argv):
        return cli.run_command(self.uut, argv, prog='ftdi-probe',
                               stdout=self.output, stderr=self.stderr)

    def test_describe_open_device(self):
        dev = mock.MagicMock()
        dev.__enter__.return_value = dev
        dev.__exit__.return_value = False
        dev.interface = 2
        dev.ftdi.usb_dev.idVendor = 0x0403
        dev.ftdi.usb_dev.idProduct = 0x6010
        dev.ftdi.ic_name = 'ft2232h'
        with mock.patch('ftdi_bitbang.device.open_device',
                        return_value=dev) as open_device:
            self.assertEqual(self.run_command(['-I', '2']), 0)
        self.assertEqual(open_device.call_args[0][0].interface, 2)
        self.assertEqual(self.output.getvalue(),
                         '0403:6010 ft2232h interface 2\n')

    def test_list_does_not_open(self):
        found = [UsbDeviceDescriptor(0x0403, 0x6014, 3, 9, 'FT9', None,
                                     'C232HM-DDHSL-0')]
        with mock.patch('ftdi_bitbang.device.find_devices',
                        return_value=found) as find_devices, \
                mock.patch('ftdi_bitbang.device.open_device') as open_device:
            self.assertEqual(self.run_command(['--list', '-V', '0403']), 0)
        self.assertEqual(find_devices.call_args[0][0].vid, 0x0403)
        open_device.assert_not_called()
        self.assertEqual(self.output.getvalue(),
                         '0403:6014 bus 3 address 9 serial FT9 '
                         'description C232HM-DDHSL-0\n')

    def test_list_honours_serial(self):
        found = [
            (UsbDeviceDescriptor(0x0403, 0x6010, 1, 4, 'FT0001', None,
                                 'Dual RS232-HS'), 2),
            (UsbDeviceDescriptor(0x0403, 0x6001, 1, 7, 'FT0002', None,
                                 'FT232R USB UART'), 1),
        ]
        with mock.patch('ftdi_bitbang.device.Ftdi') as Ftdi:
            Ftdi.PRODUCT_IDS = {0x0403: {'232': 0x6001, '2232': 0x6010}}
            Ftdi.find_all.return_value = found
            self.assertEqual(self.run_command(['--list', '-S', 'FT0002']), 0)
        self.assertEqual(self.output.getvalue(),
                         '0403:6001 bus 1 address 7 serial FT0002 '
                         'description FT232R USB UART\n')

    def test_list_with_nothing_attached(self):
        with mock.patch('ftdi_bitbang.device.find_devices', return_value=[]):
            self.assertEqual(self.run_command(['-L']), exceptions.EXIT_DEVICE)
        self.assertEqual(self.stderr.getvalue(),
                         'unable to find any matching device\n')

    def test_verbose_is_repeatable(self):
        with mock.patch('ftdi_bitbang.device.find_devices', return_value=[]):
            self.run_command(['-L', '-v', '--verbose'])
        self.assertEqual(self.uut.verbosity, 2)
        self.configure.assert_called_once_with(2)

    def test_help_lists_probe_options(self):
        self.assertEqual(self.run_command(['-h']), 1)
        text = self.output.getvalue()
        self.assertIn('-R, --reset', text)
        self.assertIn('-L, --list', text)

    def test_other_options_left_to_common_handler(self):
        self.assertFalse(self.uut.try_claim_option('vid', '0403'))


class TestMain(unittest.TestCase):

    def test_exits_with_usage_status(self):
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit) as cm:
                probe.main(['--interface=9'])
        self.assertEqual(cm.exception.code, 1)
        self.assertEqual(stderr.getvalue(), 'invalid interface\n')


if __name__ == '__main__':
    unittest.main()
