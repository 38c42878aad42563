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


def usb_id_tag(vid, pid):
    '''Format a vendor/product pair the way lsusb does, e.g. "0403:6001".'''
    return '%04x:%04x' % (vid, pid)


class TaggedAdapter(logging.LoggerAdapter):
    '''Annotates all log messages with a "[tag]" prefix.

    The value of the tag is specified in the dict argument passed into
    the adapter's constructor.

    >>> logger = logging.getLogger(__name__)
    >>> adapter = TaggedAdapter(logger, {'tag': usb_id_tag(0x0403, 0x6001)})
    '''

    def process(self, msg, kwargs):
        return '[%s] %s' % (self.extra['tag'], msg), kwargs


def configure(verbosity):
    '''Set up root logging for a command line tool.

    0 shows warnings only, 1 adds informational messages, 2 or more
    enables debug output.
    '''
    level = (logging.DEBUG if verbosity >= 2
             else logging.INFO if verbosity >= 1
             else logging.WARNING)
    logging.basicConfig(level=level,
                        format='%(name)-12s: %(levelname)-8s %(message)s')
