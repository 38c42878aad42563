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

# Always prefer setuptools over distutils
from setuptools import setup, find_packages
# To use a consistent encoding
from codecs import open
from os import path

here = path.abspath(path.dirname(__file__))

# Get the long description from the README file
with open(path.join(here, 'README.rst'), encoding='utf-8') as f:
    long_description = f.read()

requires = [
    'pyftdi>=0.54',
    'pyusb>=1.2',
]

test_requires = []

setup(
    name='ftdi-bitbang',
    version='0.1.0',
    description='Common device selection for FTDI bit-bang command line tools',
    long_description=long_description,

    packages=find_packages(exclude=['contrib', 'docs', 'tests']),
    python_requires='>=3.8',

    install_requires=requires,

    extras_require={
        'test': test_requires,
    },
    test_suite='tests',

    entry_points={
        'console_scripts': [
            'ftdi-probe = ftdi_bitbang.__main__:main',
        ],
    },
    zip_safe=False
)
