#! /usr/bin/env python
#
# Copyright (c), 2025, Axius-SDC, Inc.
# Copyright (c) 2016-2022, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
from setuptools import setup, find_packages
from pathlib import Path


with Path(__file__).parent.joinpath('README.rst').open() as readme:
    long_description = readme.read()


setup(
    name='sdcvalidator',
    version='1.0.0',
    packages=find_packages(include=['sdcvalidator*']),
    entry_points={
        'console_scripts': [
            'sdcvalidate=sdcvalidator.cli:main',
        ]
    },
    python_requires='>=3.9',
    install_requires=['lxml>=4.9', 'xmlschema>=3.0'],
    extras_require={
        'dev': ['tox', 'coverage', 'pytest',
                'flake8', 'mypy', 'lxml-stubs'],
    },
    author='Axius-SDC, Inc.',
    author_email='tim@axius-sdc.com',
    license='MIT',
    description='An XML Schema validator for Semantic Data Charter data models, '
                'with ExceptionalValue recovery',
    long_description=long_description,
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Libraries',
        'Topic :: Text Processing :: Markup :: XML',
    ]
)
