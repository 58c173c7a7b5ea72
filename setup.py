#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
    setup.py
    ~~~~~~~~
    lendtrack, a book lending tracker for small libraries

    :copyright: (c) 2026 by AUTHORS
    :license: see LICENSE for more details.
"""

import os
import re
import codecs
from setuptools import setup, find_packages

here = os.path.abspath(os.path.dirname(__file__))


def read(*parts):
    return codecs.open(os.path.join(here, *parts), 'r', 'utf-8').read()


def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError("Unable to find version string.")

setup(
    name='lendtrack',
    version=find_version("lendtrack", "__init__.py"),
    description='lendtrack, a book lending tracker for small libraries',
    long_description=read('README.md'),
    long_description_content_type='text/markdown',
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Web Environment",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
    ],
    author='AUTHORS',
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'lendtrack': ['templates/*.html']},
    platforms='any',
    license='LICENSE',
    python_requires='>=3.9',
    install_requires=[
        'fastapi',
        'uvicorn',
        'sqlalchemy>=2.0',
        'psycopg2-binary',
        'pydantic>=2',
        'itsdangerous',
        'jinja2',
        'python-multipart',
        ],
    extras_require={
        'test': [
            'pytest',
            'httpx',
            ],
        },
    include_package_data=True
    )
