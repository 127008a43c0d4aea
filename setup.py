#!/usr/bin/env python
# -*- coding: utf-8 -*-
import codecs
from setuptools import setup


with codecs.open('README.rst', encoding='utf8') as readme_file:
    README = readme_file.read()

with codecs.open('HISTORY.rst', encoding='utf8') as history_file:
    HISTORY = history_file.read().replace('.. :changelog:', '')

LONG_DESCRIPTION = README + '\n\n' + HISTORY

# requirements
install_requires = [x.strip() for x in open('requirements.txt') if x.strip()]

tests_require = [
    'pytest>=7.0',
    'pytest-mock>=3.10',
]

# *IMPORTANT*: Don't manually change the version here. Use the 'bump2version' utility.
version = '0.1.0'

setup(
    name='stakegen',
    version=version,
    description='Genesis generation for a predeployed PoS staking contract',
    long_description=LONG_DESCRIPTION,
    packages=[
        'stakegen',
    ],
    license='MIT',
    zip_safe=False,
    keywords='stakegen ethereum genesis staking',
    classifiers=[
        'Development Status :: 2 - Pre-Alpha',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.8',
    install_requires=install_requires,
    tests_require=tests_require,
    extras_require={'test': tests_require},
    entry_points='''
    [console_scripts]
    stakegen=stakegen.app:app
    '''
)
