import os
import re

from setuptools import find_packages, setup


def get_version():
    with open(os.path.join(os.path.dirname(__file__), 'src', 'svconsensus', '__init__.py')) as fh:
        return re.search(r"__version__ = '([^']+)'", fh.read()).group(1)


TEST_REQS = [
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'biopython>=1.78',
    'pandas>=1.1',
    'pysam>=0.15.2',
]


setup(
    name='svconsensus',
    version=get_version(),
    package_dir={'': 'src'},
    packages=find_packages('src', exclude=['tests']),
    description='Consensus structural variant calls from chimeric contig alignments',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS,
    },
    tests_require=TEST_REQS,
    setup_requires=['pip>=9.0.0', 'setuptools>=36.0.0'],
    python_requires='>=3.7',
    test_suite='tests',
)
