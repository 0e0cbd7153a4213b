import os
import re

import setuptools

with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'seqtrie', '_version.py')) as f:
    version = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]", f.read(), re.M).group(1)

setuptools.setup(
    name='seqtrie',
    version=version,
    author='seqtrie contributors',
    packages=['seqtrie'],
    python_requires='>=3.7.0',
    install_requires=[
        'sortedcontainers',
    ],
    extras_require={
        'test': ['pytest', 'numpy'],
    },
    include_package_data=True,
)
