import os
import re

from setuptools import find_packages, setup


def read_version():
    with open(os.path.join('finperm', 'version.py')) as f:
        return re.search(r"__version__ = '(.+)'", f.read()).group(1)


setup(name='finperm',
      version=read_version(),
      description='Finite permutations as immutable values',
      packages=find_packages(exclude=['tests', 'tests.*']),
      python_requires='>=3.9',
      install_requires=['numpy'],
      extras_require={'test': ['pytest']})
