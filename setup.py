from setuptools import setup, find_packages
from os import path
from time import time

here = path.abspath(path.dirname(__file__))

if path.exists(path.join(here, "VERSION.txt")):
    # this file can be written by CI tools
    with open(path.join(here, "VERSION.txt")) as version_file:
        version = version_file.read().strip().strip("v")
else:
    version = str(time())

with open(path.join(here, 'requirements.in')) as requirements_file:
    install_requires = requirements_file.read().strip().split('\n')

setup(
    name='kubectl-openstack',
    version=version,
    description='''Log in to the OpenStack cloud of a Cluster API OpenStackCluster resource''',
    license='Apache-2.0',
    packages=find_packages(exclude=['examples', 'tests', '.tox']),
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
      'console_scripts': [
        'kubectl-openstack = kubectl_openstack.cli:main',
      ]
    },
)
