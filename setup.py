from setuptools import setup, find_packages

setup(
    name='pets_vaccination_env',
    version='0.1.0',
    packages=find_packages(exclude=['tests', 'scripts']),
    package_data={
        'pets_vaccination_env': ['configs/*.yaml', 'configs/scenarios/*.yaml'],
    },
    install_requires=[
        'gymnasium',
        'numpy',
        'pyyaml',
    ],
    extras_require={
        'test': ['pytest'],
    },
)
