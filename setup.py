from setuptools import setup, find_packages

setup(
    name='mailgroups',
    version='0.1.0',
    packages=find_packages(where='src'),
    package_dir={'': 'src'},
    install_requires=[
        'pyyaml',
        'python-dotenv',
        'click',
        'pydantic>=2',
    ],
    extras_require={
        'dev': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'mailgroups=mailgroups.cli:main',
        ],
    },
)
