from setuptools import setup, find_packages

setup(
    name = "pychef",
    version = "0.1.0",
    packages = find_packages(exclude=["tests", "tests.*"]),
    python_requires = ">=3.7",
    entry_points = {
        'console_scripts': [
            'pychef=pychef.__main__:main'
        ],
    },
    install_requires=[
        'pyelftools',
        'manticore'
    ],
    extras_require={
        'test': [
            'pytest'
        ],
    },
)
