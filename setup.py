from setuptools import setup, find_packages
import re

# Read version from incometrack/__init__.py
with open('incometrack/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='income-track',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={
        'incometrack.sdk.taxes': ['rules/*.yaml'],
    },
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'mcp': [
            'mcp[cli]>=1.0.0,<2',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'income-track=incometrack.cli.__main__:main',
            'income-track-mcp=incometrack.mcp.server:run_server',
        ],
    },
    author='Personal',
    description='Work-day income tracking and Romanian personal income tax calculations.',
    python_requires='>=3.10',
)
