"""setuptools setup for clockeroo.

Install for development:
    pip install -e ".[test]"
"""

from setuptools import setup, find_packages

setup(
    name="clockeroo",
    version="0.1.0",
    description="A terminal timer, stopwatch and alarm",
    packages=find_packages(include=["clockeroo", "clockeroo.*"]),
    python_requires=">=3.10",
    install_requires=[
        "PyQt6",
        "numpy",
        "rich",
    ],
    extras_require={
        "test": ["pytest", "tzdata"],
    },
    entry_points={
        "console_scripts": [
            "clockeroo=clockeroo.__main__:main",
        ],
    },
)
