import pathlib
import re

from setuptools import find_packages, setup

# Single source for the version: buildbar/__init__.py
init = (pathlib.Path(__file__).parent / "buildbar" / "__init__.py").read_text()
version = re.search(r'^__version__ = "([^"]+)"', init, re.M).group(1)

setup(
    name="buildbar",
    version=version,
    description="Terminal progress bar for cmake/make build output",
    packages=find_packages(include=["buildbar", "buildbar.*"]),
    python_requires=">=3.10",
    install_requires=["tracerite"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["buildbar=buildbar.cli:main"]},
)
