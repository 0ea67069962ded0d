import os

from setuptools import find_packages, setup


def read_requirements():
    """
    Reads and processes the requirements file, returning a list of dependencies.

    Excludes blank lines and lines that start with `#` (comments).
    """
    req_file = os.path.join(os.path.dirname(__file__), "requirements.txt")
    with open(req_file, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip() and not line.startswith("#")]


setup(
    name="asset-migrate",
    version="1.0.0",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "asset-migrate=asset_migrate.cli:main",
        ],
    },
    python_requires=">=3.9",
)
