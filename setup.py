"""Setup script for watchpkg."""

from setuptools import setup, find_packages


def read_requirements(path):
    with open(path) as f:
        # Filter out comments and empty lines
        return [
            line.strip() for line in f.read().splitlines()
            if line.strip() and not line.startswith("#")
        ]


setup(
    name="watchpkg",
    version="1.0.1",
    description="Run scripts when packages are installed, removed or upgraded",
    author="watchpkg developers",
    license="BSD-3-Clause",
    packages=find_packages(include=["watchpkg", "watchpkg.*"]),
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": read_requirements("requirements-test.txt"),
    },
    entry_points={
        "console_scripts": [
            "watchpkg=watchpkg.cli.main:app",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: BSD License",
        "Operating System :: POSIX",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
