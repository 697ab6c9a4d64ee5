#!/usr/bin/env python3
"""
Setup script for the PortableApps Launcher Replacer.

Swaps PortableApps launchers for a shared universal launcher and can
restore the originals afterwards.
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read version from version.py
version_info = {}
exec(Path("version.py").read_text(), version_info)

# Read long description from README
readme_path = Path("README.md")
long_description = readme_path.read_text() if readme_path.exists() else ""

# Read requirements
requirements_path = Path("requirements.txt")
requirements = []
if requirements_path.exists():
    requirements = [
        line.strip()
        for line in requirements_path.read_text().split("\n")
        if line.strip() and not line.startswith("#")
    ]

setup(
    name="pa-replacer",
    version=version_info.get("get_version", lambda: "0.0.0")(),
    author="nursedude",
    author_email="admin@noc.local",
    description="Replace PortableApps launchers with a universal launcher",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["launcher", "version"],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pa-replacer=launcher:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: System Administrators",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Systems Administration",
        "Topic :: Utilities",
    ],
    keywords="portableapps, launcher, portable, windows, replacer",
    license="GPL-3.0",
    include_package_data=True,
    zip_safe=False,
)
