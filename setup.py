"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/lx-lang/lxbuild"
KEYWORDS = "lx compiler toolchain msvc build driver native linker"
HERE = os.path.dirname(os.path.abspath(__file__))


if __name__ == "__main__":
    setup(
        name="lxbuild",
        version="0.1.0",
        description="Native toolchain driver for the LX compiler",
        keywords=KEYWORDS,
        url=URL,
        package_dir={"": "src"},
        packages=find_packages(where=os.path.join(HERE, "src")),
        python_requires=">=3.9",
        install_requires=[
            "psutil>=5.9",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
            ],
        },
        entry_points={
            "console_scripts": [
                "lxbuild=lxbuild.cli:main",
            ],
        },
        include_package_data=True)
