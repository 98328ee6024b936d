import setuptools
from pathlib import Path

with Path("README.md").open(encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="splicescope",
    version="0.1.0",
    author="OUS AMG",
    description="Splice donor/acceptor overview and detail figures",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "pandas>=1.3.0",
        "numpy>=1.20.0",
        "matplotlib>=3.3.0",
        "biopython>=1.78",
    ],
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    packages=setuptools.find_packages(include=["splicescope", "splicescope.*"]),
    entry_points={
        "console_scripts": [
            "splicescope=splicescope.__main__:main",
        ],
    },
    python_requires=">=3.8",
)
