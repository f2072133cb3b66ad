# setup.py - Build and install the facets package
from setuptools import setup, find_packages

setup(
    name="facets",
    version="0.1.0",
    description="Size distribution of the union of power sets of subsets of {0..63}",
    packages=find_packages(include=["facets", "facets.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["facets = facets.cli:main"]},
)
