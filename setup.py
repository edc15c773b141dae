"""
Setup file.
"""

from setuptools import setup

KEYWORDS = "javadoc documentation aggregation multi-module build"


if __name__ == "__main__":
    setup(
        maintainer="docmerge developers",
        keywords=KEYWORDS,
        include_package_data=True)
