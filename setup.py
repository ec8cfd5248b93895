"""Setup script for the http-request-simple package."""

from setuptools import setup, find_packages

requires = ["click>=8.2", "trio>=0.22"]

__version__ = None
exec(open("src/http_request_simple/version.py").read())

setup(
    name="http-request-simple",
    version=__version__,
    description="Asynchronous HTTP client with uniform result and error shapes",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src", exclude=["test"]),
    include_package_data=True,
    install_requires=requires,
    extras_require={"test": ["pytest>=7", "pytest-trio>=0.8"]},
    entry_points={
        "console_scripts": ["http-request-simple = http_request_simple.cli:http_request"]
    },
)
