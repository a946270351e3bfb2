"""
Setup script for genpp

Installs the genpp package, its dispatch templates, and the `genpp`
console script.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from genpp/__init__.py
def get_version():
    version_file = Path("genpp/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="genpp",
    version=get_version(),
    description="Generic-type preprocessor: expands generic C blocks into per-type switch statements",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["genpp", "genpp.*"]),
    package_data={"genpp": ["templates/*.j2"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "jinja2>=3.0",
        "tomli>=1.1; python_version < '3.11'",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "genpp=genpp.cli:main",
        ],
    },
    zip_safe=False,  # Templates are loaded from the package directory
)
