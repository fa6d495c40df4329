from setuptools import setup, find_packages


PACKAGE_NAME = "polydraw"
PACKAGE_VERSION = "1.0.0"
PACKAGE_AUTHORS = "polydraw contributors"
PACKAGE_DESCRIPTION = """Interactive polygon editing engine: draw, select and reshape
closed polygons with self-intersection checks and undo/redo
"""
PACKAGE_DATA = {"polydraw": ["config/*.yaml"]}
INSTALL_REQUIREMENTS = [
    "numpy",
    "shapely",
    "loguru",
    "pyyaml",
    "matplotlib",
]
EXTRAS_REQUIREMENTS = {
    "test": ["pytest"],
}


setup(
    name=PACKAGE_NAME,
    version=PACKAGE_VERSION,
    description=PACKAGE_DESCRIPTION,
    author=PACKAGE_AUTHORS,
    license="GPLv3",
    packages=find_packages(include=["polydraw", "polydraw.*"]),
    package_data=PACKAGE_DATA,
    install_requires=INSTALL_REQUIREMENTS,
    extras_require=EXTRAS_REQUIREMENTS,
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.10",
)
