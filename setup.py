from setuptools import setup, find_packages

setup (
    name = "numthy",
    version = "0.1.0",
    description = "Prime sieves, Lehmer prime counting and modular arithmetic.",
    long_description = open ( 'README.md' ).read ( ),
    long_description_content_type = "text/markdown",
    packages = find_packages ( "src" ),
    package_dir = { "": "src" },
    install_requires = [
        "numpy",
        "sortedcontainers",
        "pyrsistent",
    ],
    extras_require = {
        "test": [ "pytest" ],
    },
    classifiers = [
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    python_requires = ">=3.12",
)
