from setuptools import setup, find_packages

setup(
    name="shark-numerics",
    version="0.1.0",
    description="Adaptive quadrature, profiling timer and file utilities for the shark simulation",
    author="ICRAR",
    packages=find_packages(include=["shark", "shark.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
