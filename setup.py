"""Footprints package setup."""
from setuptools import setup, find_packages

setup(
    name="footprints",
    version="1.6.0",
    description="Uptick/downtick footprint (volume profile) engine with tick persistence",
    author="Your Name",
    author_email="your.email@example.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "PyYAML>=6.0",
        "duckdb>=0.9.0",
        "pandas>=1.5.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "footprints-replay=footprints.cli:main",
        ],
    },
)
