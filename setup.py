#!/usr/bin/env python3
"""
Setup script for Stride

Install with:
    pip install -e .

With test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# Backend API dependencies
api_requirements = [
    "fastapi>=0.110.0",
    "uvicorn[standard]>=0.27.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "sqlalchemy[asyncio]>=2.0.25",
    "aiosqlite>=0.19.0",
    "asyncpg>=0.29.0",
    "python-multipart>=0.0.9",
    "python-jose[cryptography]>=3.3.0",
    "slowapi>=0.1.9",
    "redis>=5.0.0",
    "python-dotenv>=1.0.0",
]

# Report parsing dependencies
parser_requirements = [
    "pdfplumber>=0.10.3",
    "beautifulsoup4>=4.12.0",
]

# CLI dependencies
cli_requirements = [
    "rich>=13.7.0",
]

setup(
    name="stride",
    version="1.0.0",
    description="Stride - student academic dashboard: attendance planning, grades and leave suggestions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    package_dir={"": "backend", "cli": "cli"},
    packages=find_namespace_packages(where="backend", include=["stride", "stride.*"]) + ["cli"],
    python_requires=">=3.9",
    install_requires=api_requirements + parser_requirements + cli_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.26.0",
            "faker>=22.0.0",
            "black>=24.1.0",
            "isort>=5.13.0",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "stride=cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Environment :: Web Environment",
        "Framework :: FastAPI",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    keywords="attendance grades sgpa fastapi students",
)
