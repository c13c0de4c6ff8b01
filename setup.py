"""
spring-helper - Spring Web project scaffolding from PostgreSQL schemas
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="spring-helper",
    version="0.2.0",
    author="",
    author_email="",
    description="⚡ Generate Spring WebFlux + R2DBC sources from a PostgreSQL schema",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "sqlalchemy>=2.0.0",
        "psycopg2-binary>=2.9",
        "pydantic>=2.0.0",
        "httpx>=0.24.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "spring-helper=spring_helper.cli:cli_main",
        ],
    },
    keywords="spring, spring-boot, r2dbc, postgresql, generator, code-generator, crud",
)
