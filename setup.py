"""Setup script for the freshwatch package."""

from setuptools import find_packages, setup

setup(
    name="freshwatch",
    version="0.1.0",
    description="Fish freshness monitoring and classification",
    packages=find_packages(include=["freshwatch", "freshwatch.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyyaml",
        "python-dotenv",
        "aiohttp",
        "rich",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-asyncio",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "freshwatch-evaluate=freshwatch.engine.cli:main",
            "freshwatch-display=freshwatch.display:main",
        ],
    },
)
