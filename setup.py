"""
Setup for Cassius filters backend package.
This makes 'cassius' an installable Python package.
"""
from setuptools import setup, find_packages

setup(
    name="cassius-filters",
    version="1.0.0",
    packages=find_packages(include=["cassius", "cassius.*"]),
    install_requires=[
        line.strip()
        for line in open('cassius/requirements.txt')
        if line.strip() and not line.startswith('#')
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
        ]
    },
    python_requires=">=3.9",
)
