# setup.py
from setuptools import setup, find_packages

setup(
    name="js_scout",
    version="1.0.2",
    description="Asynchronous JavaScript file and bundle-chunk discovery",
    packages=find_packages(include=["js_scout", "js_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["js_scout=js_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
