# setup.py
from setuptools import setup, find_packages

setup(
    name="web_delta",
    version="0.1.0",
    description="Web Delta: сравнение сайтов до и после миграции (URL и SEO-поля)",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"web_delta": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "Jinja2>=3.1",
        "playwright>=1.40",
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
        "console_scripts": [
            "web-delta=web_delta.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
