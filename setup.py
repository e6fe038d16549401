# pylint: disable=missing-module-docstring
# ruff: noqa

from pathlib import Path

from setuptools import find_packages, setup


def read_long_description() -> str:
    """Return README contents for PyPI description."""
    readme_path = Path(__file__).with_name("README.md")
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else "Hot-topic idea engine"


setup(
    name="hot-idea-engine",
    version="0.1.0",
    description="Weibo hot-search product idea generator with HTML reports",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.11",
    packages=find_packages(
        include=[
            "idea_engine", "idea_engine.*",
            "generation_engine", "generation_engine.*",
            "fetchers", "fetchers.*",
        ]
    ),
    include_package_data=True,
    install_requires=[
        "anthropic>=0.40",
        "httpx>=0.26",
        "jinja2>=3.1",
        "pandas>=2.0",
        "pydantic>=2.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "hot-ideas = idea_engine.cli_entrypoints:analyze",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
