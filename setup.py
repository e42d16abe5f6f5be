"""
Setup script for the wordleoff-sessions package.

Installs the ``wordleoff`` package (src layout) together with its bundled
answer list and database schema, and the ``wordleoff`` console script.
"""

from setuptools import setup, find_packages

setup(
    name="wordleoff-sessions",
    version="1.0.0",
    description="WordleOff - live session management for a multiplayer word-guessing game",
    author="WordleOff Developers",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
        "dev": [
            "pytest>=7.4",
            "build",
            "wheel",
        ],
    },
    package_data={
        "wordleoff": ["words/*.txt"],
        "wordleoff._store": ["*.sql"],
    },
    entry_points={
        "console_scripts": [
            "wordleoff=wordleoff.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
