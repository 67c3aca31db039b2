from setuptools import find_packages, setup

setup(
    name="scaffolder-actions",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2",
        "pyyaml",
        "requests",
        "azure-identity",
        "pathspec>=0.12",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "scaffolder-actions=scaffolder_actions.cli:main",
        ],
    },
    description="Helpers for scaffolder template actions: repo URL parsing, client options and directory serialization",
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
