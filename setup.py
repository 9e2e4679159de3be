from setuptools import setup, find_packages

setup(
    name="wiki_first_link",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "lxml",
        "icecream",
        "requests>=2.20.0",
        "tqdm",
    ],
    extras_require={
        "dev": [
            "pytest",
        ]
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "wiki-first-link=wiki_first_link.cli:main",
        ],
    },
)
