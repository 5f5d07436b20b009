from setuptools import setup, find_packages

setup(
    name="Topsis-Ranker",
    version="2.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),

    description="TOPSIS ranking of tabular datasets, as a library, CLI and web service",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",

    author="Anjani Agarwal",

    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "openpyxl",
        "xlrd",
        "flask>=2.2",
    ],
    extras_require={
        "test": ["pytest"],
    },

    entry_points={
        "console_scripts": [
            "topsis = topsis_ranker.topsis:main"
        ]
    }
)
