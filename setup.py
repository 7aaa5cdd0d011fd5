from setuptools import setup, find_packages

setup(
    name="find_me",
    version="1.0.0",
    packages=find_packages(),
    install_requires=[
        "PySide6",
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-qt",
            "hypothesis",
        ],
    },
)
