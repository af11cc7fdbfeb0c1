from setuptools import setup, find_packages
from pathlib import Path

setup(
    name="mark_counter",
    version=Path("./mark_counter/VERSION").read_text().strip(),
    packages=find_packages(include=["mark_counter", "mark_counter.*"]),
    package_data={"mark_counter": ["VERSION"]},
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "opencv-python-headless",
        "matplotlib",
        "easydict",
        "Pillow",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["mark_counter=mark_counter.cli:main"],
    },
)
