"""
setup.py

Установка Peg Solitaire (оракул решаемости, игра с подсказками).

Использование:
    pip install -e .[test]
    peg-oracle --preset english --starts
"""

from setuptools import setup, find_packages

setup(
    name="peg_oracle",
    version="1.0.0",
    description="Peg Solitaire: solvability oracle, hints and undo/redo game session",
    packages=find_packages(include=["core", "solvers", "game", "peg_io", "utils", "web"]),
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "flask>=2.2",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "peg-oracle=main:main",
        ],
    },
    zip_safe=False,
)
