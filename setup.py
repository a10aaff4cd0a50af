from pathlib import Path
from setuptools import find_packages, setup

ROOT = Path(__file__).parent


def _read_version() -> str:
    for line in (ROOT / "src" / "docinject" / "__init__.py").read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("'\"")
    raise RuntimeError("__version__ not found in src/docinject/__init__.py")


setup(
    name="docinject",
    version=_read_version(),
    description="Single-document HTML builder driven by recursive inject directives",
    author="GAHEOS",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "lxml>=4.9",
        "Markdown>=3.4",
        "rcssmin>=1.1",
        "rjsmin>=1.2",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["docinject = docinject.cli:main"],
    },
)
