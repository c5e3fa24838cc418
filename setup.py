import re
from pathlib import Path
from setuptools import setup, find_packages

ROOT = Path(__file__).resolve().parent


def read_readme() -> str:
    readme_path = ROOT / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


def read_version() -> str:
    source = (ROOT / "tavol" / "core.py").read_text(encoding="utf-8")
    match = re.search(r'^\s*ENGINE_VERSION = "([^"]+)"', source, re.MULTILINE)
    if not match:
        raise RuntimeError("ENGINE_VERSION not found in tavol/core.py")
    return match.group(1)


setup(
    name="tavol",
    version=read_version(),
    packages=find_packages(include=["tavol", "tavol.*"]),
    install_requires=[
        "cryptography>=41.0.0",
        "numpy>=1.24.0",
        "colorama>=0.4.6",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["tavol=tavol.main:main"],
    },
    python_requires=">=3.10",
    description="Password-based AES-256 file encryption with a self-describing trailer",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)
