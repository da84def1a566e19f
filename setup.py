from pathlib import Path
from setuptools import find_packages, setup

README = Path(__file__).parent / "README.md"

setup(
    name="mdbook-shiftinclude",
    version="0.1.0",
    description="mdBook preprocessor that includes files with indentation shift",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "shiftinclude=shiftinclude.cli:main",
            "mdbook-shiftinclude=shiftinclude.cli:main",
        ],
    },
)
