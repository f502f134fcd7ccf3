from setuptools import setup, find_packages

setup(
    name="footprint-arch-index",
    version="1.0.0",
    description="Footprint silhouette segmentation and Arch Index classification pipeline",
    author="Footprint Analysis Team",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "scipy>=1.10.0",
        "matplotlib>=3.7.0",
        "openpyxl>=3.1.0",
        "pyyaml>=6.0",
        "pydantic>=2.0.0",
        "Pillow>=10.0.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "footarch=footarch.cli:main",
        ],
    },
    python_requires=">=3.9",
)
