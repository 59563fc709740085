from setuptools import setup, find_packages

# -------------------------------------------------
# Runtime and test requirements
# -------------------------------------------------

install_requires = [
    "numpy>=1.21",
    "biopython>=1.79",
    "pyyaml>=6.0",
    "psutil>=5.9",
]

extras_require = {
    "test": [
        "pytest>=7.0",
    ],
}

# -------------------------------------------------
# Setup
# -------------------------------------------------

setup(
    name="svfind",
    version="0.1.0",
    description="Find structural-variant insertions from pairwise alignment overlaps",
    python_requires=">=3.8",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"svfind.config": ["default_config.yaml"]},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "svfind=svfind.scripts.run_svfind:run",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
