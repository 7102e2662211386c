from setuptools import setup, find_packages

setup(
    name="first-and-ten",
    version="1.0.0",
    description="Tier-based American football game simulator",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "click>=8.1.0",
        "tqdm>=4.66.0",
        "joblib>=1.3.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "first-and-ten=first_and_ten.cli:main",
        ],
    },
)
