from setuptools import setup, find_packages

setup(
    name="laptime-sim",
    version="1.0.0",
    author="Lap Time Sim Team",
    description="Longitudinal lap time simulator with tire thermal and load coupling",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        # Scientific computing
        "numpy>=1.24.0",
        "scipy>=1.11.0",
        "pandas>=2.0.0",

        # Visualization
        "matplotlib>=3.7.0",

        # Data handling
        "pyyaml>=6.0",

        # Utilities
        "tqdm>=4.66.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.7.0",
            "isort>=5.12.0",
            "flake8>=6.1.0",
            "mypy>=1.5.0",
        ],
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "laptime-sim=laptime_sim.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Physics",
    ],
)
