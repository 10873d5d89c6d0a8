from setuptools import setup, find_packages

setup(
    name="halabtours",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
        "tenacity>=8.2.3",
        "pydantic>=2.0.0",
        "python-dateutil>=2.8.2",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "flake8>=6.0.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "halabtours-browse=halabtours.tools.browse_places:main",
        ]
    },
    python_requires=">=3.11",
)
