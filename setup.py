from setuptools import setup, find_packages

setup(
    name="composegen",
    version="1.0.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.8",
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "click>=8.0",
        "python-dotenv>=1.0",
        "jinja2>=3.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "composegen=composegen.CLI.main:main",
        ],
    },
)
