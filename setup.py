from setuptools import setup, find_packages

setup(
    name="fluenthttp",
    version="0.1.0",
    description="Fluent HTTP request builder and response handling on top of requests",
    author="Dimitar Navushtanov",
    author_email="dimitar.navushtanov@fadata.eu",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"fluenthttp.configs": ["config.yml"]},
    install_requires=[
        "requests",
        "urllib3",
        "typer",
        "pydantic>=2",
        "python-dotenv",
        "PyYAML",
        "rich",
    ],
    extras_require={
        "test": ["pytest", "requests-mock"],
    },
    entry_points={
        "console_scripts": ["fluenthttp=fluenthttp.cli.main:app"],
    },
    python_requires=">=3.9",
)
