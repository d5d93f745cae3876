from setuptools import setup, find_packages

setup(
    name="gonit-api",
    version="0.1.0",
    description="Python client for the gonit process supervisor's JSON-RPC control API",
    author="gonit contributors",
    packages=find_packages(include=["gonit_api", "gonit_api.*"]),
    install_requires=[
        "opentelemetry-api>=1.14.0",
        "opentelemetry-sdk>=1.14.0",
        "opentelemetry-exporter-otlp>=1.14.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
            "black",
            "isort",
            "pylint",
        ],
    },
    entry_points={
        "console_scripts": [
            "gonit-api=gonit_api.cli:main",
        ],
    },
    python_requires=">=3.9",
)
