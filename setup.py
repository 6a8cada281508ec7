# setup.py
from setuptools import find_packages, setup

setup(
    name="google-geocode-client",
    version="0.1.0",
    description="Google Geocoding API client with cache-aside lookups and normalized responses",
    packages=find_packages(include=["geocode_client", "geocode_client.*"]),
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "redis>=5.0",
        "structlog>=24.1",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
)
