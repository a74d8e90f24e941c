from setuptools import setup, find_packages

setup(
    name="weatherbar",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.24",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "tests": ["pytest>=7"],
    },
    description="Menu-bar current weather: OpenWeatherMap client and refresh controller.",
    author="chriscoveyduck",
    author_email="",
    include_package_data=True,
)
