import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="urikit",
    version="1.0.0",
    description="RFC 3986 URI parsing, normalisation and reference resolution",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    python_requires=">=3.7",
    install_requires=[
        "appdirs",
        "click",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "urikit=urikit.cli.urikit:main",
        ],
    },
)
