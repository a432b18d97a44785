# setup.py
from setuptools import setup, find_packages

setup(
    name="form-schema",               # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),   # will find form_schema/
    python_requires=">=3.11",
    install_requires=["pandas"],      # submission history as a DataFrame / CSV
    extras_require={"test": ["pytest"]},
    include_package_data=True,        # so we can bundle the JSON contract
    package_data={
        "form_schema.schemas": ["*.json"],
    },
    entry_points={
        "console_scripts": ["form-schema = form_schema.cli:main"],
    },
    description="Schema-driven form rendering, validation and submission collection",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
