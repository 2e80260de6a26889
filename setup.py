from os import path

from setuptools import find_packages, setup

here = path.abspath(path.dirname(__file__))

with open(path.join(here, "README.md")) as f:
    long_description = f.read()

setup(
    name="kmpstream",
    use_scm_version={"fallback_version": "0.1.0"},
    setup_requires=["setuptools_scm"],
    description="Batch and streaming Knuth-Morris-Pratt substring search",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[  # Optional
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
    ],
    packages=find_packages(exclude=["tests", "benchmarks", "docs"]),
    python_requires=">=3.8",
    install_requires=["numpy", "numba>=0.49", "pyarrow>=1.0"],
    extras_require={"test": ["pytest", "hypothesis", "flake8"]},
)
