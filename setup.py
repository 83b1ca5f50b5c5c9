from setuptools import setup, find_packages

setup(
    name="typedmatrix",
    version="0.1",
    description="Dense two-dimensional matrices with typed elements",
    long_description=("Dense two-dimensional matrices of objects, booleans, characters, integers and doubles, "
                      "with element access, diagonals, bulk updates, reshaping, tiling, rotation, "
                      "lazy streams and optional parallel execution of bulk operations"),
    long_description_content_type="text/plain",
    license="Apache License 2.0",
    python_requires=">=3.7",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=["numpy", "scipy", "psutil"],
    extras_require={"test": ["pytest", "pytest-timeout"]},
    classifiers=[
        "Intended Audience :: Science/Research", "Development Status :: 3 - Alpha", "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10", "Programming Language :: Python :: 3.11", "Programming Language :: Python :: 3.12",
        "Natural Language :: English", "Operating System :: OS Independent", "Topic :: Scientific/Engineering :: Mathematics"
    ],
    keywords=["matrix", "grid", "two-dimensional array"],
    zip_safe=False,
)
